"""Interactive prompts.

Thin wrappers around rich.prompt. The launcher only talks to the Prompter
protocol so tests can answer questions without a terminal.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from .exceptions import PromptAbortedError

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Questions the launcher may ask the user."""

    def select(self, message: str, options: Sequence[str], default: str | None = None) -> str:
        ...

    def text(self, message: str) -> str:
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        ...


class RichPrompter:
    """Prompter that renders numbered menus with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select(self, message: str, options: Sequence[str], default: str | None = None) -> str:
        """Show a numbered list and return the chosen option.

        Args:
            message: Question shown above the list.
            options: Choices, displayed in the given order.
            default: Option pre-selected when the user just presses Enter.

        Raises:
            PromptAbortedError: If there is nothing to choose from or the
                user cancels.
        """
        if not options:
            raise PromptAbortedError("Nothing to select", question=message)

        self.console.print(f"[bold]{escape(message)}[/bold]")
        for i, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{i:>2}[/cyan]  {escape(option)}")

        choices = [str(i) for i in range(1, len(options) + 1)]
        default_choice = None
        if default is not None and default in options:
            default_choice = str(list(options).index(default) + 1)

        try:
            if default_choice is None:
                answer = Prompt.ask(
                    "Number", console=self.console, choices=choices, show_choices=False
                )
            else:
                answer = Prompt.ask(
                    "Number",
                    console=self.console,
                    choices=choices,
                    show_choices=False,
                    default=default_choice,
                )
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptAbortedError(question=message, cause=e) from e

        selected = options[int(answer) - 1]
        logger.debug("%s -> %s", message, selected)
        return selected

    def text(self, message: str) -> str:
        """Ask for free text."""
        try:
            return Prompt.ask(message, console=self.console).strip()
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptAbortedError(question=message, cause=e) from e

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        try:
            return Confirm.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptAbortedError(question=message, cause=e) from e
