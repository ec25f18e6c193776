"""Repository resolution and launch flow.

Ties the locator, config store, editor registry, and prompts together:

    fragment -> matching repository -> editor (stored or prompted) -> launch

The config is loaded once per invocation and written back only when an
editor preference changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from . import repository as repo_ops
from .config import load_config, save_config
from .editors import detect_installed_editors
from .exceptions import RepositoryNotFoundError
from .models import LauncherConfig, Repository
from .prompts import Prompter, RichPrompter

logger = logging.getLogger(__name__)

OTHER_EDITOR_OPTION = "Other"


@dataclass
class LaunchResult:
    """Outcome of opening a repository."""

    repository: Repository
    editor: str
    prompted: bool = False  # The user was asked to choose an editor
    saved: bool = False  # The choice was written to the config file


@dataclass
class EditorChoice:
    """An editor picked interactively."""

    editor: str
    remember: bool = False


class RepositoryLauncher:
    """Resolves a repository and opens it in the right editor.

    Collaborators are injectable so the flow can run without a terminal,
    a real home directory, or a real editor.
    """

    def __init__(
        self,
        *,
        config: LauncherConfig | None = None,
        config_path: Path | None = None,
        repositories_dir: Path | None = None,
        prompter: Prompter | None = None,
        detect_editors: Callable[[], list[str]] = detect_installed_editors,
        launch: Callable[[Repository, str], int] = repo_ops.open_repository,
    ) -> None:
        self.config_path = config_path
        self.config = config if config is not None else load_config(config_path)
        self.repositories_dir = repositories_dir
        self.prompter: Prompter = prompter or RichPrompter()
        self._detect_editors = detect_editors
        self._launch = launch

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find_repositories(self) -> list[Repository]:
        """List repository candidates from the repositories directory."""
        return repo_ops.find_repositories(self.repositories_dir)

    def resolve_repository(self, query: str) -> Repository:
        """Return the first repository whose name contains query."""
        return repo_ops.match_repository(self.find_repositories(), query)

    # -------------------------------------------------------------------------
    # Editor resolution
    # -------------------------------------------------------------------------

    def choose_editor(self, repository: Repository, *, ask_remember: bool = True) -> EditorChoice:
        """Ask the user which editor to use for a repository.

        Offers the installed editors plus "Other" for a free-text command.
        The free-text command is not checked against PATH.

        Args:
            repository: Repository being opened.
            ask_remember: Whether to ask if the choice should be stored.

        Returns:
            The chosen editor and whether the user wants it remembered.
        """
        options = [*self._detect_editors(), OTHER_EDITOR_OPTION]
        editor = self.prompter.select(
            "Select an editor:", options, default=self.config.default_editor
        )

        if editor == OTHER_EDITOR_OPTION:
            editor = self.prompter.text("Enter the editor command:")

        remember = False
        if ask_remember:
            remember = self.prompter.confirm(
                f"Do you want to set '{editor}' as the default editor for this repository?",
                default=False,
            )

        logger.debug("Chose editor %s for %s (remember=%s)", editor, repository.name, remember)
        return EditorChoice(editor=editor, remember=remember)

    def remember_editor(self, repository: Repository, editor: str) -> None:
        """Store an editor preference and write the config to disk."""
        self.config.update_repository_editor(repository.name, editor, path=repository.path)
        save_config(self.config, self.config_path)
        logger.info("Saved editor %s for %s", editor, repository.name)

    def resolve_editor(self, repository: Repository, *, ignore_config: bool = False) -> LaunchResult:
        """Decide which editor opens a repository.

        With ignore_config, the user is always prompted and the stored
        preference is only replaced if they ask for it. Otherwise a stored
        preference wins; without one the user is prompted and the choice
        is stored.
        """
        if ignore_config:
            choice = self.choose_editor(repository, ask_remember=True)
            if choice.remember:
                self.remember_editor(repository, choice.editor)
            return LaunchResult(repository, choice.editor, prompted=True, saved=choice.remember)

        stored = self.config.stored_editor(repository.name)
        if stored:
            logger.debug("Using stored editor %s for %s", stored, repository.name)
            return LaunchResult(repository, stored)

        choice = self.choose_editor(repository, ask_remember=False)
        self.remember_editor(repository, choice.editor)
        return LaunchResult(repository, choice.editor, prompted=True, saved=True)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def open(self, query: str, *, ignore_config: bool = False) -> LaunchResult:
        """Open the repository matching query.

        Raises:
            RepositoryScanError: If the repositories directory is unreadable.
            RepositoryNotFoundError: If no repository matches.
            ConfigWriteError: If a new preference cannot be saved.
            PromptAbortedError: If the user cancels a prompt.
            EditorLaunchError: If the editor cannot be started.
        """
        repository = self.resolve_repository(query)
        return self.launch(repository, ignore_config=ignore_config)

    def launch(self, repository: Repository, *, ignore_config: bool = False) -> LaunchResult:
        """Resolve the editor for an already-matched repository and start it."""
        result = self.resolve_editor(repository, ignore_config=ignore_config)
        self._launch(repository, result.editor)
        return result

    def run_interactive(self, *, ignore_config: bool = False) -> LaunchResult:
        """Let the user pick a repository from the list, then open it."""
        repositories = self.find_repositories()
        if not repositories:
            base_dir = self.repositories_dir or repo_ops.get_repositories_dir()
            raise RepositoryNotFoundError(f"No repositories found in {base_dir}")

        name = self.prompter.select("Select a repository:", [r.name for r in repositories])
        # Picked from the list, so take the exact entry instead of re-matching.
        repository = next(r for r in repositories if r.name == name)
        return self.launch(repository, ignore_config=ignore_config)
