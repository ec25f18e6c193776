"""Shared fixtures for launcher tests."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest


class FakePrompter:
    """Prompter that answers from queues and records every question."""

    def __init__(
        self,
        selections: Sequence[str] = (),
        texts: Sequence[str] = (),
        confirms: Sequence[bool] = (),
    ) -> None:
        self.selections = list(selections)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.asked: list[tuple[str, str]] = []
        self.select_calls: list[tuple[str, list[str], str | None]] = []

    def select(self, message: str, options: Sequence[str], default: str | None = None) -> str:
        self.asked.append(("select", message))
        self.select_calls.append((message, list(options), default))
        return self.selections.pop(0)

    def text(self, message: str) -> str:
        self.asked.append(("text", message))
        return self.texts.pop(0)

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(("confirm", message))
        return self.confirms.pop(0)


@pytest.fixture
def github_dir(tmp_path: Path) -> Path:
    """A repositories directory with two repos and a stray file."""
    base = tmp_path / "Documents" / "GitHub"
    base.mkdir(parents=True)
    (base / "MyRepo").mkdir()
    (base / "other").mkdir()
    (base / "notes.txt").write_text("not a repo")
    return base


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location for a config file that does not exist yet."""
    return tmp_path / ".get" / "config.json"


@pytest.fixture
def launched() -> list[tuple[str, str]]:
    """Records (repository name, editor) for each launch."""
    return []


@pytest.fixture
def fake_launch(launched):
    """Launch function that records instead of spawning a process."""

    def _launch(repository, editor):
        launched.append((repository.name, editor))
        return 0

    return _launch
