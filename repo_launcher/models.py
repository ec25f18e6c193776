"""Core dataclasses for repositories and the launcher configuration.

All models are designed for JSON serialization using dacite.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import dacite

DEFAULT_EDITOR = "code"


@dataclass
class Repository:
    """A locally cloned repository, identified by its directory name."""

    path: str = ""  # Absolute filesystem path
    name: str = ""  # Directory basename
    editor: str | None = None  # Stored editor preference


@dataclass
class LauncherConfig:
    """Persistent launcher configuration."""

    default_editor: str = DEFAULT_EDITOR
    repositories: dict[str, Repository] = field(default_factory=dict)

    def get_repository(self, name: str) -> Repository | None:
        """Return the stored entry for a repository, or None if absent."""
        return self.repositories.get(name)

    def stored_editor(self, name: str) -> str | None:
        """Return the non-empty editor preference for a repository, if any."""
        repo = self.get_repository(name)
        if repo is None or not repo.editor:
            return None
        return repo.editor

    def update_repository_editor(
        self, name: str, editor: str, path: str | None = None
    ) -> Repository:
        """Upsert the editor preference for a repository.

        This only mutates the in-memory config; call save_config() to persist.

        Args:
            name: Repository name (the config map key).
            editor: Editor command to remember.
            path: Absolute repository path to record alongside, if known.

        Returns:
            The updated (or newly created) Repository entry.
        """
        repo = self.repositories.get(name)
        if repo is None:
            repo = Repository(name=name)
            self.repositories[name] = repo
        repo.editor = editor
        if path:
            repo.path = path
        if not repo.name:
            repo.name = name
        return repo


# =============================================================================
# Serialization Helpers
# =============================================================================


def repository_to_dict(repo: Repository) -> dict[str, Any]:
    """Convert a Repository to a dict, omitting an empty editor."""
    data = asdict(repo)
    if not data.get("editor"):
        data.pop("editor", None)
    return data


def model_to_dict(config: LauncherConfig) -> dict[str, Any]:
    """Convert a LauncherConfig to a dictionary for JSON serialization."""
    return {
        "default_editor": config.default_editor,
        "repositories": {
            name: repository_to_dict(repo)
            for name, repo in config.repositories.items()
        },
    }


def load_config_from_dict(data: dict[str, Any]) -> LauncherConfig:
    """Load LauncherConfig from a dictionary (parsed JSON).

    A null or missing repositories map is normalized to an empty dict.

    Raises:
        dacite.DaciteError: If the data does not match the schema.
    """
    data = dict(data)
    if data.get("repositories") is None:
        data["repositories"] = {}
    if data.get("default_editor") is None:
        data.pop("default_editor", None)
    return dacite.from_dict(
        data_class=LauncherConfig,
        data=data,
        config=dacite.Config(check_types=True),
    )
