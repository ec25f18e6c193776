"""Repository discovery, matching, and opening.

Repositories are the immediate subdirectories of ~/Documents/GitHub. Nothing
about them is persisted here; see config.py for stored preferences.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Sequence

from .editors import get_fallback_editor
from .exceptions import (
    EditorLaunchError,
    RepositoryNotFoundError,
    RepositoryScanError,
    record_error,
)
from .models import Repository

logger = logging.getLogger(__name__)


def get_repositories_dir() -> Path:
    """Return the directory scanned for repositories.

    Path.home() reads HOME, or USERPROFILE on Windows.
    """
    return Path.home() / "Documents" / "GitHub"


def find_repositories(base_dir: Path | None = None) -> list[Repository]:
    """
    List repository candidates.

    Only immediate subdirectories are returned, in directory-listing order.
    Regular files are skipped and nothing is recursed into.

    Args:
        base_dir: Directory to scan (defaults to ~/Documents/GitHub).

    Returns:
        List of Repository objects (possibly empty).

    Raises:
        RepositoryScanError: If the directory cannot be listed.
    """
    github_dir = base_dir or get_repositories_dir()

    repos: list[Repository] = []
    try:
        with os.scandir(github_dir) as entries:
            for entry in entries:
                if entry.is_dir():
                    repos.append(
                        Repository(
                            path=os.path.abspath(entry.path),
                            name=entry.name,
                        )
                    )
    except OSError as e:
        logger.error("Failed to list %s: %s", github_dir, e)
        record_error(e)
        raise RepositoryScanError(
            f"Error reading GitHub folder: {e.strerror or e}",
            directory=str(github_dir),
            cause=e,
        ) from e

    logger.debug("Found %d repositories in %s", len(repos), github_dir)
    return repos


def match_repository(repositories: Sequence[Repository], query: str) -> Repository:
    """Find the first repository whose name contains the query.

    Matching is a case-insensitive substring test; candidates are checked
    in the order given.

    Raises:
        RepositoryNotFoundError: If nothing matches.
    """
    needle = query.lower()
    for repo in repositories:
        if needle in repo.name.lower():
            logger.debug("Matched %r to %s", query, repo.name)
            return repo

    logger.info("No repository matches %r", query)
    raise RepositoryNotFoundError(query=query)


def open_repository(repository: Repository, editor: str | None = None) -> int:
    """
    Open a repository in an editor.

    Runs ``editor <path>`` with the launcher's stdout/stderr and waits for it.
    The editor's exit status is logged but not treated as a failure.

    Args:
        repository: Repository to open.
        editor: Editor command; falls back to $EDITOR or a platform default.

    Returns:
        The editor process's exit code.

    Raises:
        EditorLaunchError: If the editor process could not be started.
    """
    command = editor or get_fallback_editor()
    logger.info("Opening %s with %s", repository.path, command)

    try:
        result = subprocess.run([command, repository.path], check=False)
    except OSError as e:
        logger.error("Failed to start editor %s: %s", command, e)
        record_error(e)
        raise EditorLaunchError(
            f"Failed to start editor '{command}': {e.strerror or e}",
            editor=command,
            cause=e,
        ) from e

    if result.returncode != 0:
        logger.warning("Editor %s exited with status %d", command, result.returncode)
    return result.returncode
