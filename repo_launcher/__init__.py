"""Quickly open local GitHub repositories in your editor.

Scans ~/Documents/GitHub for cloned repositories, lets you pick one by name
fragment or from a list, and opens it in the editor you prefer for that
repository.

Usage:
    get                 # pick a repository interactively
    get open api        # open the first repository whose name contains "api"
    get open api -i     # ignore the stored editor and choose again
"""

__version__ = "0.1.0"
PRODUCT_NAME = "get"

from repo_launcher.config import load_config, save_config, update_repository_editor
from repo_launcher.editors import (
    KNOWN_EDITORS,
    detect_installed_editors,
    get_fallback_editor,
    is_valid_editor,
)
from repo_launcher.exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    EditorLaunchError,
    LauncherError,
    PromptAbortedError,
    RepositoryNotFoundError,
    RepositoryScanError,
)
from repo_launcher.launcher import LaunchResult, RepositoryLauncher
from repo_launcher.models import LauncherConfig, Repository
from repo_launcher.repository import find_repositories, match_repository, open_repository

__all__ = [
    "__version__",
    "PRODUCT_NAME",
    # Flow
    "RepositoryLauncher",
    "LaunchResult",
    # Models
    "LauncherConfig",
    "Repository",
    # Config
    "load_config",
    "save_config",
    "update_repository_editor",
    # Editors
    "KNOWN_EDITORS",
    "detect_installed_editors",
    "get_fallback_editor",
    "is_valid_editor",
    # Repositories
    "find_repositories",
    "match_repository",
    "open_repository",
    # Exceptions
    "LauncherError",
    "ConfigError",
    "ConfigReadError",
    "ConfigParseError",
    "ConfigWriteError",
    "RepositoryScanError",
    "RepositoryNotFoundError",
    "EditorLaunchError",
    "PromptAbortedError",
]
