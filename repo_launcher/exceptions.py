"""Custom exception hierarchy for the repository launcher.

Every failure the launcher reports derives from LauncherError so the CLI can
print a single line and exit non-zero. Errors carry a context dict for the
log file and keep the low-level cause around for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class LauncherError(Exception):
    """Base exception for all launcher errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(LauncherError):
    """Base class for configuration-related errors."""

    pass


class ConfigReadError(ConfigError):
    """Raised when the configuration file exists but cannot be read."""

    def __init__(
        self,
        message: str = "Failed to read configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid JSON or schema."""

    def __init__(
        self,
        message: str = "Failed to parse configuration",
        *,
        file_path: str | None = None,
        line: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        if line is not None:
            ctx["line"] = line
        super().__init__(message, context=ctx, cause=cause)


class ConfigWriteError(ConfigError):
    """Raised when the configuration cannot be written to disk."""

    def __init__(
        self,
        message: str = "Failed to save configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Repository Errors
# =============================================================================


class RepositoryError(LauncherError):
    """Base class for repository lookup errors."""

    pass


class RepositoryScanError(RepositoryError):
    """Raised when the repositories directory cannot be listed."""

    def __init__(
        self,
        message: str = "Error reading GitHub folder",
        *,
        directory: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if directory:
            ctx["directory"] = directory
        super().__init__(message, context=ctx, cause=cause)


class RepositoryNotFoundError(RepositoryError):
    """Raised when no repository matches the requested name."""

    def __init__(
        self,
        message: str = "Repository not found.",
        *,
        query: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if query is not None:
            ctx["query"] = query
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Editor Errors
# =============================================================================


class EditorError(LauncherError):
    """Base class for editor-related errors."""

    pass


class EditorLaunchError(EditorError):
    """Raised when the editor process cannot be started."""

    def __init__(
        self,
        message: str = "Failed to start editor",
        *,
        editor: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if editor:
            ctx["editor"] = editor
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Prompt Errors
# =============================================================================


class PromptError(LauncherError):
    """Base class for interactive prompt errors."""

    pass


class PromptAbortedError(PromptError):
    """Raised when the user cancels a prompt (Ctrl-C or end of input)."""

    def __init__(
        self,
        message: str = "Prompt cancelled",
        *,
        question: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if question:
            ctx["question"] = question
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Update Errors
# =============================================================================


class UpdateError(LauncherError):
    """Base class for update, upgrade, and uninstall errors."""

    pass


class UpdateCheckError(UpdateError):
    """Raised when the latest release cannot be determined."""

    def __init__(
        self,
        message: str = "Failed to check for updates",
        *,
        url: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class UpgradeError(UpdateError):
    """Raised when the self-upgrade command fails."""

    def __init__(
        self,
        message: str = "Upgrade failed",
        *,
        returncode: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message, context=ctx, cause=cause)


class UninstallError(UpdateError):
    """Raised when the self-uninstall command fails."""

    def __init__(
        self,
        message: str = "Error uninstalling",
        *,
        returncode: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry for Categorization
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for debugging."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 50

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)


# Global error stats tracker
error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)
