"""Editor registry and detection.

This module holds the static catalog of editor commands the launcher offers
and checks which of them resolve on the executable search path.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys

logger = logging.getLogger(__name__)


# General-purpose editors, offered first.
COMMON_EDITORS: tuple[str, ...] = (
    "code",
    "subl",
    "atom",
    "vim",
    "emacs",
    "notepad++",
)

# JetBrains IDE launchers.
JETBRAINS_EDITORS: tuple[str, ...] = (
    "phpstorm",
    "goland",
    "idea",
    "webstorm",
    "pycharm",
    "clion",
    "datagrip",
    "rider",
    "rubymine",
    "android-studio",
)

KNOWN_EDITORS: tuple[str, ...] = COMMON_EDITORS + JETBRAINS_EDITORS

# Used when no editor is configured and $EDITOR is unset.
WINDOWS_FALLBACK_EDITOR = "notepad.exe"
POSIX_FALLBACK_EDITOR = "nano"


def is_valid_editor(editor: str) -> bool:
    """Check whether an editor command resolves on PATH.

    Args:
        editor: Command name or path (e.g., "code", "/usr/bin/vim").

    Returns:
        True if the command can be found, False otherwise.
    """
    if not editor:
        return False
    return shutil.which(editor) is not None


def detect_installed_editors() -> list[str]:
    """Return the known editors that are installed, in registry order."""
    installed = [editor for editor in KNOWN_EDITORS if is_valid_editor(editor)]
    logger.debug("Detected editors: %s", ", ".join(installed) or "none")
    return installed


def get_fallback_editor() -> str:
    """Get the editor to use when none was chosen.

    Returns:
        $EDITOR if set, otherwise notepad.exe on Windows and nano elsewhere.
    """
    editor = os.environ.get("EDITOR", "").strip()
    if editor:
        return editor
    if sys.platform.startswith("win"):
        return WINDOWS_FALLBACK_EDITOR
    return POSIX_FALLBACK_EDITOR
