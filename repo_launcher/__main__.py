"""Entry point for the ``get`` command and ``python -m repo_launcher``.

Usage:
    # Pick a repository from ~/Documents/GitHub and open it
    get

    # Open the first repository whose name contains "api"
    get open api

    # Choose the editor again even if one is stored
    get open api --ignore-config

    # Maintenance
    get upgrade
    get uninstall
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from repo_launcher import PRODUCT_NAME, __version__
from repo_launcher.exceptions import LauncherError, UpdateCheckError
from repo_launcher.prompts import Prompter, RichPrompter

NO_UPDATE_CHECK_ENV = "GET_NO_UPDATE_CHECK"

logger = logging.getLogger("repo_launcher.cli")


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments."""
    from repo_launcher.logging_config import setup_logging

    if args.debug:
        setup_logging(
            level="DEBUG",
            log_to_console=True,
            log_to_file=not args.no_log_file,
        )
    else:
        setup_logging(
            level=args.log_level,
            log_to_console=False,
            log_to_file=not args.no_log_file,
        )


def _print_error(error: LauncherError, prefix: str | None = None) -> None:
    from repo_launcher.logging_config import log_exception

    log_exception(logger, error, prefix or "Command failed")
    message = f"{prefix}: {error.message}" if prefix else error.message
    print(message, file=sys.stderr)


def _run_update_check(args: argparse.Namespace) -> None:
    """Print a notice when a newer release exists; never fails the command."""
    if args.no_update_check or os.environ.get(NO_UPDATE_CHECK_ENV):
        return

    from repo_launcher.updates import check_for_updates

    try:
        update = check_for_updates(__version__)
    except UpdateCheckError as e:
        print(f"Update check warning: {e.message}")
        return

    if update:
        print(f"A new version is available: {update.latest} (current: {update.current})")
        print(f"Run '{PRODUCT_NAME} upgrade' to update")


# =============================================================================
# CLI Command Handlers
# =============================================================================


def cmd_interactive(args: argparse.Namespace, prompter: Prompter | None = None) -> int:
    """Handle the default command: pick a repository, then open it."""
    from repo_launcher.launcher import RepositoryLauncher

    try:
        launcher = RepositoryLauncher(prompter=prompter)
        launcher.run_interactive(ignore_config=args.ignore_config)
    except LauncherError as e:
        _print_error(e, "Error")
        return 1
    return 0


def cmd_open(args: argparse.Namespace, prompter: Prompter | None = None) -> int:
    """Handle the open command."""
    from repo_launcher.launcher import RepositoryLauncher

    try:
        launcher = RepositoryLauncher(prompter=prompter)
        launcher.open(args.name, ignore_config=args.ignore_config)
    except LauncherError as e:
        _print_error(e, "Error")
        return 1
    return 0


def cmd_upgrade(args: argparse.Namespace) -> int:
    """Handle the upgrade command."""
    from repo_launcher.updates import upgrade

    try:
        upgrade()
    except LauncherError as e:
        _print_error(e)
        return 1
    return 0


def cmd_uninstall(args: argparse.Namespace, prompter: Prompter | None = None) -> int:
    """Handle the uninstall command."""
    from repo_launcher.updates import uninstall

    prompter = prompter or RichPrompter()
    try:
        confirmed = prompter.confirm(
            f"Are you sure you want to uninstall the '{PRODUCT_NAME}' CLI?",
            default=False,
        )
    except LauncherError as e:
        _print_error(e, "Error confirming uninstall")
        return 1

    if not confirmed:
        print("Uninstall canceled.")
        return 0

    try:
        uninstall()
    except LauncherError as e:
        _print_error(e)
        return 1

    print("Uninstalled successfully.")
    return 0


# =============================================================================
# Argument Parser Setup
# =============================================================================


def _add_ignore_config_arg(parser: argparse.ArgumentParser, **kwargs) -> None:
    parser.add_argument(
        "-i",
        "--ignore-config",
        action="store_true",
        **kwargs,
        help="Ignore saved editor configuration and prompt for editor selection",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog=PRODUCT_NAME,
        description="Quickly open GitHub repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick a repository interactively
  get

  # Open the first repository whose name contains "api"
  get open api

  # Choose the editor again, ignoring the saved one
  get open api -i
""",
    )

    # Global arguments
    parser.add_argument(
        "--version",
        action="version",
        version=f"{PRODUCT_NAME} {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file",
    )
    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help=f"Skip the check for a newer release (or set {NO_UPDATE_CHECK_ENV})",
    )
    _add_ignore_config_arg(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # open (also reachable as "get", the original command name)
    open_parser = subparsers.add_parser(
        "open",
        aliases=["get"],
        help="Open a specific repository",
    )
    open_parser.add_argument(
        "name",
        help="Repository name or a fragment of it (case-insensitive)",
    )
    # Left unset unless given here, so a root-level -i is kept
    _add_ignore_config_arg(open_parser, default=argparse.SUPPRESS)

    subparsers.add_parser(
        "upgrade",
        help=f"Upgrade to the latest version of the '{PRODUCT_NAME}' CLI",
    )
    subparsers.add_parser(
        "uninstall",
        help=f"Uninstall the '{PRODUCT_NAME}' CLI",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the launcher."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args)
    _run_update_check(args)

    if args.command in ("open", "get"):
        return cmd_open(args)

    if args.command == "upgrade":
        return cmd_upgrade(args)

    if args.command == "uninstall":
        return cmd_uninstall(args)

    return cmd_interactive(args)


if __name__ == "__main__":
    sys.exit(main())
