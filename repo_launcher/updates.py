"""Update check, self-upgrade, and self-uninstall.

The update check asks PyPI for the latest release of the distribution that
upgrade installs. Upgrade and uninstall delegate to pip for the running
interpreter.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass

import httpx
from packaging.version import InvalidVersion, Version

from .exceptions import UninstallError, UpdateCheckError, UpgradeError, record_error

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "repo-launcher"
UPDATE_CHECK_URL = f"https://pypi.org/pypi/{DISTRIBUTION_NAME}/json"
UPDATE_CHECK_TIMEOUT = 3.0
DEV_VERSION = "dev"


@dataclass
class UpdateInfo:
    """A newer release than the running one."""

    current: str
    latest: str


def parse_version(version: str) -> Version:
    """Parse a release version for comparison.

    A leading "v" is accepted and pre-releases sort before their final
    release, so "1.2.0-rc1" < "1.2.0" and "1.2" == "1.2.0".

    Raises:
        InvalidVersion: If the string is not a valid version (a ValueError).
    """
    return Version(version.strip())


def check_for_updates(
    current_version: str,
    *,
    client: httpx.Client | None = None,
    url: str = UPDATE_CHECK_URL,
    timeout: float = UPDATE_CHECK_TIMEOUT,
) -> UpdateInfo | None:
    """
    Check PyPI for a release of DISTRIBUTION_NAME newer than current_version.

    Args:
        current_version: Version of the running launcher. "dev" skips the check.
        client: Optional httpx client (a short-lived one is created otherwise).
        url: PyPI JSON endpoint for the distribution.
        timeout: Request timeout in seconds.

    Returns:
        UpdateInfo if a newer release exists, otherwise None.

    Raises:
        UpdateCheckError: On network failure, a non-200 response, or an
            unparseable release payload.
    """
    if current_version == DEV_VERSION:
        return None

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        response = http.get(url, headers={"Accept": "application/json"})
    except httpx.HTTPError as e:
        logger.debug("Update check request failed: %s", e)
        record_error(e)
        raise UpdateCheckError(
            f"failed to check for updates: {e}", url=url, cause=e
        ) from e
    finally:
        if owns_client:
            http.close()

    if response.status_code != httpx.codes.OK:
        raise UpdateCheckError(
            f"failed to fetch latest release: status code {response.status_code}",
            url=url,
        )

    try:
        latest = response.json()["info"]["version"]
        latest_version = parse_version(latest)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise UpdateCheckError(
            f"failed to parse release info: {e}", url=url, cause=e
        ) from e

    try:
        current = parse_version(current_version)
    except InvalidVersion as e:
        raise UpdateCheckError(f"invalid current version: {e}", cause=e) from e

    if latest_version > current:
        logger.info("Update available: %s (current: %s)", latest, current_version)
        return UpdateInfo(current=current_version, latest=latest)
    return None


def _pip_command(*args: str) -> list[str]:
    return [sys.executable, "-m", "pip", *args]


def upgrade() -> None:
    """Upgrade the installed launcher with pip, streaming its output.

    Raises:
        UpgradeError: If pip cannot be started or exits non-zero.
    """
    command = _pip_command("install", "--upgrade", DISTRIBUTION_NAME)
    logger.info("Running upgrade: %s", " ".join(command))
    try:
        result = subprocess.run(command, check=False)
    except OSError as e:
        record_error(e)
        raise UpgradeError(f"Upgrade failed: {e}", cause=e) from e
    if result.returncode != 0:
        raise UpgradeError(
            f"Upgrade failed: pip exited with status {result.returncode}",
            returncode=result.returncode,
        )


def uninstall() -> None:
    """Remove the launcher distribution with pip.

    Raises:
        UninstallError: If pip cannot be started or exits non-zero.
    """
    command = _pip_command("uninstall", "-y", DISTRIBUTION_NAME)
    logger.info("Running uninstall: %s", " ".join(command))
    try:
        result = subprocess.run(command, check=False)
    except OSError as e:
        record_error(e)
        raise UninstallError(f"Error uninstalling: {e}", cause=e) from e
    if result.returncode != 0:
        raise UninstallError(
            f"Error uninstalling: pip exited with status {result.returncode}",
            returncode=result.returncode,
        )
