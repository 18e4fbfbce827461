# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Minimum Vagrant version check.

Requirements use Vagrant's own (RubyGems) syntax, see devbox.version_spec.
Multiple constraints are comma-separated: ">= 2.2.0, < 3".
"""

import re
import subprocess
from typing import Optional

from devbox.defaults import VAGRANT_REQUIRED_VERSION
from devbox.errors import VagrantVersionError
from devbox.utils.logging import get_logger
from devbox.version_spec import parse_requirement, parse_requirements, parse_version, satisfies

logger = get_logger(__name__)

__all__ = [
    "get_vagrant_version",
    "parse_requirement",
    "parse_requirements",
    "parse_version",
    "require_vagrant_version",
    "version_satisfies",
]

_VAGRANT_OUTPUT_RE = re.compile(r"(\d+(?:\.\d+)+)")


def version_satisfies(installed: str, requirement: str = VAGRANT_REQUIRED_VERSION) -> bool:
    """Check whether an installed version meets a requirement."""
    return satisfies(installed, requirement)


def get_vagrant_version() -> Optional[str]:
    """Get the installed Vagrant version.

    Returns:
        Version string (e.g. "2.3.7") or None if Vagrant is not installed or fails.
    """
    try:
        result = subprocess.run(
            ["vagrant", "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
        logger.debug(f"vagrant --version failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"vagrant --version exited with {result.returncode}: {result.stderr.strip()}")
        return None

    match = _VAGRANT_OUTPUT_RE.search(result.stdout)
    return match.group(1) if match else None


def require_vagrant_version(
    installed: Optional[str] = None,
    requirement: str = VAGRANT_REQUIRED_VERSION,
) -> str:
    """Ensure Vagrant meets the requirement.

    Args:
        installed: Version to check (detected with get_vagrant_version if None)
        requirement: Requirement string

    Returns:
        The installed version

    Raises:
        VagrantVersionError: If Vagrant is missing or too old.
    """
    if installed is None:
        installed = get_vagrant_version()
    if installed is None:
        raise VagrantVersionError("Vagrant is not installed", None, requirement)

    if not version_satisfies(installed, requirement):
        raise VagrantVersionError(
            f"Vagrant {installed} does not satisfy {requirement}", installed, requirement
        )

    logger.debug(f"Vagrant {installed} satisfies {requirement}")
    return installed
