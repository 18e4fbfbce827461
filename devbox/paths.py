# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized path definitions for devbox.

Usage:
    from devbox.paths import HostPaths

    log_file = HostPaths.log_file()
"""

import os
from pathlib import Path


class HostPaths:
    """Paths on the host machine where the devbox CLI runs."""

    @staticmethod
    def state_dir() -> Path:
        """$XDG_STATE_HOME/devbox/ (defaults to ~/.local/state/devbox/)"""
        xdg_state = os.environ.get("XDG_STATE_HOME")
        if xdg_state:
            return Path(xdg_state) / "devbox"
        return Path.home() / ".local" / "state" / "devbox"

    @staticmethod
    def log_dir() -> Path:
        """~/.local/state/devbox/logs/"""
        return HostPaths.state_dir() / "logs"

    @staticmethod
    def log_file() -> Path:
        """~/.local/state/devbox/logs/devbox.log"""
        return HostPaths.log_dir() / "devbox.log"
