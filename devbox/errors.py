# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Exceptions raised by devbox.

These bubble up to the CLI's handle_errors decorator, which renders them as
panels with the hint underneath.
"""

from pathlib import Path
from typing import Optional, Sequence


class BoxDefaultsError(Exception):
    """Base class for devbox errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class UnknownTrackError(BoxDefaultsError):
    """Raised when a track name has no box default."""

    def __init__(self, track: str, valid: Sequence[str]):
        self.track = track
        self.valid = list(valid)
        super().__init__(
            f"Unknown track: {track!r}",
            hint=f"Valid tracks: {', '.join(self.valid)}",
        )


class DefaultsFileError(BoxDefaultsError):
    """Raised when a serialized defaults file cannot be read or validated."""

    def __init__(self, path: Optional[Path], message: str, hint: Optional[str] = None):
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{message}", hint=hint)


class VagrantVersionError(BoxDefaultsError):
    """Raised when the installed Vagrant is missing or does not meet the requirement."""

    def __init__(self, message: str, installed: Optional[str], requirement: str):
        self.installed = installed
        self.requirement = requirement
        super().__init__(message, hint=f"Install Vagrant {requirement}")
