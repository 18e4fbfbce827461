# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Pydantic models for devbox."""

from devbox.models.box_defaults import BoxDefault, BoxDefaultsDocument, BoxEntry, Track

__all__ = ["BoxDefault", "BoxDefaultsDocument", "BoxEntry", "Track"]
