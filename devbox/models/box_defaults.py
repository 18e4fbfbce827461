# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Pydantic models for box defaults and their serialized document."""

import re
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from devbox.version_spec import parse_requirements


# <namespace>/<name>, as published on Vagrant Cloud
# Examples: cilium/ubuntu-dev, generic/debian11, hashicorp/precise64
BOX_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*/[A-Za-z0-9][A-Za-z0-9._-]*$")

# Box versions are opaque tokens ("193", "2024.01.15", "v2")
BOX_VERSION_PATTERN = re.compile(r"^\S+$")

DOCUMENT_VERSION = "1.0"


class Track(str, Enum):
    """Target environment variant a box is built for."""

    SERVER = "server"
    NETNEXT = "netnext"
    V419 = "v419"
    V49 = "v49"

    @property
    def constant_prefix(self) -> str:
        """Prefix of the constant names for this track (e.g. NETNEXT_SERVER)."""
        if self is Track.SERVER:
            return "SERVER"
        return f"{self.name}_SERVER"

    def __str__(self) -> str:
        return self.value


class BoxEntry(BaseModel):
    """A box identifier and version pair."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    box: str
    version: str

    @field_validator("box")
    @classmethod
    def validate_box(cls, v: str) -> str:
        if not BOX_NAME_PATTERN.match(v):
            raise ValueError(f"Box must look like '<namespace>/<name>', got {v!r}")
        return v

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, v: Any) -> Any:
        # Hand-written YAML often leaves versions unquoted
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        elif isinstance(v, float):
            # 1.10 would come back as "1.1"
            raise ValueError(f"Version {v!r} is a number, quote it (e.g. version: \"{v}\")")
        if isinstance(v, str) and not BOX_VERSION_PATTERN.match(v):
            raise ValueError(f"Version must be a non-empty token, got {v!r}")
        return v


class BoxDefault(BoxEntry):
    """Default box for one track."""

    track: Track

    def constant_names(self) -> Tuple[str, str]:
        """Names of the box and version constants for this entry."""
        prefix = self.track.constant_prefix
        return f"{prefix}_BOX", f"{prefix}_VERSION"


class BoxDefaultsDocument(BaseModel):
    """Serialized box defaults (YAML or JSON).

    Example:
        version: "1.0"
        vagrant_required_version: ">= 2.2.0"
        boxes:
          server: {box: cilium/ubuntu-dev, version: "193"}
          ...
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal["1.0"] = DOCUMENT_VERSION
    vagrant_required_version: Optional[str] = None
    boxes: Dict[Track, BoxEntry]

    @field_validator("vagrant_required_version")
    @classmethod
    def validate_vagrant_required_version(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_requirements(v)
        return v

    @model_validator(mode="after")
    def require_all_tracks(self) -> "BoxDefaultsDocument":
        missing = [track.value for track in Track if track not in self.boxes]
        if missing:
            raise ValueError(f"Missing tracks: {', '.join(missing)}")
        return self

    @classmethod
    def from_defaults(
        cls,
        defaults: Mapping[Track, BoxDefault],
        vagrant_required_version: Optional[str] = None,
    ) -> "BoxDefaultsDocument":
        boxes = {
            track: BoxEntry(box=entry.box, version=entry.version)
            for track, entry in defaults.items()
        }
        return cls(boxes=boxes, vagrant_required_version=vagrant_required_version)

    def to_defaults(self) -> Dict[Track, BoxDefault]:
        """Convert to a track mapping in declaration order."""
        return {
            track: BoxDefault(track=track, box=self.boxes[track].box, version=self.boxes[track].version)
            for track in Track
        }
