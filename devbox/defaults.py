# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Default Vagrant boxes for development VMs - single source of truth.

Each track (default server, net-next kernel, pinned 4.19 and 4.9 kernels)
has exactly one box and one box version. Provisioning code reads the
constants by name:

    from devbox.defaults import SERVER_BOX, SERVER_VERSION

or looks a track up by name:

    from devbox.defaults import get_box_default

    entry = get_box_default("netnext")
    entry.box, entry.version
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Union

from devbox.errors import UnknownTrackError
from devbox.models.box_defaults import BoxDefault, Track

# Oldest Vagrant the boxes are tested against
VAGRANT_REQUIRED_VERSION = ">= 2.2.0"

SERVER_BOX = "cilium/ubuntu-dev"
SERVER_VERSION = "193"
NETNEXT_SERVER_BOX = "cilium/ubuntu-next"
NETNEXT_SERVER_VERSION = "87"
V419_SERVER_BOX = "cilium/ubuntu-4-19"
V419_SERVER_VERSION = "35"
V49_SERVER_BOX = "cilium/ubuntu"
V49_SERVER_VERSION = "193"

BOX_DEFAULTS: Mapping[Track, BoxDefault] = MappingProxyType(
    {
        Track.SERVER: BoxDefault(track=Track.SERVER, box=SERVER_BOX, version=SERVER_VERSION),
        Track.NETNEXT: BoxDefault(
            track=Track.NETNEXT, box=NETNEXT_SERVER_BOX, version=NETNEXT_SERVER_VERSION
        ),
        Track.V419: BoxDefault(track=Track.V419, box=V419_SERVER_BOX, version=V419_SERVER_VERSION),
        Track.V49: BoxDefault(track=Track.V49, box=V49_SERVER_BOX, version=V49_SERVER_VERSION),
    }
)


def tracks() -> List[str]:
    """Names of all tracks in declaration order."""
    return [track.value for track in Track]


def resolve_track(track: Union[Track, str]) -> Track:
    """Resolve a track name to a Track.

    Surrounding whitespace and case are ignored.

    Raises:
        UnknownTrackError: If the name is not a known track.
    """
    if isinstance(track, Track):
        return track
    try:
        return Track(str(track).strip().lower())
    except ValueError:
        raise UnknownTrackError(str(track), tracks()) from None


def get_box_default(
    track: Union[Track, str],
    defaults: Mapping[Track, BoxDefault] = BOX_DEFAULTS,
) -> BoxDefault:
    """Look up the default box for a track.

    Args:
        track: Track or track name (e.g. "server", "v419")
        defaults: Table to look in (the built-in table by default)

    Returns:
        The BoxDefault for the track

    Raises:
        UnknownTrackError: If the track is unknown or missing from the table.
    """
    resolved = resolve_track(track)
    try:
        return defaults[resolved]
    except KeyError:
        raise UnknownTrackError(resolved.value, [t.value for t in defaults]) from None


def list_box_defaults(defaults: Mapping[Track, BoxDefault] = BOX_DEFAULTS) -> List[BoxDefault]:
    """All entries in track declaration order."""
    return [defaults[track] for track in Track if track in defaults]


def as_constants(defaults: Mapping[Track, BoxDefault] = BOX_DEFAULTS) -> Dict[str, str]:
    """Flatten a table into {CONSTANT_NAME: value}, e.g. {"SERVER_BOX": "cilium/ubuntu-dev"}."""
    constants: Dict[str, str] = {}
    for entry in list_box_defaults(defaults):
        box_name, version_name = entry.constant_names()
        constants[box_name] = entry.box
        constants[version_name] = entry.version
    return constants
