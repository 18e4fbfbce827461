# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Export and reload box defaults.

Formats:
- yaml: BoxDefaultsDocument as YAML (default)
- json: BoxDefaultsDocument as JSON
- env:  shell assignments named after the constants (export only)
"""

import json
import shlex
from collections.abc import Hashable
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from devbox.defaults import BOX_DEFAULTS, VAGRANT_REQUIRED_VERSION, as_constants
from devbox.errors import DefaultsFileError
from devbox.models.box_defaults import DOCUMENT_VERSION, BoxDefault, BoxDefaultsDocument, Track
from devbox.utils.logging import get_logger

logger = get_logger(__name__)

FORMATS = ("yaml", "json", "env")
LOADABLE_FORMATS = ("yaml", "json")

FORMAT_SUFFIXES = {
    ".yml": "yaml",
    ".yaml": "yaml",
    ".json": "json",
    ".env": "env",
}


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects repeated mapping keys instead of keeping the last one."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                # super() reports unhashable keys
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, value in pairs:
        if key in data:
            raise ValueError(f"found duplicate key {key!r}")
        data[key] = value
    return data


def format_for_path(path: Path) -> str:
    """Infer the serialization format from a file suffix."""
    fmt = FORMAT_SUFFIXES.get(path.suffix.lower())
    if fmt is None:
        raise DefaultsFileError(
            path,
            f"Cannot infer format from suffix {path.suffix!r}",
            hint=f"Use one of: {', '.join(sorted(FORMAT_SUFFIXES))}",
        )
    return fmt


def dump_defaults(
    defaults: Mapping[Track, BoxDefault] = BOX_DEFAULTS,
    fmt: str = "yaml",
    vagrant_required_version: Optional[str] = VAGRANT_REQUIRED_VERSION,
) -> str:
    """Serialize a box defaults table to text.

    Args:
        defaults: Table to serialize
        fmt: One of FORMATS
        vagrant_required_version: Requirement recorded alongside the boxes

    Returns:
        Serialized text ending in a newline
    """
    if fmt == "env":
        lines = []
        if vagrant_required_version:
            lines.append(f"VAGRANT_REQUIRED_VERSION={shlex.quote(vagrant_required_version)}")
        for name, value in as_constants(defaults).items():
            lines.append(f"{name}={shlex.quote(value)}")
        return "\n".join(lines) + "\n"

    document = BoxDefaultsDocument.from_defaults(defaults, vagrant_required_version)
    data = document.model_dump(mode="json", exclude_none=True)

    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"

    raise ValueError(f"Unknown format {fmt!r}, expected one of {', '.join(FORMATS)}")


def write_defaults(
    path: Path,
    defaults: Mapping[Track, BoxDefault] = BOX_DEFAULTS,
    fmt: Optional[str] = None,
) -> Path:
    """Write a box defaults table to a file, inferring the format from its suffix."""
    path = Path(path)
    fmt = fmt or format_for_path(path)
    text = dump_defaults(defaults, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    logger.debug(f"Wrote {fmt} defaults to {path}")
    return path


def parse_document(text: str, fmt: str = "yaml", path: Optional[Path] = None) -> BoxDefaultsDocument:
    """Parse and validate serialized defaults.

    Raises:
        DefaultsFileError: If the text is malformed or fails validation.
    """
    if fmt not in LOADABLE_FORMATS:
        raise DefaultsFileError(
            path,
            f"Format {fmt!r} cannot be loaded",
            hint=f"Loadable formats: {', '.join(LOADABLE_FORMATS)}",
        )

    try:
        if fmt == "yaml":
            data = yaml.load(text, Loader=UniqueKeyLoader)
        else:
            data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except (yaml.YAMLError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        raise DefaultsFileError(path, f"Malformed {fmt}: {e}") from e

    if not isinstance(data, dict):
        raise DefaultsFileError(path, "Expected a mapping at the top level")

    doc_version = data.get("version", DOCUMENT_VERSION)
    if str(doc_version) != DOCUMENT_VERSION:
        raise DefaultsFileError(
            path,
            f"Unsupported document version {doc_version!r}",
            hint=f"Supported version: {DOCUMENT_VERSION}",
        )
    data["version"] = DOCUMENT_VERSION

    try:
        return BoxDefaultsDocument.model_validate(data)
    except ValidationError as e:
        raise DefaultsFileError(path, f"Invalid box defaults:\n{e}") from e


def parse_defaults(text: str, fmt: str = "yaml") -> Mapping[Track, BoxDefault]:
    """Parse serialized defaults into a read-only track table."""
    return MappingProxyType(parse_document(text, fmt).to_defaults())


def load_document(path: Path) -> BoxDefaultsDocument:
    """Load and validate a defaults file."""
    path = Path(path)
    fmt = format_for_path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise DefaultsFileError(path, f"Cannot read file: {e.strerror or e}") from e

    logger.debug(f"Loading {fmt} defaults from {path}")
    return parse_document(text, fmt, path=path)


def load_defaults(path: Path) -> Mapping[Track, BoxDefault]:
    """Load a defaults file into a read-only track table."""
    return MappingProxyType(load_document(path).to_defaults())
