# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Tests for exporting and reloading box defaults."""

import json

import pytest
import yaml

from devbox.defaults import BOX_DEFAULTS, as_constants
from devbox.errors import DefaultsFileError
from devbox.models.box_defaults import Track
from devbox.serialization import (
    dump_defaults,
    format_for_path,
    load_defaults,
    load_document,
    parse_document,
    parse_defaults,
    write_defaults,
)


class TestRoundTrip:
    """Serializing and reloading yields identical key/value pairs."""

    @pytest.mark.parametrize("fmt", ["yaml", "json"])
    def test_round_trip(self, fmt):
        reloaded = parse_defaults(dump_defaults(BOX_DEFAULTS, fmt), fmt)
        assert dict(reloaded) == dict(BOX_DEFAULTS)
        assert as_constants(reloaded) == as_constants()

    @pytest.mark.parametrize("suffix", [".yml", ".yaml", ".json"])
    def test_file_round_trip(self, tmp_path, suffix):
        path = write_defaults(tmp_path / f"boxes{suffix}")
        assert path.exists()
        assert dict(load_defaults(path)) == dict(BOX_DEFAULTS)

    def test_reloaded_table_is_read_only(self):
        reloaded = parse_defaults(dump_defaults())
        with pytest.raises(TypeError):
            reloaded[Track.SERVER] = BOX_DEFAULTS[Track.V49]


class TestDump:
    def test_yaml_layout(self):
        data = yaml.safe_load(dump_defaults(fmt="yaml"))
        assert data["version"] == "1.0"
        assert data["vagrant_required_version"] == ">= 2.2.0"
        assert list(data["boxes"]) == ["server", "netnext", "v419", "v49"]
        assert data["boxes"]["netnext"] == {"box": "cilium/ubuntu-next", "version": "87"}

    def test_yaml_keeps_versions_as_strings(self):
        data = yaml.safe_load(dump_defaults(fmt="yaml"))
        assert data["boxes"]["server"]["version"] == "193"

    def test_json(self):
        data = json.loads(dump_defaults(fmt="json"))
        assert data["boxes"]["v419"] == {"box": "cilium/ubuntu-4-19", "version": "35"}

    def test_without_vagrant_requirement(self):
        data = yaml.safe_load(dump_defaults(vagrant_required_version=None))
        assert "vagrant_required_version" not in data

    def test_env(self):
        lines = dump_defaults(fmt="env").splitlines()
        assert lines[0] == "VAGRANT_REQUIRED_VERSION='>= 2.2.0'"
        assert "SERVER_BOX=cilium/ubuntu-dev" in lines
        assert "V49_SERVER_VERSION=193" in lines
        assert len(lines) == 9

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            dump_defaults(fmt="toml")


class TestLoad:
    def test_hand_written_yaml(self, tmp_path, defaults_yaml):
        path = tmp_path / "boxes.yml"
        path.write_text(defaults_yaml)
        document = load_document(path)
        assert document.vagrant_required_version == ">= 2.2.0"
        assert dict(document.to_defaults()) == dict(BOX_DEFAULTS)

    def test_unquoted_versions(self):
        text = (
            "version: 1.0\n"
            "boxes:\n"
            "  server: {box: cilium/ubuntu-dev, version: 200}\n"
            "  netnext: {box: cilium/ubuntu-next, version: 87}\n"
            "  v419: {box: cilium/ubuntu-4-19, version: 35}\n"
            "  v49: {box: cilium/ubuntu, version: 193}\n"
        )
        assert parse_defaults(text)[Track.SERVER].version == "200"

    def test_missing_document_version_defaults(self, defaults_yaml):
        text = "\n".join(line for line in defaults_yaml.splitlines() if not line.startswith("version"))
        assert dict(parse_defaults(text)) == dict(BOX_DEFAULTS)

    def test_unsupported_document_version(self, defaults_yaml):
        text = defaults_yaml.replace('version: "1.0"', 'version: "2.0"')
        with pytest.raises(DefaultsFileError) as exc_info:
            parse_defaults(text)
        assert "Unsupported document version" in str(exc_info.value)
        assert exc_info.value.hint == "Supported version: 1.0"

    def test_malformed_yaml(self):
        with pytest.raises(DefaultsFileError, match="Malformed yaml"):
            parse_defaults("boxes: [")

    def test_malformed_json(self):
        with pytest.raises(DefaultsFileError, match="Malformed json"):
            parse_defaults("{", "json")

    def test_not_a_mapping(self):
        with pytest.raises(DefaultsFileError, match="mapping"):
            parse_defaults("- server\n- netnext\n")

    def test_duplicate_track_yaml(self, defaults_yaml):
        text = defaults_yaml + "  server: {box: other/box, version: '1'}\n"
        with pytest.raises(DefaultsFileError, match="duplicate key 'server'"):
            parse_defaults(text)

    def test_duplicate_key_nested_yaml(self, defaults_yaml):
        text = defaults_yaml.replace("version: '87'", "version: '87', version: '88'")
        with pytest.raises(DefaultsFileError, match="duplicate key 'version'"):
            parse_defaults(text)

    def test_duplicate_track_json(self):
        text = dump_defaults(fmt="json").replace(
            '"server": {', '"server": {"box": "other/box", "version": "1"}, "server": {', 1
        )
        with pytest.raises(DefaultsFileError, match="duplicate key 'server'"):
            parse_defaults(text, "json")

    def test_unquoted_float_version(self, defaults_yaml):
        text = defaults_yaml.replace("version: '35'", "version: 1.10")
        with pytest.raises(DefaultsFileError, match="quote it"):
            parse_defaults(text)

    def test_invalid_vagrant_requirement(self, defaults_yaml):
        text = defaults_yaml.replace('">= 2.2.0"', '"banana"')
        with pytest.raises(DefaultsFileError, match="vagrant_required_version"):
            parse_defaults(text)

    def test_multi_constraint_vagrant_requirement(self, defaults_yaml):
        text = defaults_yaml.replace('">= 2.2.0"', '">= 2.2.0, < 3"')
        assert parse_document(text).vagrant_required_version == ">= 2.2.0, < 3"

    def test_invalid_box(self, defaults_yaml):
        text = defaults_yaml.replace("cilium/ubuntu-next", "ubuntu-next")
        with pytest.raises(DefaultsFileError, match="Invalid box defaults"):
            parse_defaults(text)

    def test_env_is_export_only(self):
        with pytest.raises(DefaultsFileError, match="cannot be loaded"):
            parse_defaults(dump_defaults(fmt="env"), "env")

    def test_error_includes_path(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("boxes: {}\n")
        with pytest.raises(DefaultsFileError) as exc_info:
            load_defaults(path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DefaultsFileError, match="Cannot read file"):
            load_defaults(tmp_path / "missing.yml")


class TestFormatForPath:
    def test_known_suffixes(self, tmp_path):
        assert format_for_path(tmp_path / "a.YML") == "yaml"
        assert format_for_path(tmp_path / "a.yaml") == "yaml"
        assert format_for_path(tmp_path / "a.json") == "json"
        assert format_for_path(tmp_path / "a.env") == "env"

    def test_unknown_suffix(self, tmp_path):
        with pytest.raises(DefaultsFileError) as exc_info:
            format_for_path(tmp_path / "boxes.toml")
        assert ".json" in exc_info.value.hint

    def test_write_with_explicit_format(self, tmp_path):
        path = write_defaults(tmp_path / "boxes.txt", fmt="env")
        assert "NETNEXT_SERVER_VERSION=87" in path.read_text()
