# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pytest fixtures for devbox tests."""

import os
import tempfile
from pathlib import Path

import pytest

# Keep test runs out of the user's log directory. Must be set before any
# devbox module requests a logger.
os.environ.setdefault("DEVBOX_LOG_FILE", str(Path(tempfile.gettempdir()) / "devbox-tests.log"))


@pytest.fixture
def runner():
    """Click test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def defaults_yaml():
    """YAML text for a complete, valid defaults document."""
    return (
        'version: "1.0"\n'
        'vagrant_required_version: ">= 2.2.0"\n'
        "boxes:\n"
        "  server: {box: cilium/ubuntu-dev, version: '193'}\n"
        "  netnext: {box: cilium/ubuntu-next, version: '87'}\n"
        "  v419: {box: cilium/ubuntu-4-19, version: '35'}\n"
        "  v49: {box: cilium/ubuntu, version: '193'}\n"
    )
