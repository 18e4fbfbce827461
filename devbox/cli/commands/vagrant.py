# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Vagrant version check command."""

import click

from devbox.cli import cli
from devbox.cli.helpers import handle_errors
from devbox.defaults import VAGRANT_REQUIRED_VERSION
from devbox.utils.logging import get_logger
from devbox.vagrant import require_vagrant_version

logger = get_logger(__name__)


@cli.command()
@click.option(
    "--requirement",
    "-r",
    default=VAGRANT_REQUIRED_VERSION,
    show_default=True,
    help="Version requirement, e.g. '>= 2.2.0' or '~> 2.3'",
)
@handle_errors
def vagrant(requirement: str):
    """Check that the installed Vagrant can run the default boxes."""
    installed = require_vagrant_version(requirement=requirement)
    logger.success(f"Vagrant {installed} satisfies {requirement}")
