# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""devbox CLI package."""

import click

from devbox import __version__
from devbox.utils.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="devbox")
@click.option("--debug", is_flag=True, help="Verbose output (same as DEVBOX_DEBUG=1)")
def cli(debug: bool):
    """devbox - Default Vagrant boxes for development VMs."""
    if debug:
        configure_logging(debug=True, force=True)


def main():
    """Main entry point."""
    cli()


from devbox.cli.commands import boxes  # noqa: E402,F401
from devbox.cli.commands import vagrant  # noqa: E402,F401
