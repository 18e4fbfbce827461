# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Box default commands - list, show, export and validate."""

from pathlib import Path
from typing import Optional

import click

from devbox.cli import cli
from devbox.cli.helpers import box_table, complete_track, console, handle_errors
from devbox.defaults import BOX_DEFAULTS, VAGRANT_REQUIRED_VERSION, get_box_default, list_box_defaults
from devbox.serialization import FORMATS, dump_defaults, format_for_path, load_document, write_defaults
from devbox.utils.logging import get_logger

logger = get_logger(__name__)


@cli.command("list")
@handle_errors
def list_boxes():
    """List the default box for every track."""
    console.print(box_table(list_box_defaults()))


@cli.command()
@click.argument("track", shell_complete=complete_track)
@click.option(
    "--field",
    "-f",
    type=click.Choice(["box", "version"]),
    help="Print only this field (for scripts)",
)
@handle_errors
def show(track: str, field: Optional[str]):
    """Show the default box for TRACK.

    Examples:
        devbox show server
        devbox show v419 --field version
    """
    entry = get_box_default(track)
    if field:
        click.echo(getattr(entry, field))
        return

    box_name, version_name = entry.constant_names()
    console.print(f"[bold]Track:[/bold]   {entry.track.value}")
    console.print(f"[bold]Box:[/bold]     {entry.box} [dim]({box_name})[/dim]")
    console.print(f"[bold]Version:[/bold] {entry.version} [dim]({version_name})[/dim]")


@cli.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default=None,
    help="Output format (default: from --output suffix, else yaml)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Output file path")
@handle_errors
def export(fmt: Optional[str], output: Optional[Path]):
    """Export the default boxes.

    Examples:
        devbox export
        devbox export --format env
        devbox export -o boxes.json
    """
    if output is None:
        click.echo(dump_defaults(BOX_DEFAULTS, fmt or "yaml"), nl=False)
        return

    fmt = fmt or format_for_path(output)
    write_defaults(output, BOX_DEFAULTS, fmt)
    logger.success(f"Exported {len(BOX_DEFAULTS)} tracks to {output}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@handle_errors
def validate(path: Path):
    """Validate a defaults file and compare it to the built-in boxes."""
    document = load_document(path)
    defaults = document.to_defaults()

    console.print(box_table(defaults.values(), title=str(path)))

    differences = 0
    for track, entry in defaults.items():
        builtin = BOX_DEFAULTS[track]
        if (entry.box, entry.version) != (builtin.box, builtin.version):
            differences += 1
            logger.warning(
                f"{track.value}: {entry.box} {entry.version} "
                f"(built-in: {builtin.box} {builtin.version})"
            )

    required = document.vagrant_required_version
    if required and required != VAGRANT_REQUIRED_VERSION:
        differences += 1
        logger.warning(
            f"Vagrant requirement {required} (built-in: {VAGRANT_REQUIRED_VERSION})"
        )

    if differences:
        logger.info(f"{path} is valid, {differences} value(s) differ from the built-in defaults")
    else:
        logger.success(f"{path} is valid and matches the built-in defaults")
