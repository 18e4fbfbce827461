# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Shared helpers for the devbox CLI."""

import functools
import sys
from typing import Callable, Iterable, Optional

import click
from click.shell_completion import CompletionItem
from rich.panel import Panel
from rich.table import Table

from devbox.defaults import list_box_defaults
from devbox.errors import BoxDefaultsError, DefaultsFileError, UnknownTrackError, VagrantVersionError
from devbox.models.box_defaults import BoxDefault
from devbox.utils.logging import console, get_logger

logger = get_logger(__name__)

ERROR_TITLES = {
    UnknownTrackError: "Unknown Track",
    DefaultsFileError: "Invalid Defaults File",
    VagrantVersionError: "Vagrant Version",
}


def show_error_panel(title: str, message: str, hint: Optional[str] = None) -> None:
    """Show an error in a red panel.

    Args:
        title: Panel title (shown in red)
        message: Main error message
        hint: Optional hint text (shown with blue "Hint:" prefix)
    """
    content = message
    if hint:
        content += f"\n\n[blue]Hint:[/blue] {hint}"
    console.print(Panel(content, title=f"[red]{title}[/red]", border_style="red"))


def handle_errors(func: Callable) -> Callable:
    """Decorator that wraps CLI commands with standard error handling.

    - BoxDefaultsError: panel titled by error type, with its hint
    - ClickException: left to click
    - Other exceptions: generic error panel

    All of them exit with code 1.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except click.ClickException:
            raise
        except BoxDefaultsError as exc:
            logger.error(f"{func.__name__} failed", exc=exc, console_output=False)
            show_error_panel(ERROR_TITLES.get(type(exc), "Error"), str(exc), exc.hint)
            sys.exit(1)
        except Exception as exc:
            logger.error(f"{func.__name__} failed", exc=exc, console_output=False)
            show_error_panel("Error", str(exc))
            sys.exit(1)

    return wrapper


def complete_track(ctx, param, incomplete):
    """Autocomplete track names."""
    return [
        CompletionItem(entry.track.value, help=entry.box)
        for entry in list_box_defaults()
        if entry.track.value.startswith(incomplete.lower())
    ]


def box_table(entries: Iterable[BoxDefault], title: str = "Default Boxes") -> Table:
    """Render box defaults as a table."""
    table = Table(title=title)
    table.add_column("Track", style="cyan")
    table.add_column("Box", style="magenta")
    table.add_column("Version", style="green")
    for entry in entries:
        table.add_row(entry.track.value, entry.box, entry.version)
    return table
