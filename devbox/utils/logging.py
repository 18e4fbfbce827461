# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Logging setup for devbox.

Provides:
1. Centralized logging configuration for the ``devbox`` logger tree
2. Debug mode via DEVBOX_DEBUG env var or the CLI ``--debug`` flag
3. Log levels via DEVBOX_LOG_LEVEL env var
4. Dual output: Rich console for the CLI, rotating file for later inspection

Usage:
    from devbox.utils.logging import get_logger, configure_logging

    # In the CLI entry point:
    configure_logging(debug=debug)

    # In any module:
    logger = get_logger(__name__)
    logger.info("Exported defaults")
    logger.error("Invalid defaults file", exc=exception)

Environment Variables:
    DEVBOX_DEBUG=1           Enable debug mode (verbose output)
    DEVBOX_LOG_LEVEL=DEBUG   Set log level (DEBUG, INFO, WARNING, ERROR)
    DEVBOX_LOG_FILE=/path    Override log file location
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console

from devbox.paths import HostPaths

# Global state
_configured = False
_debug_mode = False
_daemon_mode = False
_log_file: Optional[Path] = None

# Shared Rich console instance
console = Console()

SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")


def _get_log_file() -> Path:
    """Get the log file path, creating its directory if needed."""
    global _log_file
    if not _log_file:
        env_log_file = os.environ.get("DEVBOX_LOG_FILE")
        _log_file = Path(env_log_file) if env_log_file else HostPaths.log_file()

    _log_file.parent.mkdir(parents=True, exist_ok=True)
    return _log_file


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return _debug_mode or os.environ.get("DEVBOX_DEBUG", "").lower() in ("1", "true", "yes")


def configure_logging(
    debug: bool = False,
    daemon: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Configure the logging system.

    Called once at startup. Later calls are no-ops unless ``force`` is set,
    which the CLI uses to apply ``--debug`` after modules have already
    requested loggers.

    Args:
        debug: Enable debug mode (verbose output, debug to console)
        daemon: Plain stderr output, no Rich formatting
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Override log file path
        force: Reconfigure even if logging was already configured
    """
    global _configured, _debug_mode, _daemon_mode, _log_file

    if _configured and not force:
        return

    _debug_mode = debug or is_debug_mode()
    _daemon_mode = daemon

    if log_file:
        _log_file = log_file

    if log_level:
        level_name = log_level.upper()
    else:
        level_name = os.environ.get("DEVBOX_LOG_LEVEL", "DEBUG" if _debug_mode else "INFO").upper()

    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger("devbox")
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    try:
        file_handler = RotatingFileHandler(
            _get_log_file(),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
    except OSError:
        # Can't write log file, continue without it
        pass

    if _daemon_mode:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
        root_logger.addHandler(stderr_handler)

    _configured = True

    root_logger.debug(
        f"Logging configured: level={level_name}, debug={_debug_mode}, daemon={_daemon_mode}"
    )


class DevboxLogger:
    """Logger that writes to the ``devbox`` logger tree and mirrors to the console.

    Debug messages only reach the console in debug mode; the other levels are
    printed by default because the CLI is their only consumer.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.console = console

    def _echo(self, prefix: str, markup: str, message: str) -> None:
        if _daemon_mode:
            print(f"{prefix}: {message}", file=sys.stderr)
        else:
            self.console.print(markup)

    def debug(self, message: str, console_output: bool = False) -> None:
        """Log debug message.

        Args:
            message: Debug message
            console_output: Force output to console
        """
        self.logger.debug(message)
        if console_output or is_debug_mode():
            self._echo("DEBUG", f"[dim][DEBUG] {message}[/dim]", message)

    def info(self, message: str, console_output: bool = True) -> None:
        self.logger.info(message)
        if console_output:
            self._echo("INFO", f"[blue]{message}[/blue]", message)

    def success(self, message: str, console_output: bool = True) -> None:
        self.logger.log(SUCCESS_LEVEL, message)
        if console_output:
            self._echo("SUCCESS", f"[green]✓ {message}[/green]", message)

    def warning(self, message: str, console_output: bool = True) -> None:
        self.logger.warning(message)
        if console_output:
            self._echo("WARNING", f"[yellow]⚠ {message}[/yellow]", message)

    def error(
        self,
        message: str,
        exc: Optional[Exception] = None,
        console_output: bool = True,
    ) -> None:
        """Log error message (red output).

        Args:
            message: Error message
            exc: Optional exception to include in log
            console_output: Output to console
        """
        if exc:
            self.logger.error(f"{message}: {exc}", exc_info=exc)
            message = f"{message}: {exc}"
        else:
            self.logger.error(message)

        if console_output:
            self._echo("ERROR", f"[red]✗ {message}[/red]", message)


def get_logger(name: str) -> DevboxLogger:
    """Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        DevboxLogger instance
    """
    if not _configured:
        configure_logging()

    if not name.startswith("devbox"):
        name = f"devbox.{name}"

    return DevboxLogger(name)
