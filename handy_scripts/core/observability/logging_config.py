"""
Logging for the ``handy`` CLI.

Records from ``handy_scripts.*`` are written to stderr with click, using
the same markers as the command output: ❌ for errors, ⚠️ for warnings.
The commands print their own results; logging only adds problems, or
progress detail with ``-v`` / ``--debug``.

Console level, first match wins:
    --debug  >  --verbose  >  --quiet  >  HANDY_LOG_LEVEL  >  WARNING

HANDY_LOG_FILE adds a file handler with full detail at
HANDY_LOG_FILE_LEVEL (default DEBUG).
"""

from __future__ import annotations

import logging
import os

import click

PACKAGE_LOGGER = "handy_scripts"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_FMT_DEBUG = "%(name)s:%(lineno)d %(message)s"


class ClickHandler(logging.Handler):
    """Echo log records to stderr, styled like the CLI's own messages."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                click.secho(f"❌ {message}", fg="red", err=True)
            elif record.levelno >= logging.WARNING:
                click.secho(f"⚠️  {message}", fg="yellow", err=True)
            else:
                click.secho(f"   {message}", dim=True, err=True)
        except Exception:
            self.handleError(record)


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """Level name to number; unknown or empty names give ``default``."""
    if not name:
        return default
    return logging.getLevelNamesMapping().get(name.strip().upper(), default)


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Console level from the global CLI flags, then HANDY_LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return parse_level(os.environ.get("HANDY_LOG_LEVEL"))


def setup_logging(
    level: int = logging.WARNING,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach the console (and optional file) handler to the package logger.

    Safe to call more than once: previous handlers are replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = ClickHandler(level)
    if level <= logging.DEBUG:
        console.setFormatter(logging.Formatter(_FMT_DEBUG))
    logger.addHandler(console)

    effective = level
    if log_file:
        file_level = parse_level(log_file_level, default=logging.DEBUG)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
        effective = min(effective, file_level)

    logger.setLevel(effective)
    logger.propagate = False
    return logger
