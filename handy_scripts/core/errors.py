"""
Installer errors — the failure taxonomy shared by services and use cases.

Services raise these; use cases catch them per unit of work so a bulk
run keeps going, and the CLI turns whatever reaches it into a red
message and a non-zero exit.

Filesystem failures other than "does not exist" are not wrapped: they
propagate as the ``OSError`` the standard library raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class HandyError(Exception):
    """Base class for all installer errors."""


class NotFound(HandyError):
    """A source script, collection directory or shell config file is missing."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class InvalidSelection(HandyError):
    """An interactive menu choice is non-numeric or out of range."""

    def __init__(self, raw: str, option_count: int):
        self.raw = raw
        self.option_count = option_count
        super().__init__(
            f"Invalid option selected: {raw!r} (expected a number between 1 and {option_count})"
        )


class UnknownCollection(HandyError):
    """A collection name does not match any collection directory."""

    def __init__(self, name: str, valid: Sequence[str]):
        self.name = name
        self.valid = list(valid)
        choices = ", ".join(self.valid) if self.valid else "none available"
        super().__init__(f"Unknown collection '{name}'. Valid collections: {choices}")


class ConfigError(HandyError):
    """Raised when the installer configuration is invalid or unreadable."""
