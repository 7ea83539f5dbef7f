"""
Script models — collections, catalog entries and installed copies.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class Collection(BaseModel):
    """A named group of scripts; one directory under the collection root."""

    name: str
    path: Path


class ScriptEntry(BaseModel):
    """One installable script file inside a collection."""

    name: str
    collection: Collection

    @property
    def path(self) -> Path:
        return self.collection.path / self.name


class InstalledScript(BaseModel):
    """A script copied into the target directory."""

    name: str
    path: Path
    executable: bool = True


class DirectiveStatus(str, Enum):
    """Outcome of registering a load directive in a shell config file."""

    APPENDED = "appended"
    ALREADY_PRESENT = "already_present"
