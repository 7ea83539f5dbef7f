"""
Script catalog — discovers collections and the scripts inside them.

Layout consumed::

    <collection_root>/
        docker/
            docker_basic_helpers.sh
            docker_helpers.sh
        github/
            github_basic_helpers.sh
            ...

Listing never fails for "nothing there": a missing root or collection
directory yields an empty list. Other filesystem errors propagate.
Results are sorted by name so repeated listings are identical.
"""

from __future__ import annotations

import logging
from pathlib import Path

from handy_scripts.core.models.script import Collection, ScriptEntry
from handy_scripts.core.models.settings import DEFAULT_SCRIPT_EXTENSION, Settings

logger = logging.getLogger(__name__)

DESCRIPTION_MARKER = "# DESCRIPTION:"


class ScriptCatalog:
    """Enumerates what can be installed."""

    def __init__(self, root: Path, extension: str = DEFAULT_SCRIPT_EXTENSION):
        self.root = Path(root)
        self.extension = extension

    @classmethod
    def from_settings(cls, settings: Settings) -> ScriptCatalog:
        return cls(settings.collection_root, settings.script_extension)

    def list_collections(self) -> list[Collection]:
        """Immediate, non-hidden subdirectories of the collection root."""
        if not self.root.is_dir():
            logger.debug("Collection root %s does not exist", self.root)
            return []
        return [
            Collection(name=p.name, path=p)
            for p in sorted(self.root.iterdir(), key=lambda p: p.name)
            if p.is_dir() and not p.name.startswith(".")
        ]

    def collection_names(self) -> list[str]:
        return [c.name for c in self.list_collections()]

    def get_collection(self, name: str) -> Collection | None:
        """Look up a collection by name."""
        for collection in self.list_collections():
            if collection.name == name:
                return collection
        return None

    def list_scripts(self, collection: Collection) -> list[ScriptEntry]:
        """Script files directly inside a collection, in lexical order.

        Hidden files (``.utils.sh``) are private helpers sourced by their
        siblings and are never offered for installation.
        """
        if not collection.path.is_dir():
            logger.debug("Collection directory %s does not exist", collection.path)
            return []
        return [
            ScriptEntry(name=p.name, collection=collection)
            for p in sorted(collection.path.iterdir(), key=lambda p: p.name)
            if p.is_file() and p.name.endswith(self.extension) and not p.name.startswith(".")
        ]

    def describe(self, entry: ScriptEntry) -> str:
        """Read the ``# DESCRIPTION:`` comment block from a script header.

        The block is the marker line plus the comment lines that follow
        it, joined into one string. Returns "" when there is no block.
        """
        parts: list[str] = []
        capturing = False
        with entry.path.open(encoding="utf-8", errors="replace") as fh:
            for raw in fh:
                line = raw.strip()
                if not capturing:
                    if line.startswith(DESCRIPTION_MARKER):
                        capturing = True
                        rest = line[len(DESCRIPTION_MARKER):].strip()
                        if rest:
                            parts.append(rest)
                    elif line and not line.startswith("#"):
                        break  # header is over
                    continue
                text = line.lstrip("#").strip()
                if not line.startswith("#") or not text:
                    break
                parts.append(text)
        return " ".join(parts)
