"""
Listing use case — collections and scripts with their descriptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from handy_scripts.core.errors import UnknownCollection
from handy_scripts.core.models.settings import Settings
from handy_scripts.core.services.catalog import ScriptCatalog

logger = logging.getLogger(__name__)


@dataclass
class ScriptInfo:
    name: str
    description: str = ""


@dataclass
class CollectionInfo:
    name: str
    path: str
    scripts: list[ScriptInfo] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "scripts": [{"name": s.name, "description": s.description} for s in self.scripts],
        }


def list_catalog(settings: Settings, only: str | None = None) -> list[CollectionInfo]:
    """Describe every collection, or just ``only``.

    Raises:
        UnknownCollection: ``only`` names no collection.
    """
    catalog = ScriptCatalog.from_settings(settings)
    collections = catalog.list_collections()
    if only is not None:
        collections = [c for c in collections if c.name == only]
        if not collections:
            raise UnknownCollection(only, catalog.collection_names())

    infos = []
    for collection in collections:
        info = CollectionInfo(name=collection.name, path=str(collection.path))
        for entry in catalog.list_scripts(collection):
            try:
                description = catalog.describe(entry)
            except OSError as e:
                logger.warning("Cannot read description of %s: %s", entry.path, e)
                description = ""
            info.scripts.append(ScriptInfo(name=entry.name, description=description))
        infos.append(info)
    return infos
