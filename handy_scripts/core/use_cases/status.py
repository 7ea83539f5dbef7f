"""
Status use case — what is installed and where it is registered.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from handy_scripts.core.models.settings import Settings
from handy_scripts.core.services.catalog import ScriptCatalog
from handy_scripts.core.services.shell_config import ShellConfigWriter


@dataclass
class ScriptStatus:
    """Installation state of one catalog script."""

    collection: str
    name: str
    installed: bool = False
    executable: bool = False
    registered: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "collection": self.collection,
            "name": self.name,
            "installed": self.installed,
            "executable": self.executable,
            "registered": self.registered,
        }


@dataclass
class StatusResult:
    """Aggregated installer status."""

    collection_root: Path
    target_dir: Path
    shell_configs: dict[str, bool] = field(default_factory=dict)
    scripts: list[ScriptStatus] = field(default_factory=list)

    @property
    def installed_count(self) -> int:
        return sum(1 for s in self.scripts if s.installed)

    def to_dict(self) -> dict:
        return {
            "collection_root": str(self.collection_root),
            "target_dir": str(self.target_dir),
            "shell_configs": self.shell_configs,
            "scripts": {
                "total": len(self.scripts),
                "installed": self.installed_count,
                "items": [s.to_dict() for s in self.scripts],
            },
        }


def get_status(settings: Settings) -> StatusResult:
    """Check every catalog script against the target dir and rc files."""
    catalog = ScriptCatalog.from_settings(settings)
    writer = ShellConfigWriter.from_settings(settings)
    target_dir = settings.resolved_target_dir

    existing = set(writer.existing_config_files())
    result = StatusResult(
        collection_root=settings.collection_root,
        target_dir=target_dir,
        shell_configs={name: name in existing for name in writer.config_files},
    )

    for collection in catalog.list_collections():
        for entry in catalog.list_scripts(collection):
            copy = target_dir / entry.name
            installed = copy.is_file()
            result.scripts.append(
                ScriptStatus(
                    collection=collection.name,
                    name=entry.name,
                    installed=installed,
                    executable=installed and os.access(copy, os.X_OK),
                    registered={
                        name: writer.has_directive(name, entry.name) for name in sorted(existing)
                    },
                )
            )

    return result
