"""
Installer — copies catalog scripts into the target directory.

Copies are atomic: bytes go to a temp file inside the target directory,
which is made executable and then renamed over the final name. A failed
copy never leaves a truncated script behind, and reinstalling simply
replaces the previous copy.

Bulk installs are best-effort: each script is independent, failures are
recorded in the InstallReport and the rest of the collection proceeds.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from handy_scripts.core.errors import NotFound
from handy_scripts.core.models.script import Collection, InstalledScript
from handy_scripts.core.models.settings import Settings
from handy_scripts.core.services.catalog import ScriptCatalog

logger = logging.getLogger(__name__)

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass
class InstallFailure:
    """One script that could not be installed."""

    script: str
    path: str
    error: str

    def to_dict(self) -> dict:
        return {"script": self.script, "path": self.path, "error": self.error}


@dataclass
class InstallReport:
    """Result of installing one or more scripts from a collection."""

    collection: str = ""
    installed: list[InstalledScript] = field(default_factory=list)
    failures: list[InstallFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.installed)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "collection": self.collection,
            "status": self.status,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "installed": [s.model_dump(mode="json") for s in self.installed],
            "failures": [f.to_dict() for f in self.failures],
        }


class Installer:
    """Materializes catalog entries as executable copies in ``target_dir``."""

    def __init__(self, target_dir: Path, catalog: ScriptCatalog):
        self.target_dir = Path(target_dir)
        self.catalog = catalog

    @classmethod
    def from_settings(cls, settings: Settings, catalog: ScriptCatalog | None = None) -> Installer:
        return cls(settings.resolved_target_dir, catalog or ScriptCatalog.from_settings(settings))

    def installed_path(self, script_name: str) -> Path:
        return self.target_dir / script_name

    def install_one(self, source_path: Path | str) -> InstalledScript:
        """Copy one script into the target directory and make it executable.

        Raises:
            NotFound: ``source_path`` is not an existing regular file.
            OSError: The copy, chmod or rename failed.
        """
        source = Path(source_path)
        if not source.is_file():
            raise NotFound(f"Script {source} not found.", path=source)

        self.target_dir.mkdir(parents=True, exist_ok=True)
        destination = self.installed_path(source.name)
        logger.info("Installing %s...", source)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.target_dir,
            prefix=f".{source.name}.",
            suffix=".tmp",
        )
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as dst, source.open("rb") as src:
                shutil.copyfileobj(src, dst)
            mode = stat.S_IMODE(source.stat().st_mode) | EXECUTABLE_BITS
            tmp.chmod(mode)
            os.replace(tmp, destination)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

        logger.info("%s installed successfully in %s", source.name, self.target_dir)
        return InstalledScript(
            name=destination.name,
            path=destination,
            executable=os.access(destination, os.X_OK),
        )

    def install_all(self, collection: Collection) -> InstallReport:
        """Install every script of a collection, continuing past failures.

        Raises:
            NotFound: The collection directory does not exist.
        """
        if not collection.path.is_dir():
            raise NotFound(f"Directory {collection.path} not found.", path=collection.path)

        logger.info("Installing all scripts in %s...", collection.path)
        report = InstallReport(collection=collection.name)
        for entry in self.catalog.list_scripts(collection):
            try:
                report.installed.append(self.install_one(entry.path))
            except (NotFound, OSError) as e:
                logger.error("Failed to install %s: %s", entry.path, e)
                report.failures.append(
                    InstallFailure(script=entry.name, path=str(entry.path), error=str(e))
                )

        logger.info(
            "Collection %s: %d installed, %d failed",
            collection.name,
            report.succeeded,
            report.failed,
        )
        return report
