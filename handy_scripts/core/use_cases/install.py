"""
Install use case — the menu that turns a target into installations.

Flow:
    target ─┬─ "all"        → BULK_INSTALL    → install every collection → register → DONE
            ├─ <collection> → COLLECTION_MENU → pick 1..N or N+1 (all)   → register → DONE
            └─ other        → UnknownCollection                                     → DONE

Every installed script is registered in every configured shell config
file that exists. Missing rc files are reported once each and skipped.
Failures never stop the remaining work. Only the typed menu errors
(UnknownCollection, InvalidSelection) abort a run, and a vanished
collection directory aborts a single-collection run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from handy_scripts.core.errors import InvalidSelection, NotFound, UnknownCollection
from handy_scripts.core.models.script import Collection, InstalledScript
from handy_scripts.core.models.settings import Settings
from handy_scripts.core.services.catalog import ScriptCatalog
from handy_scripts.core.services.installer import InstallFailure, Installer, InstallReport
from handy_scripts.core.services.shell_config import ShellConfigWriter

logger = logging.getLogger(__name__)

ALL_TARGET = "all"
INSTALL_ALL_LABEL = "Install all"

# Receives the numbered option labels, returns the raw user input
SelectFn = Callable[[Sequence[str]], str]


class MenuState(str, Enum):
    AWAITING_COLLECTION = "awaiting_collection"
    BULK_INSTALL = "bulk_install"
    COLLECTION_MENU = "collection_menu"
    DONE = "done"


@dataclass
class Registration:
    """Outcome of one (script, shell config file) registration."""

    script: str
    config_file: str
    status: str  # appended | already_present | skipped | failed
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "script": self.script,
            "config_file": self.config_file,
            "status": self.status,
            "error": self.error,
        }


@dataclass
class InstallResult:
    """Everything one menu run did."""

    target: str
    reports: list[InstallReport] = field(default_factory=list)
    registrations: list[Registration] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def installed(self) -> list[InstalledScript]:
        return [s for r in self.reports for s in r.installed]

    @property
    def failures(self) -> list[InstallFailure]:
        return [f for r in self.reports for f in r.failures]

    @property
    def failed_registrations(self) -> list[Registration]:
        return [r for r in self.registrations if r.status == "failed"]

    @property
    def all_ok(self) -> bool:
        return not (self.failures or self.failed_registrations or self.errors)

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "ok": self.all_ok,
            "installed": len(self.installed),
            "failed": len(self.failures),
            "reports": [r.to_dict() for r in self.reports],
            "registrations": [r.to_dict() for r in self.registrations],
            "errors": self.errors,
        }


def parse_selection(raw: str, option_count: int) -> int:
    """Validate a 1-based menu choice and return it as a 0-based index.

    Raises:
        InvalidSelection: ``raw`` is not a number in ``1..option_count``.
    """
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidSelection(raw, option_count)
    choice = int(text)
    if not 1 <= choice <= option_count:
        raise InvalidSelection(raw, option_count)
    return choice - 1


def usage_line(collections: Sequence[str], prog: str = "handy install") -> str:
    """One-line usage listing the valid install targets."""
    return f"Usage: {prog} {{{'|'.join([ALL_TARGET, *collections])}}}"


class InteractiveMenu:
    """Dispatches an install target to the installer and shell config writer."""

    def __init__(
        self,
        catalog: ScriptCatalog,
        installer: Installer,
        writer: ShellConfigWriter,
        select: SelectFn | None = None,
    ):
        self.catalog = catalog
        self.installer = installer
        self.writer = writer
        self._select = select
        self.state = MenuState.AWAITING_COLLECTION

    @classmethod
    def from_settings(cls, settings: Settings, select: SelectFn | None = None) -> InteractiveMenu:
        catalog = ScriptCatalog.from_settings(settings)
        return cls(
            catalog=catalog,
            installer=Installer.from_settings(settings, catalog),
            writer=ShellConfigWriter.from_settings(settings),
            select=select,
        )

    def collection_names(self) -> list[str]:
        return self.catalog.collection_names()

    def run(self, target: str, choice: str | None = None) -> InstallResult:
        """Run the menu for ``target``.

        Args:
            target: ``"all"`` or a collection name.
            choice: Pre-supplied menu selection; prompts via ``select``
                when omitted.

        Raises:
            UnknownCollection: ``target`` names no collection.
            InvalidSelection: The menu choice is invalid; nothing installed.
            NotFound: The collection directory vanished before installing.
        """
        self.state = MenuState.AWAITING_COLLECTION
        try:
            if target == ALL_TARGET:
                return self.install_everything()

            collection = self.catalog.get_collection(target)
            if collection is None:
                raise UnknownCollection(target, self.collection_names())
            return self.install_from_collection(collection, choice)
        finally:
            self.state = MenuState.DONE

    def install_everything(self) -> InstallResult:
        """Install and register every script of every collection."""
        self.state = MenuState.BULK_INSTALL
        logger.info("Installing all scripts...")
        result = InstallResult(target=ALL_TARGET)

        for collection in self.catalog.list_collections():
            try:
                report = self.installer.install_all(collection)
            except (NotFound, OSError) as e:
                logger.error("Cannot install collection %s: %s", collection.name, e)
                result.errors.append(str(e))
                continue
            result.reports.append(report)

        self._register(result.installed, result)
        return result

    def install_from_collection(self, collection: Collection, choice: str | None = None) -> InstallResult:
        """Offer one collection's scripts plus "Install all" and act on the pick."""
        self.state = MenuState.COLLECTION_MENU
        scripts = self.catalog.list_scripts(collection)
        options = [s.name for s in scripts] + [INSTALL_ALL_LABEL]

        if choice is None:
            if self._select is None:
                raise InvalidSelection("", len(options))
            choice = self._select(options)
        index = parse_selection(choice, len(options))

        result = InstallResult(target=collection.name)
        if index < len(scripts):
            entry = scripts[index]
            report = InstallReport(collection=collection.name)
            try:
                report.installed.append(self.installer.install_one(entry.path))
            except (NotFound, OSError) as e:
                logger.error("Failed to install %s: %s", entry.path, e)
                report.failures.append(
                    InstallFailure(script=entry.name, path=str(entry.path), error=str(e))
                )
            result.reports.append(report)
        else:
            result.reports.append(self.installer.install_all(collection))

        self._register(result.installed, result)
        return result

    def _register(self, scripts: Sequence[InstalledScript], result: InstallResult) -> None:
        """Register ``scripts`` in each configured rc file, skipping missing ones."""
        if not scripts:
            return
        for config_file in self.writer.config_files:
            path = self.writer.config_path(config_file)
            if not path.is_file():
                logger.info("%s not found, skipping registration", path)
                result.registrations.append(
                    Registration(
                        script="*",
                        config_file=config_file,
                        status="skipped",
                        error=f"{path} not found.",
                    )
                )
                continue
            for script in scripts:
                try:
                    status = self.writer.append_load_directive(config_file, script.name)
                except (NotFound, OSError) as e:
                    logger.error("Cannot register %s in %s: %s", script.name, path, e)
                    result.registrations.append(
                        Registration(script.name, config_file, "failed", str(e))
                    )
                    continue
                result.registrations.append(Registration(script.name, config_file, status.value))
