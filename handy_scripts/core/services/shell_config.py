"""
Shell config writer — registers installed scripts in shell rc files.

A registration is a load directive, ``source <target_dir>/<script>``,
appended under a ``# Handy Scripts loading:`` comment. Each directive
is written at most once per file: presence is an exact full-line match
on the raw bytes, lines split on newlines only, so a directive for one
script never masks another's and rc files in any encoding are left
intact.

Rc files are never created: a missing file is reported as NotFound.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from handy_scripts.core.errors import NotFound
from handy_scripts.core.models.script import DirectiveStatus
from handy_scripts.core.models.settings import DEFAULT_SHELL_CONFIGS, Settings

logger = logging.getLogger(__name__)

LOAD_COMMENT = "# Handy Scripts loading:"


class ShellConfigWriter:
    """Appends load directives to shell config files under ``home``."""

    def __init__(
        self,
        home: Path,
        target_dir: Path,
        config_files: Sequence[str] = DEFAULT_SHELL_CONFIGS,
    ):
        self.home = Path(home)
        self.target_dir = Path(target_dir)
        self.config_files = list(config_files)

    @classmethod
    def from_settings(cls, settings: Settings) -> ShellConfigWriter:
        return cls(settings.home, settings.resolved_target_dir, settings.shell_configs)

    def config_path(self, config_file: str) -> Path:
        return self.home / config_file

    def directive_for(self, script_name: str) -> str:
        return f"source {self.target_dir / script_name}"

    def existing_config_files(self) -> list[str]:
        """Configured rc file names that exist under the home directory."""
        return [name for name in self.config_files if self.config_path(name).is_file()]

    def has_directive(self, config_file: str, script_name: str) -> bool:
        path = self.config_path(config_file)
        if not path.is_file():
            return False
        return os.fsencode(self.directive_for(script_name)) in _lines(path.read_bytes())

    def append_load_directive(self, config_file: str, script_name: str) -> DirectiveStatus:
        """Register ``script_name`` in ``config_file`` unless already there.

        Raises:
            NotFound: ``~/<config_file>`` does not exist.
            OSError: The file could not be read or appended to.
        """
        path = self.config_path(config_file)
        if not path.is_file():
            raise NotFound(f"{path} not found.", path=path)

        directive = os.fsencode(self.directive_for(script_name))
        content = path.read_bytes()
        if directive in _lines(content):
            logger.info("Source command already exists in %s", path)
            return DirectiveStatus.ALREADY_PRESENT

        # Keep the previous last line intact when the file lacks a trailing newline
        prefix = b"" if not content or content.endswith(b"\n") else b"\n"
        with path.open("ab") as fh:
            fh.write(prefix + b"\n" + LOAD_COMMENT.encode() + b"\n" + directive + b"\n")

        logger.info("Appended source command to %s", path)
        return DirectiveStatus.APPENDED


def _lines(content: bytes) -> list[bytes]:
    return content.split(b"\n")
