"""
Settings model — where scripts come from and where they go.

Loaded from an optional handy.yml; every field has a default so the
installer works from a plain checkout with no config at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_COLLECTION_ROOT = "collection"
DEFAULT_TARGET_DIR = "~/handy_scripts"
DEFAULT_SCRIPT_EXTENSION = ".sh"
DEFAULT_SHELL_CONFIGS = (".bashrc", ".zshrc")


class Settings(BaseModel):
    """Installer settings.

    Relative ``collection_root`` values are resolved by the loader
    against the directory holding handy.yml (or the cwd). ``target_dir``
    is resolved against ``home``: a leading ``~`` or a relative path both
    land under the home directory.
    """

    home: Path = Field(default_factory=Path.home)
    collection_root: Path = Path(DEFAULT_COLLECTION_ROOT)
    target_dir: str = DEFAULT_TARGET_DIR
    script_extension: str = DEFAULT_SCRIPT_EXTENSION
    shell_configs: list[str] = Field(default_factory=lambda: list(DEFAULT_SHELL_CONFIGS))

    @field_validator("script_extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        value = value.strip()
        if not value or value == ".":
            raise ValueError("script_extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("shell_configs")
    @classmethod
    def _check_shell_configs(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name or Path(name).is_absolute() or ".." in Path(name).parts:
                raise ValueError(f"shell config '{name}' must be a path inside the home directory")
        return value

    @property
    def resolved_target_dir(self) -> Path:
        """Absolute installation directory."""
        raw = self.target_dir
        if raw == "~":
            return self.home
        if raw.startswith("~/"):
            return self.home / raw[2:]
        path = Path(raw)
        return path if path.is_absolute() else self.home / path

    def shell_config_path(self, name: str) -> Path:
        """Absolute path of a shell config file name (e.g. ``.bashrc``)."""
        return self.home / name
