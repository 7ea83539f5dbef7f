"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from handy_scripts.core.models import Collection, ScriptEntry, Settings
"""

from handy_scripts.core.models.script import (
    Collection,
    DirectiveStatus,
    InstalledScript,
    ScriptEntry,
)
from handy_scripts.core.models.settings import Settings

__all__ = [
    # script.py
    "Collection",
    "DirectiveStatus",
    "InstalledScript",
    "ScriptEntry",
    # settings.py
    "Settings",
]
