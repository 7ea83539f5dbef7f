"""
Shared CLI helpers — settings resolution and the selection prompt.
"""

from __future__ import annotations

import sys
from typing import Sequence

import click

from handy_scripts.core.errors import ConfigError
from handy_scripts.core.models.settings import Settings


def load_cli_settings(ctx: click.Context) -> Settings:
    """Load settings once per invocation; exit 1 on a bad config file."""
    settings: Settings | None = ctx.obj.get("settings")
    if settings is not None:
        return settings

    from handy_scripts.core.config.loader import load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    ctx.obj["settings"] = settings
    return settings


def prompt_selection(options: Sequence[str]) -> str:
    """Print a numbered menu and read the raw choice from stdin."""
    click.echo("Select an option:")
    for i, option in enumerate(options, start=1):
        click.echo(f"{i}) {option}")
    return click.prompt("Select an option", default="", show_default=False)
