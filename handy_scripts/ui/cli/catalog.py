"""
CLI commands for browsing the script catalog.

Thin wrappers over ``handy_scripts.core.use_cases.listing``.
"""

from __future__ import annotations

import json
import sys
import textwrap

import click

from handy_scripts.ui.cli.helpers import load_cli_settings


@click.group()
def catalog() -> None:
    """Script catalog — collections and the scripts they contain."""


@catalog.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_(ctx: click.Context, as_json: bool) -> None:
    """List collections and their scripts."""
    from handy_scripts.core.use_cases.listing import list_catalog

    settings = load_cli_settings(ctx)
    infos = list_catalog(settings)

    if as_json:
        click.echo(json.dumps({"collections": [i.to_dict() for i in infos]}, indent=2))
        return

    if not infos:
        click.secho(f"No collections found in {settings.collection_root}", fg="yellow")
        return

    click.secho(f"📚 Collections ({len(infos)}):", fg="cyan", bold=True)
    for info in infos:
        click.echo(f"   • {info.name:<12} {len(info.scripts)} script(s)")
    click.echo()


@catalog.command("show")
@click.argument("collection")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, collection: str, as_json: bool) -> None:
    """Show the scripts of one collection with their descriptions."""
    from handy_scripts.core.errors import UnknownCollection
    from handy_scripts.core.use_cases.listing import list_catalog

    settings = load_cli_settings(ctx)
    try:
        infos = list_catalog(settings, only=collection)
    except UnknownCollection as e:
        if as_json:
            click.echo(json.dumps({"error": str(e), "valid": e.valid}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    info = infos[0]
    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
        return

    click.secho(f"📂 {info.name}", fg="cyan", bold=True)
    click.echo(f"   {info.path}")
    click.echo()
    if not info.scripts:
        click.secho("   No scripts found.", fg="yellow")
    for script in info.scripts:
        click.secho(f"   {script.name}", fg="white", bold=True)
        if script.description:
            click.echo(textwrap.indent(textwrap.fill(script.description, width=72), "      "))
    click.echo()
