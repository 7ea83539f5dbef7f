"""
Handy Scripts — CLI entrypoint.

Usage:
    python -m handy_scripts.main --help
    python -m handy_scripts.main install all
    python -m handy_scripts.main install docker
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from handy_scripts import __version__
from handy_scripts.core.observability.logging_config import resolve_level, setup_logging
from handy_scripts.ui.cli.helpers import load_cli_settings, prompt_selection


@click.group()
@click.version_option(version=__version__, prog_name="handy")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to handy.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Handy Scripts — install shell helper collections."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("HANDY_LOG_FILE"),
        log_file_level=os.environ.get("HANDY_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.argument("target", required=False)
@click.option("--choice", "-n", default=None, help="Menu selection, skips the prompt.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, target: str | None, choice: str | None, as_json: bool) -> None:
    """Install scripts: 'all', or pick from a collection.

    Examples:

        handy install all

        handy install docker

        handy install github --choice 3
    """
    from handy_scripts.core.errors import InvalidSelection, NotFound, UnknownCollection
    from handy_scripts.core.use_cases.install import InteractiveMenu, usage_line

    settings = load_cli_settings(ctx)
    menu = InteractiveMenu.from_settings(settings, select=prompt_selection)

    if not target:
        click.echo(usage_line(menu.collection_names()))
        sys.exit(1)

    try:
        result = menu.run(target, choice=choice)
    except UnknownCollection as e:
        click.secho(f"❌ {e}", fg="red")
        click.echo(usage_line(e.valid))
        sys.exit(1)
    except InvalidSelection as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    except NotFound as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    quiet = ctx.obj.get("quiet", False)

    # Installed copies
    for report in result.reports:
        if not quiet:
            click.secho(f"\n📦 {report.collection}", fg="cyan", bold=True)
        for script in report.installed:
            if not quiet:
                click.secho("   ✓ ", fg="green", nl=False)
                click.echo(f"{script.name}  → {script.path}")
        for failure in report.failures:
            click.secho(f"   ✗ {failure.script}", fg="red", nl=False)
            click.echo(f"  {failure.error}")

    for error in result.errors:
        click.secho(f"❌ {error}", fg="red")

    # Shell registrations
    if result.registrations:
        click.echo()
        click.secho("   Shell configs:", fg="white", bold=True)
    for reg in result.registrations:
        if reg.status == "appended" and not quiet:
            click.secho(f"   ✓ {reg.config_file}", fg="green", nl=False)
            click.echo(f"  source {reg.script}")
        elif reg.status == "already_present" and not quiet:
            click.secho(f"   ⊘ {reg.config_file}", fg="yellow", nl=False)
            click.echo(f"  {reg.script} already registered")
        elif reg.status == "skipped":
            click.secho(f"   ⚠️  {reg.error} Skipped.", fg="yellow")
        elif reg.status == "failed":
            click.secho(f"   ✗ {reg.config_file}", fg="red", nl=False)
            click.echo(f"  {reg.script}: {reg.error}")

    # Summary
    click.echo()
    installed = len(result.installed)
    failed = len(result.failures)
    color = "green" if result.all_ok else "yellow" if installed else "red"
    click.secho(f"   Result: {installed} installed, {failed} failed", fg=color, bold=True)
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show which scripts are installed and registered."""
    from handy_scripts.core.use_cases.status import get_status

    settings = load_cli_settings(ctx)
    result = get_status(settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("\n🧰 Handy Scripts", fg="cyan", bold=True)
    click.echo(f"   Collections: {result.collection_root}")
    click.echo(f"   Target:      {result.target_dir}")
    for name, exists in result.shell_configs.items():
        marker = "✅" if exists else "❌ not found"
        click.echo(f"   ~/{name}: {marker}")
    click.echo()

    if not result.scripts:
        click.secho("   No scripts found.", fg="yellow")
        click.echo()
        return

    click.secho(
        f"   Scripts: {result.installed_count}/{len(result.scripts)} installed",
        fg="white",
        bold=True,
    )
    for script in result.scripts:
        registered = [name for name, ok in script.registered.items() if ok]
        reg_label = f"  [{', '.join(registered)}]" if registered else ""
        if script.installed:
            click.secho(f"     ✓ {script.name}", fg="green", nl=False)
        else:
            click.secho(f"     · {script.name}", fg="white", nl=False)
        click.echo(f" ({script.collection}){reg_label}")
    click.echo()


# ── Sub-command groups ──────────────────────────────────────────

from handy_scripts.ui.cli.catalog import catalog  # noqa: E402

cli.add_command(catalog)


if __name__ == "__main__":
    cli()
