"""
CLI commands for named installers declared in config.toml.
"""

from __future__ import annotations

import click

from dotstrap.core.services.installer_ops import installer_steps, run_installer
from dotstrap.ui.cli.common import get_app


@click.group()
def installers() -> None:
    """Installers — list and run scripted installs."""


@installers.command("list")
@click.pass_context
def list_installers(ctx: click.Context) -> None:
    """List installers and their steps."""
    config = get_app(ctx).config
    if not config.installers:
        click.secho("⚠️  No installers defined", fg="yellow")
        return

    for name, installer in config.installers.items():
        click.secho(f"   • {name}", fg="cyan", bold=True, nl=False)
        click.echo(f"  {installer.description}" if installer.description else "")
        if installer.help_message:
            click.echo(f"     {installer.help_message}")
        steps = len(installer_steps(installer))
        tmp_steps = len(installer_steps(installer, tmp=True))
        click.echo(f"     {steps} steps, {tmp_steps} temp-dir steps")


@installers.command("run")
@click.argument("name")
@click.option("--tmp", is_flag=True, help="Run the tmp_install steps inside tmp_dir.")
@click.option("--dry-run", is_flag=True, help="Print steps without running them.")
@click.pass_context
def run(ctx: click.Context, name: str, tmp: bool, dry_run: bool) -> None:
    """Run an installer's steps in order."""
    config = get_app(ctx).config
    steps = run_installer(config, name, tmp=tmp, dry_run=dry_run)

    if dry_run:
        for step_name, command in steps:
            click.echo(f"   DRY-RUN: {step_name}: {command}")
        return

    click.secho(f"✅ {name}: {len(steps)} steps completed", fg="green")
