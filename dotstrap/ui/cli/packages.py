"""
CLI commands for native packages.

Thin wrappers over ``PackageManager`` lookups; commands are executed
through the shell adapter attached to the terminal.
"""

from __future__ import annotations

import json
import sys

import click

from dotstrap.adapters.shell.command import run_interactive
from dotstrap.ui.cli.common import get_app


@click.group()
def packages() -> None:
    """Packages — show, install, uninstall, update."""


@packages.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def manager(ctx: click.Context, as_json: bool) -> None:
    """Show the detected native package manager."""
    pm = get_app(ctx).package_manager
    profile = pm.profile

    if as_json:
        click.echo(json.dumps(profile.model_dump() if profile else None, indent=2))
        return

    if profile is None:
        click.secho("⚠️  No supported package manager found", fg="yellow")
        return

    click.secho(f"📦 {profile.name}", fg="cyan", bold=True)
    click.echo(f"   install:   {profile.install_cmd}")
    click.echo(f"   uninstall: {profile.uninstall_cmd}")
    click.echo(f"   update:    {profile.update_cmd}")


@packages.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show a package definition and its resolved commands."""
    pm = get_app(ctx).package_manager
    attributes = pm.package_by_name(name)

    if as_json:
        click.echo(json.dumps({
            "name": name,
            "attributes": attributes,
            "install": pm.install_cmd(name),
            "uninstall": pm.uninstall_cmd(name),
        }, indent=2))
        if attributes is None:
            sys.exit(1)
        return

    if attributes is None:
        click.secho(f"❌ No package definition for '{name}'", fg="red")
        sys.exit(1)

    click.secho(f"📦 {name}", fg="cyan", bold=True)
    for key, value in attributes.items():
        click.echo(f"   {key:<18} {value}")
    click.echo()
    click.echo(f"   install:   {pm.install_cmd(name) or '—'}")
    click.echo(f"   uninstall: {pm.uninstall_cmd(name) or '—'}")


def _run_for_each(ctx: click.Context, names: tuple[str, ...], uninstall: bool, dry_run: bool) -> None:
    pm = get_app(ctx).package_manager
    verb = "Uninstalling" if uninstall else "Installing"
    unresolved: list[str] = []

    for name in names:
        command = pm.uninstall_cmd(name) if uninstall else pm.install_cmd(name)
        if command is None:
            if pm.package_by_name(name) is None:
                click.secho(f"⚠️  No package definition for '{name}'", fg="yellow")
            else:
                manager_name = pm.profile.name if pm.profile else "this system"
                click.secho(f"⚠️  '{name}' has no command for {manager_name}", fg="yellow")
            unresolved.append(name)
            continue

        if dry_run:
            click.echo(f"   DRY-RUN: {command}")
            continue

        click.secho(f"⚡ {verb} {name}", fg="cyan")
        run_interactive(command)

    if unresolved:
        click.secho(f"❌ Skipped: {', '.join(unresolved)}", fg="red")
        sys.exit(1)


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Print commands without running them.")
@click.pass_context
def install(ctx: click.Context, names: tuple[str, ...], dry_run: bool) -> None:
    """Install packages from the catalog."""
    _run_for_each(ctx, names, uninstall=False, dry_run=dry_run)


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Print commands without running them.")
@click.pass_context
def uninstall(ctx: click.Context, names: tuple[str, ...], dry_run: bool) -> None:
    """Uninstall packages from the catalog."""
    _run_for_each(ctx, names, uninstall=True, dry_run=dry_run)


@packages.command()
@click.option("--dry-run", is_flag=True, help="Print the command without running it.")
@click.pass_context
def update(ctx: click.Context, dry_run: bool) -> None:
    """Update all system packages."""
    command = get_app(ctx).package_manager.update_cmd()
    if command is None:
        click.secho("❌ No supported package manager found", fg="red")
        sys.exit(1)

    if dry_run:
        click.echo(f"   DRY-RUN: {command}")
        return

    click.secho("⚡ Updating system packages", fg="cyan")
    run_interactive(command)
