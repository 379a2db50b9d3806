"""
dotstrap — CLI entrypoint.

Usage:
    dotstrap --help
    dotstrap config show
    dotstrap sync --dry-run
    dotstrap packages install neovim ripgrep
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import click

from dotstrap import __version__
from dotstrap.core.errors import DotstrapError
from dotstrap.core.observability.logging_config import resolve_level, setup_logging
from dotstrap.core.services.sync_ops import plan_sync, run_sync
from dotstrap.ui.cli.common import get_app

logger = logging.getLogger(__name__)


class DotstrapGroup(click.Group):
    """Root group: the one place where a failure ends the run."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except DotstrapError as e:
            logger.debug("Aborting", exc_info=True)
            click.secho(f"❌ {e}", fg="red", err=True)
            ctx.exit(1)


@click.group(cls=DotstrapGroup)
@click.version_option(version=__version__, prog_name="dotstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--repo-dir",
    "-C",
    "repo_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Dotfiles clone to read git state from (default: cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    repo_dir: str | None,
) -> None:
    """dotstrap — sync dotfiles and install packages from your repository."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["repo_dir"] = Path(repo_dir) if repo_dir else None

    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("DOTSTRAP_LOG_LEVEL")),
        log_file=os.environ.get("DOTSTRAP_LOG_FILE"),
        log_file_level=os.environ.get("DOTSTRAP_LOG_FILE_LEVEL"),
    )


# ── Config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Remote configuration commands."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show the resolved configuration."""
    cfg = get_app(ctx).config
    meta = cfg.metadata
    assert meta is not None

    if as_json:
        data = cfg.model_dump(mode="json", exclude={"metadata": {"git_paths"}})
        data["metadata"]["path_count"] = len(meta.git_paths)
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n📋 {meta.user}/{meta.repo}", fg="cyan", bold=True)
    if cfg.help_description:
        click.echo(f"   {cfg.help_description}")
    click.echo(f"   Branch:      {meta.branch}")
    click.echo(f"   Base URL:    {meta.base_url}")
    click.echo(f"   Install URL: {cfg.install_url}")
    click.echo(f"   Temp dir:    {cfg.tmp_dir or '—'}")
    click.echo(f"   Files:       {len(meta.git_paths)}")
    click.echo()

    click.secho(f"   Sync groups: {len(cfg.sync)}", fg="white", bold=True)
    for key, group in cfg.sync.items():
        mac = " (macOS only)" if group.macos_only else ""
        click.echo(f"     • {group.name or key}{mac}: {len(group.targets)} targets")

    click.secho(f"   Installers: {len(cfg.installers)}", fg="white", bold=True)
    for key, installer in cfg.installers.items():
        click.echo(f"     • {key}  {installer.description}")
    click.echo()


@config.command("targets")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_targets(ctx: click.Context, as_json: bool) -> None:
    """List every sync target as repo path → local path."""
    targets = get_app(ctx).config.sync_targets()

    if as_json:
        click.echo(json.dumps(targets, indent=2))
        return

    if not targets:
        click.secho("⚠️  No sync targets defined", fg="yellow")
        return

    for repo_path, local_path in targets.items():
        click.echo(f"   {repo_path:<40} → {local_path}")


# ── Sync ────────────────────────────────────────────────────────


@cli.command()
@click.option("--group", "-g", "groups", multiple=True, help="Only sync these groups.")
@click.option("--dry-run", is_flag=True, help="Plan but don't write files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the plan as JSON.")
@click.pass_context
def sync(ctx: click.Context, groups: tuple[str, ...], dry_run: bool, as_json: bool) -> None:
    """Download sync targets from the repository onto this machine."""
    cfg = get_app(ctx).config
    unknown = [g for g in groups if g not in cfg.sync]
    if unknown:
        click.secho(f"❌ Unknown sync group: {', '.join(unknown)}", fg="red")
        ctx.exit(1)

    plan = plan_sync(cfg, groups=groups or None)

    if as_json:
        click.echo(json.dumps(plan.to_dict(), indent=2))
        return

    mode_label = "[dry-run] " if dry_run else ""
    click.secho(f"\n🔄 {mode_label}Sync — {len(plan.items)} files", fg="cyan", bold=True)

    written = run_sync(plan, dry_run=dry_run)
    for item in plan.items:
        marker = "✓" if item in written else "·"
        click.echo(f"   {marker} {item.repo_path} → {item.local_path}")

    for key in plan.skipped_groups:
        click.secho(f"   ⊘ {key} (macOS only)", fg="yellow")

    if plan.missing:
        click.echo()
        click.secho("   ⚠️  Not in repository:", fg="yellow")
        for path in plan.missing:
            click.echo(f"     • {path}")

    click.echo()


# ── Register sub-command groups from dotstrap/ui/cli/ ───────────

from dotstrap.ui.cli.installers import installers  # noqa: E402
from dotstrap.ui.cli.packages import packages  # noqa: E402

cli.add_command(packages)
cli.add_command(installers)


def main() -> None:
    cli(prog_name="dotstrap")


if __name__ == "__main__":
    main()
