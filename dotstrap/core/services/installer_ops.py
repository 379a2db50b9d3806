"""
Installer operations — run a named installer's shell steps in order.

``Install`` steps run in the current directory. ``tmp_install`` steps run
inside the configured temp directory, which is created first.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from dotstrap.adapters.shell.command import run_interactive
from dotstrap.core.errors import InstallerError
from dotstrap.core.models.config import Configuration, InstallerDef

logger = logging.getLogger(__name__)


def installer_steps(installer: InstallerDef, tmp: bool = False) -> list[tuple[str, str]]:
    """Flatten the step maps into ``(name, command)`` pairs, in order."""
    steps = installer.tmp_install if tmp else installer.install
    return [(name, command) for step in steps for name, command in step.items()]


def run_installer(
    config: Configuration,
    name: str,
    tmp: bool = False,
    dry_run: bool = False,
    runner: Callable[..., None] | None = None,
) -> list[tuple[str, str]]:
    """Run installer ``name``. Returns the steps that were (or would be) run.

    Raises:
        InstallerError: Unknown installer, or tmp steps without a tmp_dir.
        ShellError: A step exited non-zero; later steps are not run.
    """
    installer = config.get_installer(name)
    if installer is None:
        known = ", ".join(sorted(config.installers)) or "none"
        raise InstallerError(f"Unknown installer '{name}'. Known: {known}")

    steps = installer_steps(installer, tmp=tmp)
    cwd: Path | None = None
    if tmp:
        if not config.tmp_dir:
            raise InstallerError(f"Installer '{name}' needs tmp_dir, which is not set")
        cwd = Path(config.tmp_dir).expanduser()

    if dry_run:
        for step_name, command in steps:
            logger.info("DRY-RUN: %s: %s", step_name, command)
        return steps

    runner = runner or run_interactive
    if cwd is not None:
        cwd.mkdir(parents=True, exist_ok=True)

    for step_name, command in steps:
        logger.info("Step %s", step_name)
        runner(command, cwd=cwd)
    return steps
