"""
Git adapter — read-only probes of the local clone.

Uses the git CLI through the shell adapter; never touches .git directly.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotstrap.adapters.shell.command import run_command

logger = logging.getLogger(__name__)

# Seconds to wait for a single git probe
GIT_TIMEOUT = float(os.environ.get("DOTSTRAP_GIT_TIMEOUT", "15"))


def remote_origin_url(cwd: Path | None = None) -> str:
    """Return ``remote.origin.url`` of the repository at ``cwd``."""
    url = run_command("git config --get remote.origin.url", cwd=cwd, timeout=GIT_TIMEOUT)
    return url.strip()


def current_branch(cwd: Path | None = None) -> str:
    """Return the checked-out branch name."""
    branch = run_command("git rev-parse --abbrev-ref HEAD", cwd=cwd, timeout=GIT_TIMEOUT)
    return branch.strip()
