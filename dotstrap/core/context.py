"""
Application context — the values every command works against.

Built once at CLI start, in a fixed order:

    repository (git + GitHub tree) → config.toml → package manager + packages.toml

and handed to commands explicitly through ``click.Context.obj``.
Nothing here is a module-level global, so tests can build a context
from hand-made models without touching git or the network.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dotstrap.core.config.loader import load_config
from dotstrap.core.models.config import Configuration
from dotstrap.core.models.packages import PackageManager
from dotstrap.core.services.package_manager import load_package_manager
from dotstrap.core.services.repository import resolve_repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Resolved configuration and package manager for this run."""

    config: Configuration
    package_manager: PackageManager


def build_context(repo_dir: Path | None = None) -> AppContext:
    """Resolve everything a command needs. Raises ``DotstrapError`` on failure."""
    metadata = resolve_repository(repo_dir)
    config = load_config(metadata)
    package_manager = load_package_manager(metadata)
    logger.debug("Context ready for %s/%s", metadata.user, metadata.repo)
    return AppContext(config=config, package_manager=package_manager)
