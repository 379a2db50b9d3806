"""
Sync operations — copy files from the remote repository onto this machine.

A target's ``repo_path`` may name a single file or a directory. Directories
are expanded against the repository tree listing, keeping each file's path
relative to the directory under ``local_path``.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from dotstrap.adapters.remote.fetch import download
from dotstrap.core.models.config import Configuration

logger = logging.getLogger(__name__)

MACOS_PLATFORM = "darwin"


@dataclass
class SyncItem:
    """One file to download and where it goes."""

    group: str
    repo_path: str
    url: str
    local_path: Path


@dataclass
class SyncPlan:
    """Everything a sync run would touch."""

    items: list[SyncItem] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    skipped_groups: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "items": [
                {"group": i.group, "repo_path": i.repo_path, "local_path": str(i.local_path)}
                for i in self.items
            ],
            "missing": self.missing,
            "skipped_groups": self.skipped_groups,
        }


def _directories(paths: Iterable[str]) -> set[str]:
    """Every path that is a parent of another path in the listing."""
    dirs: set[str] = set()
    for p in paths:
        parts = p.split("/")
        for i in range(1, len(parts)):
            dirs.add("/".join(parts[:i]))
    return dirs


def expand_target(repo_path: str, git_paths: list[str]) -> list[str]:
    """Files in ``git_paths`` covered by ``repo_path``, in listing order."""
    wanted = repo_path.strip("/")
    dirs = _directories(git_paths)

    if wanted in dirs:
        prefix = wanted + "/"
        return [p for p in git_paths if p.startswith(prefix) and p not in dirs]
    if wanted in git_paths:
        return [wanted]
    return []


def plan_sync(
    config: Configuration,
    groups: Iterable[str] | None = None,
    platform: str = sys.platform,
) -> SyncPlan:
    """Resolve sync groups into concrete file downloads.

    Args:
        config: Loaded configuration (must carry metadata).
        groups: Only these group keys (default: all).
        platform: ``sys.platform`` value; macos_only groups need "darwin".
    """
    assert config.metadata is not None
    wanted = set(groups) if groups else None
    git_paths = config.metadata.git_paths
    base_url = config.metadata.base_url
    plan = SyncPlan()

    for key, group in config.sync.items():
        if wanted is not None and key not in wanted:
            continue
        if group.macos_only and platform != MACOS_PLATFORM:
            logger.info("Skipping macOS-only group %s", key)
            plan.skipped_groups.append(key)
            continue

        for target in group.targets:
            files = expand_target(target.repo_path, git_paths)
            if not files:
                logger.warning("Not in repository: %s", target.repo_path)
                plan.missing.append(target.repo_path)
                continue

            root = target.repo_path.strip("/")
            local_root = Path(target.local_path).expanduser()
            for repo_file in files:
                relative = repo_file[len(root):].lstrip("/")
                plan.items.append(SyncItem(
                    group=key,
                    repo_path=repo_file,
                    url=base_url + repo_file,
                    local_path=local_root / relative if relative else local_root,
                ))

    return plan


def run_sync(
    plan: SyncPlan,
    fetch: Callable[[str], bytes] | None = None,
    dry_run: bool = False,
) -> list[SyncItem]:
    """Download every planned file. Returns the items written.

    Raises:
        FetchError: On the first file that can't be downloaded.
    """
    fetch = fetch or download
    written: list[SyncItem] = []
    for item in plan.items:
        if dry_run:
            logger.info("DRY-RUN: %s → %s", item.repo_path, item.local_path)
            continue
        body = fetch(item.url)
        item.local_path.parent.mkdir(parents=True, exist_ok=True)
        item.local_path.write_bytes(body)
        logger.info("Wrote %s (%d bytes)", item.local_path, len(body))
        written.append(item)
    return written
