"""
Repository resolver — who owns this dotfiles repo and what is in it.

Identity comes from the local clone (``remote.origin.url`` and the current
branch); the file listing comes from GitHub at that branch's tip.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from dotstrap.adapters.remote.github import list_tree_paths
from dotstrap.adapters.vcs.git import current_branch, remote_origin_url
from dotstrap.core.errors import RepositoryError, ShellError
from dotstrap.core.models.config import RepositoryMetadata

logger = logging.getLogger(__name__)

RAW_CONTENT_URL = "https://raw.githubusercontent.com"

# "/" separates path segments; ":" separates host from path in git@host:user/repo
_SEPARATORS = re.compile(r"[/:]")


def parse_remote_url(url: str) -> tuple[str, str]:
    """Split a git remote URL into ``(user, repo)``.

    Handles ``https://github.com/user/repo(.git)`` and
    ``git@github.com:user/repo(.git)``.

    Raises:
        RepositoryError: If fewer than two path segments are present.
    """
    segments = [s for s in _SEPARATORS.split(url.strip()) if s]
    if len(segments) < 2:
        raise RepositoryError(f"Cannot derive user/repo from remote URL: {url!r}")
    user, repo = segments[-2], segments[-1].removesuffix(".git")
    if not repo:
        raise RepositoryError(f"Cannot derive user/repo from remote URL: {url!r}")
    return user, repo


def raw_base_url(user: str, repo: str, branch: str) -> str:
    """Base URL for raw file contents at ``branch``, with trailing slash."""
    return f"{RAW_CONTENT_URL}/{user}/{repo}/{branch}/"


def resolve_repository(cwd: Path | None = None) -> RepositoryMetadata:
    """Build repository metadata for the clone at ``cwd``.

    Raises:
        RepositoryError: If git state is unusable or the tree can't be listed.
    """
    try:
        url = remote_origin_url(cwd)
        branch = current_branch(cwd)
    except ShellError as e:
        raise RepositoryError(f"Cannot read git state: {e}") from e

    if not url:
        raise RepositoryError("remote.origin.url is not set")

    user, repo = parse_remote_url(url)
    logger.info("Repository %s/%s on branch %s", user, repo, branch)

    return RepositoryMetadata(
        user=user,
        repo=repo,
        branch=branch,
        base_url=raw_base_url(user, repo, branch),
        git_paths=list_tree_paths(user, repo, branch, recursive=True),
    )
