"""
GitHub trees API — list every path of a repository at a ref.

Unauthenticated; subject to the anonymous API rate limit.
"""

from __future__ import annotations

import json
import logging
import urllib.parse

from dotstrap.adapters.remote.fetch import download
from dotstrap.core.errors import FetchError, RepositoryError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"


def tree_url(user: str, repo: str, ref: str, recursive: bool = True) -> str:
    """Build the trees API URL for ``user/repo`` at ``ref``."""
    url = f"{GITHUB_API}/repos/{user}/{repo}/git/trees/{urllib.parse.quote(ref, safe='')}"
    if recursive:
        url += "?recursive=1"
    return url


def list_tree_paths(user: str, repo: str, ref: str, recursive: bool = True) -> list[str]:
    """Return the path of every tree entry, in the order GitHub returns them.

    Raises:
        RepositoryError: If the API call fails or returns an unexpected body.
    """
    url = tree_url(user, repo, ref, recursive)
    try:
        raw = download(url, headers={"Accept": "application/vnd.github+json"})
    except FetchError as e:
        raise RepositoryError(f"Cannot list tree of {user}/{repo}@{ref}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RepositoryError(f"Invalid JSON from {url}: {e}") from e

    entries = data.get("tree") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise RepositoryError(f"Unexpected response from {url}: no 'tree' list")

    if data.get("truncated"):
        logger.warning("Tree listing for %s/%s@%s was truncated by GitHub", user, repo, ref)

    paths = [entry.get("path", "") for entry in entries if isinstance(entry, dict)]
    logger.debug("Listed %d paths in %s/%s@%s", len(paths), user, repo, ref)
    return paths
