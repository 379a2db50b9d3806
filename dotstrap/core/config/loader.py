"""
Configuration loader — reads the remote config.toml into a Configuration.

Fetches ``<base_url>config.toml``, validates it against the pydantic
models, then applies the post-load rules:

    1. ``@repo_name`` in ``tmp_dir`` becomes the repository name.
    2. An empty ``install_url`` becomes ``<base_url>install.sh``.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import ValidationError

from dotstrap.adapters.remote.fetch import download
from dotstrap.core.config.manifest import decode_manifest
from dotstrap.core.errors import ConfigError, ManifestError
from dotstrap.core.models.config import Configuration, RepositoryMetadata

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.toml"
INSTALL_SCRIPT = "install.sh"
REPO_NAME_PLACEHOLDER = "@repo_name"


def load_config(
    metadata: RepositoryMetadata,
    fetch: Callable[[str], bytes] = download,
) -> Configuration:
    """Fetch, decode and finalize the repository's configuration.

    Raises:
        FetchError: If config.toml can't be downloaded.
        ConfigError: If it isn't valid TOML or doesn't match the schema.
    """
    url = metadata.base_url + CONFIG_FILE
    logger.debug("Loading configuration from %s", url)

    raw = fetch(url)
    try:
        data = decode_manifest(raw, url)
    except ManifestError as e:
        raise ConfigError(str(e)) from e

    try:
        config = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {url}: {e}") from e

    config.tmp_dir = config.tmp_dir.replace(REPO_NAME_PLACEHOLDER, metadata.repo)
    if not config.install_url:
        config.install_url = metadata.base_url + INSTALL_SCRIPT
    config.metadata = metadata

    logger.info(
        "Loaded configuration with %d sync groups and %d installers",
        len(config.sync),
        len(config.installers),
    )
    return config
