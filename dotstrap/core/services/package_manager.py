"""
Package manager resolver — pick the host's native manager, load the catalog.

Managers are probed in a fixed order; the first binary found wins even
when several are installed.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from dotstrap.adapters.remote.fetch import download
from dotstrap.adapters.shell.command import command_exists
from dotstrap.core.config.manifest import decode_manifest
from dotstrap.core.errors import ManifestError
from dotstrap.core.models.config import RepositoryMetadata
from dotstrap.core.models.packages import (
    PackageCatalog,
    PackageManager,
    PackageManagerProfile,
)

logger = logging.getLogger(__name__)

PACKAGES_FILE = "packages.toml"

# Probe order matters: first match wins.
MANAGER_PROFILES: tuple[PackageManagerProfile, ...] = (
    PackageManagerProfile(
        name="pacman",
        install_cmd="pacman -S --no-confirm",
        uninstall_cmd="pacman -Rs --no-confirm",
        update_cmd="pacman -Syu",
    ),
    PackageManagerProfile(
        name="dnf",
        install_cmd="dnf install -y",
        uninstall_cmd="dnf remove -y",
        update_cmd="dnf update",
    ),
    PackageManagerProfile(
        name="brew",
        install_cmd="brew install",
        uninstall_cmd="brew uninstall",
        update_cmd="brew upgrade",
    ),
    PackageManagerProfile(
        name="apt",
        install_cmd="apt install -y",
        uninstall_cmd="apt remove -y",
        update_cmd="apt update",
    ),
)

_catalog_adapter: TypeAdapter[PackageCatalog] = TypeAdapter(PackageCatalog)


def detect_profile(
    exists: Callable[[str], bool] = command_exists,
) -> PackageManagerProfile | None:
    """Return the first known manager whose binary exists, or None."""
    for profile in MANAGER_PROFILES:
        if exists(profile.name):
            logger.info("Using package manager: %s", profile.name)
            return profile
    logger.warning(
        "No supported package manager found (tried: %s)",
        ", ".join(p.name for p in MANAGER_PROFILES),
    )
    return None


def load_packages(
    metadata: RepositoryMetadata,
    fetch: Callable[[str], bytes] = download,
) -> PackageCatalog:
    """Fetch and validate ``<base_url>packages.toml``.

    Raises:
        FetchError: If the file can't be downloaded.
        ManifestError: If it isn't a category.package.attribute table of strings.
    """
    url = metadata.base_url + PACKAGES_FILE
    data = decode_manifest(fetch(url), url)
    try:
        catalog = _catalog_adapter.validate_python(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid package catalog in {url}: {e}") from e

    logger.info(
        "Loaded %d packages in %d categories",
        sum(len(group) for group in catalog.values()),
        len(catalog),
    )
    return catalog


def load_package_manager(
    metadata: RepositoryMetadata,
    fetch: Callable[[str], bytes] = download,
    exists: Callable[[str], bool] = command_exists,
) -> PackageManager:
    """Detect the host manager and load the catalog."""
    profile = detect_profile(exists)
    return PackageManager(profile=profile, packages=load_packages(metadata, fetch))
