"""
Error hierarchy — every failure the core can raise.

Library code raises; only ``dotstrap.main.main`` decides to terminate.
"""

from __future__ import annotations


class DotstrapError(Exception):
    """Base class for all dotstrap failures."""


class ShellError(DotstrapError):
    """A shell command could not be started or exited non-zero."""

    def __init__(self, command: str, message: str, returncode: int | None = None):
        super().__init__(f"Command failed: {command}: {message}")
        self.command = command
        self.returncode = returncode


class FetchError(DotstrapError):
    """A remote URL could not be fetched."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Cannot fetch {url}: {message}")
        self.url = url


class ManifestError(DotstrapError):
    """A manifest was fetched but could not be decoded."""


class RepositoryError(DotstrapError):
    """Repository identity or tree could not be resolved."""


class ConfigError(DotstrapError):
    """config.toml is invalid."""


class InstallerError(DotstrapError):
    """An installer is unknown or cannot run."""
