"""
Package models — the selected native package manager and the catalog.

packages.toml is a three-level table::

    [cli.ripgrep]
    pacman = "ripgrep"
    apt = "ripgrep"
    brew = "ripgrep"

    [shell.starship]
    install_command = "curl -sS https://starship.rs/install.sh | sh"

Lookups return ``None`` for "not defined" rather than raising, so callers
decide how to report it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# category → package name → attribute → value
PackageCatalog = dict[str, dict[str, dict[str, str]]]

INSTALL_OVERRIDE = "install_command"
UNINSTALL_OVERRIDE = "uninstall_command"


class PackageManagerProfile(BaseModel):
    """Command templates of one native package manager."""

    name: str
    install_cmd: str
    uninstall_cmd: str
    update_cmd: str


class PackageManager(BaseModel):
    """The host's package manager (if any) plus the package catalog."""

    profile: PackageManagerProfile | None = None
    packages: PackageCatalog = Field(default_factory=dict)

    def package_by_name(self, name: str) -> dict[str, str] | None:
        """First package called exactly ``name`` across all categories."""
        for group in self.packages.values():
            for package_name, attributes in group.items():
                if package_name == name:
                    return attributes
        return None

    def install_cmd(self, name: str) -> str | None:
        """Shell command that installs ``name`` on this host, if any."""
        return self._resolve(name, INSTALL_OVERRIDE, "install_cmd")

    def uninstall_cmd(self, name: str) -> str | None:
        """Shell command that removes ``name`` from this host, if any."""
        return self._resolve(name, UNINSTALL_OVERRIDE, "uninstall_cmd")

    def update_cmd(self) -> str | None:
        """Full system update command of the selected manager."""
        return self.profile.update_cmd if self.profile else None

    def _resolve(self, name: str, override_key: str, template: str) -> str | None:
        attributes = self.package_by_name(name)
        if attributes is None:
            return None

        # An explicit override wins, even when it is an empty string
        if override_key in attributes:
            return attributes[override_key]

        if self.profile is not None and self.profile.name in attributes:
            return f"{getattr(self.profile, template)} {attributes[self.profile.name]}"

        return None
