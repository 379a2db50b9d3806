"""
Configuration model — what config.toml declares, plus repository identity.

Field aliases follow the TOML keys. Keys without an explicit snake_case
spelling (``Name``, ``Targets``, ``Description``, ``Install``, ``Sync``,
``Installers``) are accepted in either capitalised or lower case.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RepositoryMetadata(BaseModel):
    """Identity of the dotfiles repository, derived from local git state."""

    user: str
    repo: str
    branch: str
    base_url: str
    git_paths: list[str] = Field(default_factory=list)


class Target(BaseModel):
    """One remote path → local path mapping."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = Field(
        default="", validation_alias=AliasChoices("Description", "description")
    )
    repo_path: str = ""
    local_path: str = ""


class TargetGroup(BaseModel):
    """A named set of sync targets."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", validation_alias=AliasChoices("Name", "name"))
    macos_only: bool = False
    targets: list[Target] = Field(
        default_factory=list, validation_alias=AliasChoices("Targets", "targets")
    )


class InstallerDef(BaseModel):
    """A named installer: ordered shell steps, each a ``{name: command}`` map."""

    model_config = ConfigDict(populate_by_name=True)

    help_message: str = ""
    description: str = Field(
        default="", validation_alias=AliasChoices("Description", "description")
    )
    install: list[dict[str, str]] = Field(
        default_factory=list, validation_alias=AliasChoices("Install", "install")
    )
    tmp_install: list[dict[str, str]] = Field(default_factory=list)


class Configuration(BaseModel):
    """Everything config.toml describes, resolved against the repository."""

    model_config = ConfigDict(populate_by_name=True)

    tmp_dir: str = ""
    install_url: str = Field(default="", validation_alias="custom_install_url")
    help_description: str = ""
    sync: dict[str, TargetGroup] = Field(
        default_factory=dict, validation_alias=AliasChoices("Sync", "sync")
    )
    installers: dict[str, InstallerDef] = Field(
        default_factory=dict, validation_alias=AliasChoices("Installers", "installers")
    )
    metadata: RepositoryMetadata | None = None

    def sync_targets(self) -> dict[str, str]:
        """Map every target's repo_path to its local_path.

        Groups and targets are visited in declaration order; a repo_path
        declared twice keeps the last local_path.
        """
        targets: dict[str, str] = {}
        for group in self.sync.values():
            for target in group.targets:
                targets[target.repo_path] = target.local_path
        return targets

    def get_installer(self, name: str) -> InstallerDef | None:
        """Look up an installer by its table name."""
        return self.installers.get(name)
