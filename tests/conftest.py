"""
Shared test fixtures and configuration.
"""

import textwrap
from typing import Callable

import pytest

from dotstrap.core.errors import FetchError
from dotstrap.core.models.config import RepositoryMetadata

BASE_URL = "https://raw.githubusercontent.com/alice/dotfiles/main/"

CONFIG_TOML = textwrap.dedent("""\
    tmp_dir = "/tmp/@repo_name-install"
    help_description = "Alice's machines"

    [Sync.shell]
    Name = "Shell"
    macos_only = false

    [[Sync.shell.Targets]]
    Description = "fish config"
    repo_path = "config/fish"
    local_path = "~/.config/fish"

    [[Sync.shell.Targets]]
    Description = "git config"
    repo_path = "gitconfig"
    local_path = "~/.gitconfig"

    [Sync.mac]
    Name = "macOS"
    macos_only = true

    [[Sync.mac.Targets]]
    Description = "yabai"
    repo_path = "yabairc"
    local_path = "~/.yabairc"

    [Installers.neovim]
    help_message = "Build neovim from source"
    Description = "neovim nightly"
    Install = [{ deps = "echo deps" }, { build = "echo build" }]
    tmp_install = [{ clone = "git clone https://github.com/neovim/neovim" }]
""")

PACKAGES_TOML = textwrap.dedent("""\
    [cli.ripgrep]
    pacman = "ripgrep"
    apt = "ripgrep"
    brew = "ripgrep"

    [cli.fd]
    pacman = "fd"
    apt = "fd-find"

    [shell.starship]
    install_command = "curl -sS https://starship.rs/install.sh | sh"
    uninstall_command = "rm -f /usr/local/bin/starship"
    apt = "starship"
""")

GIT_PATHS = [
    "config",
    "config/fish",
    "config/fish/config.fish",
    "config/fish/functions",
    "config/fish/functions/ll.fish",
    "config.toml",
    "gitconfig",
    "packages.toml",
    "yabairc",
]


@pytest.fixture
def metadata() -> RepositoryMetadata:
    """Repository metadata for alice/dotfiles@main."""
    return RepositoryMetadata(
        user="alice",
        repo="dotfiles",
        branch="main",
        base_url=BASE_URL,
        git_paths=list(GIT_PATHS),
    )


@pytest.fixture
def fake_fetch() -> Callable[[dict[str, bytes]], Callable[[str], bytes]]:
    """Build a fetch function serving bodies from a URL → bytes mapping."""

    def _make(bodies: dict[str, bytes]) -> Callable[[str], bytes]:
        def _fetch(url: str) -> bytes:
            if url not in bodies:
                raise FetchError(url, "HTTP 404 Not Found")
            return bodies[url]

        return _fetch

    return _make


@pytest.fixture
def manifests(fake_fetch) -> Callable[[str], bytes]:
    """Fetch function serving the sample config.toml and packages.toml."""
    return fake_fetch({
        BASE_URL + "config.toml": CONFIG_TOML.encode(),
        BASE_URL + "packages.toml": PACKAGES_TOML.encode(),
    })
