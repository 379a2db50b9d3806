"""
Helpers shared by the CLI command modules.
"""

from __future__ import annotations

import click

from dotstrap.core.context import AppContext, build_context


def get_app(ctx: click.Context) -> AppContext:
    """Return the run's AppContext, resolving it on first use.

    Resolution happens once per process and before the command does any
    work; ``--help`` never triggers it.
    """
    root = ctx.find_root()
    root.ensure_object(dict)
    app = root.obj.get("app")
    if app is None:
        app = build_context(root.obj.get("repo_dir"))
        root.obj["app"] = app
    return app
