from __future__ import annotations

from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import build_context
from relver.release.version_file import read_version_file


def current() -> None:
    """Print the stored version."""
    ctx = build_context()
    version = exit_on_error(read_version_file(ctx.config.version_path(ctx.root)), ctx)
    ctx.console.print(str(version))
