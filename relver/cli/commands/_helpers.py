"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from relver.core.errors import ErrorCode
from relver.core.result import Err, Result
from relver.output.console import Style
from relver.release.errors import ReleaseError, ReleaseErrorKind

if TYPE_CHECKING:
    from relver.cli.context import CLIContext


_EXIT_CODES: dict[ReleaseErrorKind, ErrorCode] = {
    "invalid_version_format": ErrorCode.USER_ERROR,
    "version_conflict": ErrorCode.CONFLICT_ERROR,
    "git_missing": ErrorCode.ENV_ERROR,
    "git_failed": ErrorCode.GIT_ERROR,
    "io_failed": ErrorCode.IO_ERROR,
}


def exit_code_for(error: ReleaseError) -> ErrorCode:
    return _EXIT_CODES.get(error.kind, ErrorCode.USER_ERROR)


def exit_on_error[T](result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its mapped code."""
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(error.message)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(exit_code_for(error)))
    return result.value
