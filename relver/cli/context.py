from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relver.core.config import CONFIG_FILENAME, Config, load_config_or_default
from relver.core.errors import ErrorCode
from relver.core.result import Err
from relver.git.repository import Repository
from relver.output.console import ConsoleProtocol, RichConsole

REPO_ENV = "RELVER_REPO"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    repo: Repository
    console: ConsoleProtocol


def repo_root() -> Path:
    env = os.environ.get(REPO_ENV, "").strip()
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd()


def build_context() -> CLIContext:
    root = repo_root()
    console = RichConsole()

    config_result = load_config_or_default(root / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        root=root,
        config=config_result.value,
        repo=Repository(root),
        console=console,
    )
