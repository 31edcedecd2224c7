"""Typed loading of ``relver.toml``.

The file is optional. When present it may contain:

    [version]
    file = "VERSION"

    [git]
    remote = "origin"
    fetch_tags = false
    commit = true
    commit_message = "chore(release): bump version to {version}"
    tag_message = "Release {tag}"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "GitConfig",
    "VersionConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relver.toml"

DEFAULT_VERSION_FILE = "VERSION"
DEFAULT_REMOTE = "origin"
DEFAULT_COMMIT_MESSAGE = "chore(release): bump version to {version}"
DEFAULT_TAG_MESSAGE = "Release {tag}"

_PLACEHOLDERS = ("{version}", "{tag}")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class VersionConfig:
    """Where the stored version lives, relative to the repository root."""

    file: str = DEFAULT_VERSION_FILE


@dataclass(frozen=True, slots=True)
class GitConfig:
    """How the release is recorded in git.

    ``commit_message`` and ``tag_message`` accept ``{version}`` and ``{tag}``.
    """

    remote: str = DEFAULT_REMOTE
    fetch_tags: bool = False
    commit: bool = True
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    tag_message: str = DEFAULT_TAG_MESSAGE

    def render_commit_message(self, *, version: str, tag: str) -> str:
        return _render(self.commit_message, version=version, tag=tag)

    def render_tag_message(self, *, version: str, tag: str) -> str:
        return _render(self.tag_message, version=version, tag=tag)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    version: VersionConfig = field(default_factory=VersionConfig)
    git: GitConfig = field(default_factory=GitConfig)

    def version_path(self, root: Path) -> Path:
        return root / self.version.file

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        version: StrDict = get_table(data, "version") or {}
        git: StrDict = get_table(data, "git") or {}

        fetch_tags = get_bool(git, "fetch_tags")
        commit = get_bool(git, "commit")

        return cls(
            version=VersionConfig(file=get_str(version, "file") or DEFAULT_VERSION_FILE),
            git=GitConfig(
                remote=get_str(git, "remote") or DEFAULT_REMOTE,
                fetch_tags=False if fetch_tags is None else fetch_tags,
                commit=True if commit is None else commit,
                commit_message=get_str(git, "commit_message") or DEFAULT_COMMIT_MESSAGE,
                tag_message=get_str(git, "tag_message") or DEFAULT_TAG_MESSAGE,
            ),
        )


def _render(template: str, *, version: str, tag: str) -> str:
    # Only the known placeholders are substituted; other braces pass through.
    out = template
    for placeholder, value in zip(_PLACEHOLDERS, (version, tag), strict=True):
        out = out.replace(placeholder, value)
    return out


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relver.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return defaults.

    A present-but-broken file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
