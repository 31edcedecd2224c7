from __future__ import annotations

from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.platform.files import atomic_write_text
from relver.release.errors import ReleaseError
from relver.release.semver import Version, parse_version


def read_version_file(path: Path) -> Result[Version, ReleaseError]:
    """Read the single-line ``X.Y.Z`` version file.

    A missing file is a format error: no default version is assumed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(
            ReleaseError(
                kind="invalid_version_format",
                message=f"version file not found: {path}",
                hint="create it with a single line such as 1.0.0",
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="invalid_version_format",
                message=f"failed to read version file: {e}",
                hint=str(path),
            )
        )

    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) != 1:
        return Err(
            ReleaseError(
                kind="invalid_version_format",
                message=f"version file must contain exactly one X.Y.Z line, found {len(lines)}",
                hint=str(path),
            )
        )

    return parse_version(lines[0])


def write_version_file(path: Path, version: Version) -> Result[None, ReleaseError]:
    try:
        atomic_write_text(path, f"{version}\n", encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write version file: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
