"""GitHub Actions step outputs.

The image build-and-push job reads these to know which tag to publish.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.platform.files import append_text
from relver.release.errors import ReleaseError
from relver.release.resolver import Resolution

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def output_values(resolution: Resolution) -> dict[str, str]:
    return {
        "version": str(resolution.version),
        "tag": resolution.tag,
        "action": str(resolution.action),
        "bumped": "true" if resolution.bumped else "false",
    }


def github_output_path(
    explicit: Path | None, environ: Mapping[str, str] | None = None
) -> Path | None:
    """Pick the outputs file: explicit flag first, then ``$GITHUB_OUTPUT``."""
    if explicit is not None:
        return explicit
    env = os.environ if environ is None else environ
    value = env.get(GITHUB_OUTPUT_ENV, "").strip()
    return Path(value) if value else None


def write_github_output(path: Path, resolution: Resolution) -> Result[None, ReleaseError]:
    lines = "".join(f"{k}={v}\n" for k, v in output_values(resolution).items())
    try:
        append_text(path, lines)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write step outputs: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
