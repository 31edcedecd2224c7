"""Run external commands (git) and report failures as values.

A failed command comes back as ``Err(ProcessError)``. Callers branch on the
flags rather than on message text: ``not_found`` means the executable could
not be started at all, ``timed_out`` means it was killed after ``timeout``.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relver.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

_NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False
    not_found: bool = False

    def __str__(self) -> str:
        shown = " ".join(self.command[:3]) + (" ..." if len(self.command) > 3 else "")
        if self.timed_out:
            return f"{shown} timed out"
        if self.not_found:
            return f"{shown}: executable not found"
        return f"{shown} failed (exit {self.returncode})"


def _captured(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else ""


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Environment (inherits the current one if None).
        timeout: Seconds before the process is killed (None: no limit).
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=command,
                returncode=_NOT_STARTED,
                stdout=_captured(e.stdout),
                stderr=f"Command timed out after {timeout}s",
                timed_out=True,
            )
        )
    except FileNotFoundError as e:
        # cwd missing also raises FileNotFoundError; only the executable counts.
        missing = bool(cmd) and e.filename in (None, cmd[0])
        return Err(
            ProcessError(
                command=command,
                returncode=_NOT_STARTED,
                stdout="",
                stderr=str(e),
                not_found=missing,
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=_NOT_STARTED, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )
    return Ok(proc.stdout)
