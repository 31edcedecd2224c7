"""Git repository abstraction.

This module provides the Repository class for the git operations a release
run needs: listing and fetching tags, committing the version file, creating
annotated tags and pushing them. All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.list_tags("v*"):
        case Ok(tags):
            print(f"{len(tags)} release tags")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.platform.process import ProcessError
from relver.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code (-1 if git never ran or was killed)
        not_found: The git executable could not be started
        timed_out: git was killed after its timeout
    """

    command: str
    message: str
    returncode: int = 1
    not_found: bool = False
    timed_out: bool = False

    @property
    def git_missing(self) -> bool:
        return self.not_found


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def list_tags(self, pattern: str) -> Result[list[str], GitError]:
        """List tags matching a glob pattern, in git's sort order."""
        result = self._run(["tag", "--list", pattern])
        match result:
            case Err(e):
                return Err(self._error("tag --list", e, "listing tags failed"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def fetch_tags(self, remote: str) -> Result[None, GitError]:
        """Fetch all tags from ``remote`` so shallow clones see published releases."""
        result = self._run(["fetch", "--tags", "--force", remote])
        if isinstance(result, Err):
            return Err(self._error("fetch --tags", result.error, "fetching tags failed"))
        return Ok(None)

    def commit_file(self, path: Path, message: str) -> Result[None, GitError]:
        """Stage a single file and commit it."""
        rel = self._relative(path)
        added = self._run(["add", "--", rel])
        if isinstance(added, Err):
            return Err(self._error("add", added.error, f"staging {rel} failed"))

        committed = self._run(["commit", "-m", message, "--", rel])
        if isinstance(committed, Err):
            return Err(self._error("commit", committed.error, "commit failed"))
        return Ok(None)

    def create_tag(self, tag: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD; fails if the tag already exists."""
        result = self._run(["tag", "-a", tag, "-m", message])
        if isinstance(result, Err):
            return Err(self._error("tag -a", result.error, f"creating tag {tag} failed"))
        return Ok(None)

    def push(self, remote: str, ref: str) -> Result[None, GitError]:
        """Push a single ref (branch ``HEAD`` or a tag name) to ``remote``."""
        result = self._run(["push", remote, ref])
        if isinstance(result, Err):
            return Err(self._error("push", result.error, f"pushing {ref} to {remote} failed"))
        return Ok(None)

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.path.resolve()).as_posix()
        except ValueError:
            return str(path)

    @staticmethod
    def _error(command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or fallback,
            returncode=e.returncode,
            not_found=e.not_found,
            timed_out=e.timed_out,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
