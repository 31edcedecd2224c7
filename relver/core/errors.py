"""Process exit codes for relver commands.

CI jobs branch on these values, so they must stay stable:
- 0: Success
- 1: User error (malformed version file, bad config, bad arguments)
- 2: Environment error (git missing, not a repository)
- 3: Conflict (stored and auto-incremented tags both exist)
- 4: Git error (tag, commit or push failed)
- 5: I/O error (version or output file not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    CONFLICT_ERROR = 3
    GIT_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
