"""Git operations used by release runs.

Usage:
    from relver.git import Repository

    repo = Repository(Path("."))
    tags = repo.list_tags("v*")
"""

from relver.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
