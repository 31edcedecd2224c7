from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from relver.core.result import Err, Ok, Result
from relver.git.repository import GitError


@dataclass
class FakeRepository:
    """In-memory stand-in for ``Repository`` recording every git call."""

    path: Path
    tags: list[str] = field(default_factory=list)
    remote_tags: list[str] = field(default_factory=list)
    fail: dict[str, GitError] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def list_tags(self, pattern: str) -> Result[list[str], GitError]:
        self.calls.append(("list_tags", pattern))
        if "list_tags" in self.fail:
            return Err(self.fail["list_tags"])
        prefix = pattern.rstrip("*")
        return Ok([t for t in self.tags if t.startswith(prefix)])

    def fetch_tags(self, remote: str) -> Result[None, GitError]:
        self.calls.append(("fetch_tags", remote))
        if "fetch_tags" in self.fail:
            return Err(self.fail["fetch_tags"])
        self.tags.extend(t for t in self.remote_tags if t not in self.tags)
        return Ok(None)

    def commit_file(self, path: Path, message: str) -> Result[None, GitError]:
        self.calls.append(("commit_file", path.name, message))
        if "commit_file" in self.fail:
            return Err(self.fail["commit_file"])
        return Ok(None)

    def create_tag(self, tag: str, message: str) -> Result[None, GitError]:
        self.calls.append(("create_tag", tag, message))
        if "create_tag" in self.fail:
            return Err(self.fail["create_tag"])
        self.tags.append(tag)
        return Ok(None)

    def push(self, remote: str, ref: str) -> Result[None, GitError]:
        self.calls.append(("push", remote, ref))
        if "push" in self.fail:
            return Err(self.fail["push"])
        return Ok(None)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_repo(tmp_path: Path) -> FakeRepository:
    return FakeRepository(path=tmp_path)


@pytest.fixture
def version_file(tmp_path: Path) -> Path:
    path = tmp_path / "VERSION"
    path.write_text("1.0.0\n", encoding="utf-8")
    return path
