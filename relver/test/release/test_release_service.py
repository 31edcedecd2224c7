from __future__ import annotations

from pathlib import Path

from relver.core.config import Config, GitConfig
from relver.core.result import Err, Ok
from relver.git.repository import GitError
from relver.output.console import MockConsole
from relver.release.resolver import ResolveAction
from relver.release.semver import Version
from relver.release.service import apply_release, load_tags, plan_release
from relver.test.conftest import FakeRepository


def _plan(root: Path, repo: FakeRepository, *, fetch: bool = False, config: Config | None = None):
    result = plan_release(root=root, config=config or Config(), repo=repo, fetch=fetch)  # type: ignore[arg-type]
    assert isinstance(result, Ok)
    return result.value


# =============================================================================
# load_tags / plan_release
# =============================================================================


def test_load_tags_without_fetch(fake_repo: FakeRepository) -> None:
    fake_repo.tags = ["v1.0.0", "nightly"]
    fake_repo.remote_tags = ["v1.0.1"]

    result = load_tags(repo=fake_repo, remote="origin", fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Ok)
    assert set(result.value.tags) == {"v1.0.0"}
    assert fake_repo.call_names() == ["list_tags"]


def test_load_tags_with_fetch_sees_remote_tags(fake_repo: FakeRepository) -> None:
    fake_repo.remote_tags = ["v1.0.0"]

    result = load_tags(repo=fake_repo, remote="upstream", fetch=True)  # type: ignore[arg-type]

    assert isinstance(result, Ok)
    assert "v1.0.0" in result.value
    assert fake_repo.calls[0] == ("fetch_tags", "upstream")


def test_load_tags_git_failure(fake_repo: FakeRepository) -> None:
    fake_repo.fail["list_tags"] = GitError("tag --list", "fatal: not a git repository", 128)

    result = load_tags(repo=fake_repo, remote="origin", fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.hint == "fatal: not a git repository"


def test_load_tags_git_missing(fake_repo: FakeRepository) -> None:
    fake_repo.fail["list_tags"] = GitError(
        "tag --list", "No such file or directory", -1, not_found=True
    )

    result = load_tags(repo=fake_repo, remote="origin", fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "git_missing"


def test_load_tags_permission_denied_is_git_failure(fake_repo: FakeRepository) -> None:
    fake_repo.fail["list_tags"] = GitError("tag --list", "[Errno 13] Permission denied", -1)

    result = load_tags(repo=fake_repo, remote="origin", fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.hint == "[Errno 13] Permission denied"


def test_load_tags_fetch_timeout(fake_repo: FakeRepository) -> None:
    fake_repo.fail["fetch_tags"] = GitError(
        "fetch --tags", "Command timed out after 180.0s", -1, timed_out=True
    )

    result = load_tags(repo=fake_repo, remote="origin", fetch=True)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert "timed out" in result.error.message


def test_plan_use_as_is(tmp_path: Path, version_file: Path, fake_repo: FakeRepository) -> None:
    plan = _plan(tmp_path, fake_repo)

    assert plan.version_path == version_file
    assert plan.resolution.action is ResolveAction.USE_AS_IS
    assert plan.known_tags == 0
    assert plan.latest is None


def test_plan_bumps(tmp_path: Path, version_file: Path, fake_repo: FakeRepository) -> None:
    fake_repo.tags = ["v1.0.0"]

    plan = _plan(tmp_path, fake_repo)

    assert plan.resolution.version == Version(1, 0, 1)
    assert plan.known_tags == 1
    assert plan.latest == Version(1, 0, 0)


def test_plan_conflict(tmp_path: Path, version_file: Path, fake_repo: FakeRepository) -> None:
    fake_repo.tags = ["v1.0.0", "v1.0.1"]

    result = plan_release(root=tmp_path, config=Config(), repo=fake_repo, fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "version_conflict"


def test_plan_missing_version_file_skips_git(tmp_path: Path, fake_repo: FakeRepository) -> None:
    result = plan_release(root=tmp_path, config=Config(), repo=fake_repo, fetch=False)  # type: ignore[arg-type]

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version_format"
    assert fake_repo.calls == []


def test_plan_uses_configured_version_file(tmp_path: Path, fake_repo: FakeRepository) -> None:
    (tmp_path / "docker").mkdir()
    (tmp_path / "docker" / "VERSION").write_text("3.1.4\n", encoding="utf-8")
    config = Config.from_dict({"version": {"file": "docker/VERSION"}})

    plan = _plan(tmp_path, fake_repo, config=config)

    assert plan.resolution.version == Version(3, 1, 4)


# =============================================================================
# apply_release
# =============================================================================


def test_apply_use_as_is_only_tags(
    tmp_path: Path, version_file: Path, fake_repo: FakeRepository
) -> None:
    plan = _plan(tmp_path, fake_repo)
    console = MockConsole()

    result = apply_release(
        plan=plan, config=Config(), repo=fake_repo, console=console, commit=True, push=False  # type: ignore[arg-type]
    )

    assert isinstance(result, Ok)
    assert not result.value.wrote_version_file
    assert not result.value.committed
    assert result.value.tagged
    assert fake_repo.calls[-1] == ("create_tag", "v1.0.0", "Release v1.0.0")
    assert version_file.read_text(encoding="utf-8") == "1.0.0\n"
    assert console.find("tagged v1.0.0")


def test_apply_bump_writes_commits_tags(
    tmp_path: Path, version_file: Path, fake_repo: FakeRepository
) -> None:
    fake_repo.tags = ["v1.0.0"]
    plan = _plan(tmp_path, fake_repo)

    result = apply_release(
        plan=plan, config=Config(), repo=fake_repo, console=MockConsole(), commit=True, push=False  # type: ignore[arg-type]
    )

    assert isinstance(result, Ok)
    assert result.value.wrote_version_file
    assert result.value.committed
    assert version_file.read_text(encoding="utf-8") == "1.0.1\n"
    assert ("commit_file", "VERSION", "chore(release): bump version to 1.0.1") in fake_repo.calls
    assert fake_repo.call_names()[-2:] == ["commit_file", "create_tag"]


def test_apply_bump_without_commit(
    tmp_path: Path, version_file: Path, fake_repo: FakeRepository
) -> None:
    fake_repo.tags = ["v1.0.0"]
    plan = _plan(tmp_path, fake_repo)

    result = apply_release(
        plan=plan, config=Config(), repo=fake_repo, console=MockConsole(), commit=False, push=True  # type: ignore[arg-type]
    )

    assert isinstance(result, Ok)
    assert not result.value.committed
    assert "commit_file" not in fake_repo.call_names()
    # No commit was made, so only the tag is pushed.
    assert [c for c in fake_repo.calls if c[0] == "push"] == [("push", "origin", "v1.0.1")]


def test_apply_push_order(tmp_path: Path, version_file: Path, fake_repo: FakeRepository) -> None:
    fake_repo.tags = ["v1.0.0"]
    plan = _plan(tmp_path, fake_repo)
    config = Config(git=GitConfig(remote="upstream"))

    result = apply_release(
        plan=plan, config=config, repo=fake_repo, console=MockConsole(), commit=True, push=True  # type: ignore[arg-type]
    )

    assert isinstance(result, Ok)
    assert result.value.pushed
    assert [c for c in fake_repo.calls if c[0] == "push"] == [
        ("push", "upstream", "HEAD"),
        ("push", "upstream", "v1.0.1"),
    ]


def test_apply_commit_failure_leaves_no_tag(
    tmp_path: Path, version_file: Path, fake_repo: FakeRepository
) -> None:
    fake_repo.tags = ["v1.0.0"]
    fake_repo.fail["commit_file"] = GitError("commit", "nothing to commit")
    plan = _plan(tmp_path, fake_repo)

    result = apply_release(
        plan=plan, config=Config(), repo=fake_repo, console=MockConsole(), commit=True, push=True  # type: ignore[arg-type]
    )

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert "create_tag" not in fake_repo.call_names()


def test_apply_tag_failure(tmp_path: Path, version_file: Path, fake_repo: FakeRepository) -> None:
    fake_repo.fail["create_tag"] = GitError("tag -a", "tag 'v1.0.0' already exists")
    plan = _plan(tmp_path, fake_repo)

    result = apply_release(
        plan=plan, config=Config(), repo=fake_repo, console=MockConsole(), commit=True, push=True  # type: ignore[arg-type]
    )

    assert isinstance(result, Err)
    assert result.error.message == "git tag -a failed"
    assert "push" not in fake_repo.call_names()
