from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relver.core.config import Config
from relver.core.result import Err, Ok, Result
from relver.git.repository import GitError, Repository
from relver.output.console import ConsoleProtocol, Style
from relver.release.errors import ReleaseError
from relver.release.resolver import Resolution, resolve
from relver.release.semver import TAG_PREFIX, Version
from relver.release.tagset import TagSet, collect_tags
from relver.release.version_file import read_version_file, write_version_file


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    version_path: Path
    resolution: Resolution
    known_tags: int
    latest: Version | None = None


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    plan: ReleasePlan
    wrote_version_file: bool
    committed: bool
    tagged: bool
    pushed: bool


def git_release_error(error: GitError) -> ReleaseError:
    if error.git_missing:
        return ReleaseError(
            kind="git_missing",
            message="git: missing",
            hint=error.message,
        )
    if error.timed_out:
        return ReleaseError(
            kind="git_failed",
            message=f"git {error.command} timed out",
            hint="check network access to the remote",
        )
    return ReleaseError(
        kind="git_failed",
        message=f"git {error.command} failed",
        hint=error.message,
    )


def load_tags(*, repo: Repository, remote: str, fetch: bool) -> Result[TagSet, ReleaseError]:
    if fetch:
        fetched = repo.fetch_tags(remote)
        if isinstance(fetched, Err):
            return Err(git_release_error(fetched.error))

    listed = repo.list_tags(f"{TAG_PREFIX}*")
    if isinstance(listed, Err):
        return Err(git_release_error(listed.error))
    return collect_tags(listed.value)


def plan_release(
    *,
    root: Path,
    config: Config,
    repo: Repository,
    fetch: bool,
) -> Result[ReleasePlan, ReleaseError]:
    version_path = config.version_path(root)
    stored = read_version_file(version_path)
    if isinstance(stored, Err):
        return stored

    tags = load_tags(repo=repo, remote=config.git.remote, fetch=fetch)
    if isinstance(tags, Err):
        return tags

    resolved = resolve(stored.value, tags.value)
    if isinstance(resolved, Err):
        return resolved

    return Ok(
        ReleasePlan(
            version_path=version_path,
            resolution=resolved.value,
            known_tags=len(tags.value),
            latest=tags.value.latest(),
        )
    )


def apply_release(
    *,
    plan: ReleasePlan,
    config: Config,
    repo: Repository,
    console: ConsoleProtocol,
    commit: bool,
    push: bool,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Record a planned release: version file, commit, tag, push.

    The tag is created last so a failure in an earlier step leaves no tag.
    """
    resolution = plan.resolution
    version = str(resolution.version)
    tag = resolution.tag
    remote = config.git.remote

    wrote = False
    committed = False
    if resolution.bumped:
        written = write_version_file(plan.version_path, resolution.version)
        if isinstance(written, Err):
            return written
        wrote = True
        console.print(f"wrote {plan.version_path.name}: {version}", Style.DIM)

        if commit:
            message = config.git.render_commit_message(version=version, tag=tag)
            done = repo.commit_file(plan.version_path, message)
            if isinstance(done, Err):
                return Err(git_release_error(done.error))
            committed = True
            console.print(f"committed: {message}", Style.DIM)

    tagged = repo.create_tag(tag, config.git.render_tag_message(version=version, tag=tag))
    if isinstance(tagged, Err):
        return Err(git_release_error(tagged.error))
    console.success(f"tagged {tag}")

    if push:
        if committed:
            pushed = repo.push(remote, "HEAD")
            if isinstance(pushed, Err):
                return Err(git_release_error(pushed.error))
        pushed = repo.push(remote, tag)
        if isinstance(pushed, Err):
            return Err(git_release_error(pushed.error))
        console.success(f"pushed {tag} to {remote}")

    return Ok(
        ReleaseOutcome(
            plan=plan,
            wrote_version_file=wrote,
            committed=committed,
            tagged=True,
            pushed=push,
        )
    )
