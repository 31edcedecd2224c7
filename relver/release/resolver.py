"""Pick the version a release run publishes.

The stored version is used as-is unless its tag already exists, in which case
the patch component is bumped once. If the bumped tag exists too, the run
stops: there is no second increment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from relver.core.result import Err, Ok, Result
from relver.release.errors import ReleaseError
from relver.release.semver import Version, parse_version
from relver.release.tagset import TagSet


class ResolveAction(Enum):
    USE_AS_IS = "use_as_is"
    INCREMENT_PATCH = "increment_patch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Resolution:
    stored: Version
    version: Version
    action: ResolveAction

    @property
    def tag(self) -> str:
        return self.version.to_tag()

    @property
    def bumped(self) -> bool:
        return self.action is ResolveAction.INCREMENT_PATCH


def resolve(stored: Version, existing: TagSet) -> Result[Resolution, ReleaseError]:
    if existing.has_version(stored):
        candidate = stored.next_patch()
        action = ResolveAction.INCREMENT_PATCH
    else:
        candidate = stored
        action = ResolveAction.USE_AS_IS

    if existing.has_version(candidate):
        return Err(
            ReleaseError(
                kind="version_conflict",
                message=(
                    f"tags {stored.to_tag()} and {candidate.to_tag()} already exist"
                ),
                hint="bump the version file manually (minor or major) before releasing",
            )
        )

    return Ok(Resolution(stored=stored, version=candidate, action=action))


def resolve_text(stored: str, existing: TagSet) -> Result[Resolution, ReleaseError]:
    """Parse ``stored`` as ``X.Y.Z`` then resolve it."""
    parsed = parse_version(stored)
    if isinstance(parsed, Err):
        return parsed
    return resolve(parsed.value, existing)
