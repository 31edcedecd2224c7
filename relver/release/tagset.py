"""Existing release tags, as seen by the resolver."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from relver.core.result import Err, Ok, Result
from relver.release.errors import ReleaseError
from relver.release.semver import TAG_PREFIX, Version, parse_tag


@dataclass(frozen=True, slots=True)
class TagSet:
    """Read-only set of ``vX.Y.Z`` tags."""

    tags: frozenset[str] = field(default_factory=frozenset)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __len__(self) -> int:
        return len(self.tags)

    def has_version(self, version: Version) -> bool:
        return version.to_tag() in self.tags

    def latest(self) -> Version | None:
        versions = [v for v in (parse_tag(t) for t in self.tags) if v is not None]
        return max(versions, default=None)

    @classmethod
    def of(cls, *tags: str) -> TagSet:
        """Build a TagSet without validation (tests, literals)."""
        return cls(frozenset(tags))


def collect_tags(raw: Iterable[str]) -> Result[TagSet, ReleaseError]:
    """Validate raw tag names from the release store.

    Tags outside the ``v`` namespace are ignored. A ``v``-prefixed tag that
    is not ``vX.Y.Z`` is rejected rather than skipped.
    """
    tags: set[str] = set()
    for name in raw:
        tag = name.strip()
        if not tag.startswith(TAG_PREFIX):
            continue
        if parse_tag(tag) is None:
            return Err(
                ReleaseError(
                    kind="invalid_version_format",
                    message=f"existing tag {tag!r} is not a vX.Y.Z release tag",
                    hint="delete or rename the tag, release tags must be vX.Y.Z",
                )
            )
        tags.add(tag)
    return Ok(TagSet(frozenset(tags)))
