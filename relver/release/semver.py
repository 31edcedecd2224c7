from __future__ import annotations

import re
from dataclasses import dataclass

from relver.core.result import Err, Ok, Result
from relver.release.errors import ReleaseError

TAG_PREFIX = "v"

_COMPONENT = r"(0|[1-9][0-9]*)"
_VERSION_RE = re.compile(rf"^{_COMPONENT}\.{_COMPONENT}\.{_COMPONENT}$")
_TAG_RE = re.compile(rf"^{TAG_PREFIX}{_COMPONENT}\.{_COMPONENT}\.{_COMPONENT}$")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"version components must be non-negative: {self!s}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"{TAG_PREFIX}{self}"

    def next_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> Result[Version, ReleaseError]:
    """Parse a stored ``X.Y.Z`` string.

    Surrounding whitespace is ignored; anything else (a ``v`` prefix,
    pre-release or build suffixes, missing components) is rejected.
    """
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(
            ReleaseError(
                kind="invalid_version_format",
                message=f"invalid version {text.strip()!r}: expected X.Y.Z",
                hint="use three dot-separated integers, e.g. 1.4.2",
            )
        )
    return Ok(Version(int(m.group(1)), int(m.group(2)), int(m.group(3))))


def parse_tag(tag: str) -> Version | None:
    m = _TAG_RE.match(tag)
    if m is None:
        return None
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)))
