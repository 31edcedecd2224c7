"""Release version resolution and recording."""

from relver.release.errors import ReleaseError
from relver.release.resolver import Resolution, ResolveAction, resolve, resolve_text
from relver.release.semver import Version, parse_tag, parse_version
from relver.release.tagset import TagSet, collect_tags

__all__ = [
    "ReleaseError",
    "Resolution",
    "ResolveAction",
    "TagSet",
    "Version",
    "collect_tags",
    "parse_tag",
    "parse_version",
    "resolve",
    "resolve_text",
]
