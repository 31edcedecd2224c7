"""Result type for explicit error handling.

Fallible operations (reading the version file, listing tags, resolving a
release) return ``Ok(value)`` or ``Err(error)`` instead of raising, so every
caller decides what a failure means for the release run.

Usage:
    match read_version_file(path):
        case Ok(version):
            print(f"stored: {version}")
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
