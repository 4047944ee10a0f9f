"""Release targets and glob filtering."""

from __future__ import annotations

import fnmatch
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..core.config import Config
from ..core.result import Err, Ok, Result
from .errors import FilterError

if TYPE_CHECKING:
    from .build import BuildContext

__all__ = ["ALL", "Target", "TargetFactory", "filter_targets"]

ALL = "all"


class Target(Protocol):
    """A named, independently buildable release unit.

    ``build`` returns the produced file paths, either absolute or relative to
    the build's output directory. It may raise ``OSError``; the orchestrator
    reports that as a failure of this target.
    """

    @property
    def name(self) -> str: ...

    def build(self, ctx: BuildContext) -> Result[list[str | Path], object]: ...


TargetFactory = Callable[[Config], Sequence[Target]]


def _validate_pattern(pattern: str) -> str | None:
    """Return a reason if ``pattern`` is not a well-formed glob."""
    if not pattern:
        return "empty pattern"

    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c != "[":
            continue
        # Same class rules as fnmatch: a leading '!' and a leading ']' are literal
        j = i
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            return f"unclosed character class at offset {i - 1}"
        i = j + 1
    return None


def filter_targets(
    targets: Sequence[Target], patterns: Sequence[str]
) -> Result[list[Target], FilterError]:
    """Select targets whose name matches at least one pattern.

    Patterns use case-sensitive glob syntax (``*``, ``?``, ``[...]``); the
    keyword ``all`` matches everything and an empty pattern list means
    ``["all"]``. Registry order is preserved and each target appears once.
    An empty selection is not an error here.
    """
    pats = list(patterns) or [ALL]
    for p in pats:
        if p == ALL:
            continue
        reason = _validate_pattern(p)
        if reason is not None:
            return Err(
                FilterError(
                    kind="invalid_pattern",
                    message=f"invalid filter {p!r}: {reason}",
                    pattern=p,
                )
            )

    seen: set[str] = set()
    for t in targets:
        if t.name in seen:
            return Err(
                FilterError(
                    kind="duplicate_name",
                    message=f"duplicate target name {t.name!r}",
                    target=t.name,
                )
            )
        seen.add(t.name)

    match_all = ALL in pats
    return Ok(
        [t for t in targets if match_all or any(fnmatch.fnmatchcase(t.name, p) for p in pats)]
    )
