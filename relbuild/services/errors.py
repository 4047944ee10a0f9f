from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class FilterError:
    kind: Literal["invalid_pattern", "duplicate_name"]
    message: str
    pattern: str | None = None
    target: str | None = None


@dataclass(frozen=True, slots=True)
class BuildError:
    kind: Literal["no_targets", "target_failed", "cancelled", "context_failed"]
    message: str
    target: str | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class SigningKeyError:
    kind: Literal["unreadable", "malformed_pem", "trailing_data", "invalid_key"]
    path: Path
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ManifestIOError:
    path: Path
    message: str


DistError = FilterError | BuildError | SigningKeyError | ManifestIOError
