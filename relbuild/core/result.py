"""Result type for explicit error handling.

Every stage of a release build (filtering, key loading, building, manifest
writing) returns a ``Result`` instead of raising, so the command layer can
decide how each failure is reported and which exit code it maps to.

Usage:
    def load(path: Path) -> Result[Signer | None, SigningKeyError]:
        ...

    match load(path):
        case Ok(signer):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value (usually a frozen error dataclass).
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
