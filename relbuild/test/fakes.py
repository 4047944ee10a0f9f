"""Test doubles shared across the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from relbuild.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from relbuild.services.build import BuildContext


def _no_outputs() -> list[str | Path]:
    return []


def _no_calls() -> list[str]:
    return []


@dataclass
class FakeTarget:
    """Target that records invocations and returns canned outputs."""

    name: str
    outputs: list[str | Path] = field(default_factory=_no_outputs)
    error: str | None = None
    raises: Exception | None = None
    calls: list[str] = field(default_factory=_no_calls)

    def build(self, ctx: BuildContext) -> Result[list[str | Path], object]:
        self.calls.append(self.name)
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return Err(self.error)
        return Ok(list(self.outputs))


def registry(*names: str) -> list[FakeTarget]:
    return [FakeTarget(name=n, outputs=[f"{n}.tgz"]) for n in names]


def ec_key_pem(
    fmt: serialization.PrivateFormat = serialization.PrivateFormat.TraditionalOpenSSL,
) -> bytes:
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    )
