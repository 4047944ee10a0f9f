"""Signing key loading for release artifacts.

A signing key file holds exactly one PEM block with an elliptic-curve private
key (SEC1 ``EC PRIVATE KEY`` or PKCS#8 ``PRIVATE KEY``). Bundles, encrypted
keys and non-EC keys are rejected so that a wrong file never silently signs a
release.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..core.result import Err, Ok, Result
from .errors import SigningKeyError

__all__ = ["Signer", "Signers", "load_signing_key"]

_BEGIN_RE = re.compile(rb"^-----BEGIN ([^\r\n-]+)-----[ \t]*\r?\n", re.MULTILINE)
_END_LINE_RE = re.compile(rb"[ \t]*\r?\n")


class Signer:
    """Produces ECDSA (SHA-256) signatures with a private key.

    Stateless after construction; safe to share across targets.
    """

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        self._key = key

    @property
    def curve(self) -> str:
        return self._key.curve.name

    def sign(self, data: bytes) -> bytes:
        """Return a DER-encoded ECDSA signature over ``data``."""
        return self._key.sign(data, ec.ECDSA(hashes.SHA256()))

    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._key.public_key()

    def public_key_pem(self) -> bytes:
        return self._key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def __repr__(self) -> str:
        return f"Signer(curve={self.curve!r})"


@dataclass(frozen=True, slots=True)
class Signers:
    """Optional signers handed to targets through the build context."""

    tarball: Signer | None = None


@dataclass(frozen=True, slots=True)
class _PemBlock:
    label: str
    headers: dict[str, str]
    der: bytes


def _decode_pem(raw: bytes) -> tuple[_PemBlock | None, bytes]:
    """Decode the first PEM block in ``raw``.

    Returns (block, rest). Text before the BEGIN line is ignored. On failure the
    block is None and rest is the full input.
    """
    begin = _BEGIN_RE.search(raw)
    if begin is None:
        return None, raw

    label = begin.group(1)
    end_marker = b"-----END " + label + b"-----"
    end = raw.find(end_marker, begin.end())
    if end < 0:
        return None, raw

    lines = raw[begin.end() : end].splitlines()
    headers: dict[str, str] = {}
    while lines and b":" in lines[0]:
        key, _, value = lines.pop(0).partition(b":")
        headers[key.decode("ascii", "replace").strip()] = value.decode("ascii", "replace").strip()
    if headers and lines and not lines[0].strip():
        lines.pop(0)

    try:
        der = base64.b64decode(b"".join(b"".join(lines).split()), validate=True)
    except (binascii.Error, ValueError):
        return None, raw
    if not der:
        return None, raw

    block = _PemBlock(label=label.decode("ascii", "replace"), headers=headers, der=der)
    rest = raw[end + len(end_marker) :]
    # Only the line ending of the END line belongs to the block
    eol = _END_LINE_RE.match(rest)
    return block, rest[eol.end() :] if eol else rest


def load_signing_key(path: Path | None) -> Result[Signer | None, SigningKeyError]:
    """Load an EC private key from a single-block PEM file.

    An empty path means "no signing": Ok(None) is returned.

    Returns:
        Ok(Signer) or Ok(None) on success, Err(SigningKeyError) on failure.
    """
    if path is None or not str(path):
        return Ok(None)

    try:
        raw = path.read_bytes()
    except OSError as e:
        return Err(
            SigningKeyError(
                kind="unreadable",
                path=path,
                message=f"cannot read signing key {str(path)!r}: {e.strerror or e}",
            )
        )

    block, rest = _decode_pem(raw)
    if block is None:
        return Err(
            SigningKeyError(
                kind="malformed_pem",
                path=path,
                message=f"failed to decode PEM data in {str(path)!r}",
            )
        )
    if rest:
        return Err(
            SigningKeyError(
                kind="trailing_data",
                path=path,
                message=f"trailing data in {str(path)!r}",
                hint="check that the key file was not corrupted and holds a single key",
            )
        )
    if "ENCRYPTED" in block.headers.get("Proc-Type", ""):
        return Err(
            SigningKeyError(
                kind="invalid_key",
                path=path,
                message=f"passphrase-protected keys are not supported: {str(path)!r}",
            )
        )

    try:
        key = serialization.load_der_private_key(block.der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        return Err(
            SigningKeyError(
                kind="invalid_key",
                path=path,
                message=f"invalid private key in {str(path)!r}: {e}",
            )
        )

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        return Err(
            SigningKeyError(
                kind="invalid_key",
                path=path,
                message=f"{str(path)!r} is not an elliptic-curve private key ({block.label})",
            )
        )

    return Ok(Signer(key))
