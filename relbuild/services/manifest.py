"""Manifest of built release files.

The manifest is plain text: one path per line, each relative to the directory
containing the manifest, with no trailing newline.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from ..core.result import Err, Ok, Result
from ..platform.files import atomic_write_text
from .errors import ManifestIOError

__all__ = ["MANIFEST_MODE", "relativize", "write_manifest"]

MANIFEST_MODE = 0o644


def relativize(
    manifest_path: Path, output_paths: Sequence[str | Path], out_root: Path
) -> Result[list[str], ManifestIOError]:
    """Express each output path relative to the manifest's directory.

    Relative outputs are first joined onto ``out_root``.
    """
    manifest = Path(os.path.abspath(manifest_path))
    base = manifest.parent

    entries: list[str] = []
    for p in output_paths:
        full = Path(p)
        if not full.is_absolute():
            full = out_root / full
        try:
            entries.append(os.path.relpath(os.path.abspath(full), base))
        except ValueError as e:
            return Err(
                ManifestIOError(path=manifest, message=f"making {str(p)!r} relative: {e}")
            )
    return Ok(entries)


def write_manifest(
    manifest_path: Path, output_paths: Sequence[str | Path], out_root: Path
) -> Result[Path, ManifestIOError]:
    """Write the manifest, replacing any previous one.

    Nothing is written unless every path could be relativized.

    Returns:
        Ok(absolute manifest path) on success, Err(ManifestIOError) on failure.
    """
    manifest = Path(os.path.abspath(manifest_path))
    entries = relativize(manifest, output_paths, out_root)
    if isinstance(entries, Err):
        return entries

    try:
        atomic_write_text(manifest, "\n".join(entries.value), mode=MANIFEST_MODE)
    except OSError as e:
        return Err(ManifestIOError(path=manifest, message=f"writing manifest {manifest}: {e}"))
    return Ok(manifest)
