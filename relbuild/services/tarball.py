"""Tarball release target.

Packs a source directory into a gzip'd tarball in the output directory and,
when a tarball signer is configured, writes a detached ``.sig`` next to it.
"""

from __future__ import annotations

import shutil
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.config import Config
from ..core.result import Err, Ok, Result

if TYPE_CHECKING:
    from .build import BuildContext
    from .targets import Target

__all__ = ["SIGNATURE_SUFFIX", "TarballTarget", "targets_from_config"]

SIGNATURE_SUFFIX = ".sig"


def _normalize(info: tarfile.TarInfo) -> tarfile.TarInfo:
    # Reproducible archives: no local ownership or timestamps
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    info.mtime = 0
    return info


@dataclass(frozen=True, slots=True)
class TarballTarget:
    name: str
    source: str
    output: str | None = None

    @property
    def filename(self) -> str:
        return self.output or f"{self.name.replace('/', '-')}.tgz"

    def build(self, ctx: BuildContext) -> Result[list[str | Path], object]:
        src = ctx.root / self.source
        if not src.is_dir():
            return Err(f"source directory not found: {src}")

        staging = ctx.scratch_dir(prefix="tgz-") / Path(self.filename).name
        ctx.log(f"packing {src} -> {self.filename}")
        with tarfile.open(staging, "w:gz") as tar:
            for p in sorted(src.rglob("*")):
                if p.is_dir():
                    continue
                tar.add(p, arcname=p.relative_to(src).as_posix(), filter=_normalize)

        dest = ctx.out / self.filename
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(staging, dest)
        outputs: list[str | Path] = [self.filename]

        signer = ctx.signers.tarball
        if signer is not None:
            sig = dest.with_name(dest.name + SIGNATURE_SUFFIX)
            sig.write_bytes(signer.sign(dest.read_bytes()))
            ctx.log(f"signed {self.filename} ({signer.curve})")
            outputs.append(self.filename + SIGNATURE_SUFFIX)

        return Ok(outputs)


def targets_from_config(config: Config) -> list[Target]:
    """Build the target registry declared in ``[[targets]]``."""
    return [TarballTarget(name=t.name, source=t.source, output=t.output) for t in config.targets]
