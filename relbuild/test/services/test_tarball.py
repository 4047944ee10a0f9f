from __future__ import annotations

import tarfile
from pathlib import Path

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from relbuild.core.config import Config, TargetConfig
from relbuild.core.result import Err, Ok
from relbuild.output.console import MockConsole
from relbuild.services.build import BuildContext, new_build
from relbuild.services.signing import Signer, Signers
from relbuild.services.tarball import TarballTarget, targets_from_config


def _source(root: Path) -> Path:
    src = root / "docs"
    (src / "guide").mkdir(parents=True)
    (src / "README.md").write_text("readme", encoding="utf-8")
    (src / "guide" / "intro.md").write_text("intro", encoding="utf-8")
    return src


def _ctx(root: Path, signers: Signers | None = None) -> BuildContext:
    result = new_build(root, Path("dist"), console=MockConsole(), signers=signers)
    assert isinstance(result, Ok)
    return result.value


def test_default_filename_from_name() -> None:
    assert TarballTarget(name="docs/tgz", source="docs").filename == "docs-tgz.tgz"
    assert TarballTarget(name="docs", source="docs", output="x/y.tgz").filename == "x/y.tgz"


def test_packs_source_into_out_dir(tmp_path: Path) -> None:
    _source(tmp_path)
    with _ctx(tmp_path) as ctx:
        result = TarballTarget(name="docs", source="docs").build(ctx)
        out = ctx.out

    assert result == Ok(["docs.tgz"])
    with tarfile.open(out / "docs.tgz", "r:gz") as tar:
        assert sorted(tar.getnames()) == ["README.md", "guide/intro.md"]
        assert all(m.mtime == 0 and m.uid == 0 for m in tar.getmembers())
    assert not (out / "docs.tgz.sig").exists()


def test_output_in_subdirectory(tmp_path: Path) -> None:
    _source(tmp_path)
    with _ctx(tmp_path) as ctx:
        result = TarballTarget(name="docs", source="docs", output="pkgs/docs.tgz").build(ctx)
        assert (ctx.out / "pkgs" / "docs.tgz").is_file()
    assert result == Ok(["pkgs/docs.tgz"])


def test_signs_archive_when_signer_present(tmp_path: Path) -> None:
    _source(tmp_path)
    signer = Signer(ec.generate_private_key(ec.SECP256R1()))

    with _ctx(tmp_path, Signers(tarball=signer)) as ctx:
        result = TarballTarget(name="docs", source="docs").build(ctx)
        archive = (ctx.out / "docs.tgz").read_bytes()
        signature = (ctx.out / "docs.tgz.sig").read_bytes()

    assert result == Ok(["docs.tgz", "docs.tgz.sig"])
    signer.public_key().verify(signature, archive, ec.ECDSA(hashes.SHA256()))


def test_missing_source_is_error(tmp_path: Path) -> None:
    with _ctx(tmp_path) as ctx:
        result = TarballTarget(name="docs", source="missing").build(ctx)
    assert isinstance(result, Err)
    assert "source directory not found" in str(result.error)


def test_targets_from_config() -> None:
    config = Config(
        targets=(
            TargetConfig(name="docs", source="docs"),
            TargetConfig(name="site", source="public", output="site.tgz"),
        )
    )
    targets = targets_from_config(config)
    assert [t.name for t in targets] == ["docs", "site"]
    assert targets[1] == TarballTarget(name="site", source="public", output="site.tgz")


def test_targets_from_empty_config() -> None:
    assert targets_from_config(Config()) == []
