from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from relbuild.platform.files import atomic_write_text


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "manifest.txt"
    atomic_write_text(path, "a.tgz\nb.tgz")

    assert path.read_text(encoding="utf-8") == "a.tgz\nb.tgz"


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "manifest.txt"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_atomic_write_text_applies_mode(tmp_path: Path) -> None:
    path = tmp_path / "manifest.txt"
    atomic_write_text(path, "x", mode=0o600)
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "manifest.txt"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert list(path.parent.glob(f".{path.name}.*.tmp")) == []
    assert not path.exists()
