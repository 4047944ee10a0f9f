from __future__ import annotations

from pathlib import Path

import pytest

from relbuild.core.config import ConfigError
from relbuild.core.errors import ErrorCode
from relbuild.output.console import MockConsole, Style
from relbuild.output.errors import dist_error_exit_code, print_dist_error
from relbuild.services.errors import (
    BuildError,
    DistError,
    FilterError,
    ManifestIOError,
    SigningKeyError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (
            FilterError(kind="invalid_pattern", message="invalid filter", pattern="["),
            ErrorCode.USER_ERROR,
        ),
        (ConfigError(message="bad config"), ErrorCode.USER_ERROR),
        (BuildError(kind="no_targets", message="no targets matched"), ErrorCode.BUILD_ERROR),
        (BuildError(kind="target_failed", message="A: boom", target="A"), ErrorCode.BUILD_ERROR),
        (BuildError(kind="cancelled", message="cancelled", target="B"), ErrorCode.CANCELLED),
        (
            SigningKeyError(kind="trailing_data", path=Path("k.pem"), message="trailing data"),
            ErrorCode.SIGNING_ERROR,
        ),
        (ManifestIOError(path=Path("m.txt"), message="writing manifest"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: DistError | ConfigError, code: ErrorCode) -> None:
    assert dist_error_exit_code(error) == int(code)


def test_print_includes_hint() -> None:
    console = MockConsole()
    print_dist_error(
        BuildError(
            kind="no_targets",
            message="no targets matched",
            hint="did you mean 'build all'?",
        ),
        console,
    )
    assert console.messages == ["error: no targets matched", "hint: did you mean 'build all'?"]
    assert console.outputs[1].style == Style.DIM


def test_print_without_hint() -> None:
    console = MockConsole()
    print_dist_error(ManifestIOError(path=Path("m.txt"), message="writing manifest"), console)
    assert console.messages == ["error: writing manifest"]
