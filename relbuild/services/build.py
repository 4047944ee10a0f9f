"""Build orchestration for release targets.

A ``BuildContext`` is the resource scope of one ``build`` invocation: it holds
the root and output directories, the verbosity flag, the optional signers and
a scratch directory that is removed on ``close()``. Use it as a context
manager so resources are released on every exit path:

    match new_build(root, out, console=console):
        case Ok(ctx):
            with ctx:
                result = ctx.build(targets)
"""

from __future__ import annotations

import shutil
import tempfile
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..core.result import Err, Ok, Result
from ..output.console import ConsoleProtocol, Style
from .errors import BuildError
from .signing import Signers
from .targets import Target

__all__ = [
    "BuildContext",
    "BuildResult",
    "CancelToken",
    "Deadline",
    "new_build",
    "require_targets",
]

_NO_TARGETS_HINT = "did you mean 'build all'?"


class CancelToken(Protocol):
    """Anything that can report an external abort request (e.g. threading.Event)."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Deadline:
    """Cancellation token that trips once a monotonic deadline has passed."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        return cls(expires_at=time.monotonic() + seconds)

    def is_set(self) -> bool:
        return time.monotonic() >= self.expires_at


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Output paths in target build order, plus wall-clock duration."""

    paths: tuple[str, ...]
    elapsed: float


def require_targets(targets: Sequence[Target]) -> Result[Sequence[Target], BuildError]:
    """Reject an empty selection; a build never runs with nothing to build."""
    if not targets:
        return Err(
            BuildError(kind="no_targets", message="no targets matched", hint=_NO_TARGETS_HINT)
        )
    return Ok(targets)


def _describe(cause: object) -> str:
    message = getattr(cause, "message", None)
    if isinstance(message, str):
        return message
    return str(cause)


class BuildContext:
    """Shared state and owned resources for one build invocation."""

    def __init__(
        self,
        *,
        root: Path,
        out: Path,
        scratch: Path,
        console: ConsoleProtocol,
        verbose: bool = False,
        signers: Signers | None = None,
    ) -> None:
        self._root = root
        self._out = out
        self._scratch = scratch
        self._console = console
        self._verbose = verbose
        self._signers = signers or Signers()
        self._closed = False

    @property
    def root(self) -> Path:
        return self._root

    @property
    def out(self) -> Path:
        return self._out

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def signers(self) -> Signers:
        return self._signers

    @property
    def console(self) -> ConsoleProtocol:
        return self._console

    @property
    def closed(self) -> bool:
        return self._closed

    def log(self, message: str) -> None:
        """Print a diagnostic line when verbose output is enabled."""
        if self._verbose:
            self._console.print(message, Style.DIM)

    def scratch_dir(self, prefix: str = "tmp-") -> Path:
        """Create a fresh temporary directory, removed when the context closes."""
        if self._closed:
            raise RuntimeError("build context is closed")
        return Path(tempfile.mkdtemp(prefix=prefix, dir=self._scratch))

    def build(
        self,
        targets: Sequence[Target],
        *,
        cancel: CancelToken | None = None,
    ) -> Result[BuildResult, BuildError]:
        """Build ``targets`` in order, stopping at the first failure.

        Returns:
            Ok(BuildResult) with all output paths in target order.
            Err(BuildError) if nothing matched, a target failed, the build was
            cancelled before the next target, or the context is closed.
        """
        checked = require_targets(targets)
        if isinstance(checked, Err):
            return checked
        if self._closed:
            return Err(BuildError(kind="context_failed", message="build context is closed"))

        start = time.monotonic()
        paths: list[str] = []
        for target in targets:
            if cancel is not None and cancel.is_set():
                return Err(
                    BuildError(
                        kind="cancelled",
                        message=f"build cancelled before {target.name}",
                        target=target.name,
                    )
                )

            self.log(f"building {target.name}")
            try:
                result = target.build(self)
            except Exception as e:  # noqa: BLE001
                return Err(
                    BuildError(
                        kind="target_failed",
                        message=f"{target.name}: {e}",
                        target=target.name,
                    )
                )

            if isinstance(result, Err):
                return Err(
                    BuildError(
                        kind="target_failed",
                        message=f"{target.name}: {_describe(result.error)}",
                        target=target.name,
                    )
                )

            for p in result.value:
                self.log(f"  {p}")
                paths.append(str(p))

        return Ok(BuildResult(paths=tuple(paths), elapsed=time.monotonic() - start))

    def close(self) -> None:
        """Release the scratch directory. Later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        if self._scratch.exists():
            shutil.rmtree(self._scratch)

    def __enter__(self) -> BuildContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: object | None,
    ) -> None:
        self.close()


def new_build(
    root: Path,
    out: Path,
    *,
    console: ConsoleProtocol,
    verbose: bool = False,
    signers: Signers | None = None,
) -> Result[BuildContext, BuildError]:
    """Create a BuildContext, creating ``out`` and a private scratch directory.

    A relative ``out`` is taken relative to ``root``.
    """
    try:
        root = root.resolve()
        out = (out if out.is_absolute() else root / out).resolve()
        out.mkdir(parents=True, exist_ok=True)
        scratch = Path(tempfile.mkdtemp(prefix="relbuild-"))
    except OSError as e:
        return Err(BuildError(kind="context_failed", message=f"creating build context: {e}"))

    return Ok(
        BuildContext(
            root=root,
            out=out,
            scratch=scratch,
            console=console,
            verbose=verbose,
            signers=signers,
        )
    )
