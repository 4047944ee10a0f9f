"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relbuild.core.config import ConfigError
from relbuild.core.errors import ErrorCode
from relbuild.output.console import Style
from relbuild.services.errors import (
    BuildError,
    DistError,
    FilterError,
    ManifestIOError,
    SigningKeyError,
)

if TYPE_CHECKING:
    from relbuild.output.console import ConsoleProtocol

__all__ = ["print_dist_error", "dist_error_exit_code"]


def print_dist_error(error: DistError | ConfigError, console: ConsoleProtocol) -> None:
    """Print an orchestration error with its hint, if any."""
    console.error(error.message)
    match error:
        case BuildError(hint=hint) | SigningKeyError(hint=hint) if hint:
            console.print(f"hint: {hint}", Style.DIM)
        case _:
            pass


def dist_error_exit_code(error: DistError | ConfigError) -> int:
    """Get exit code for an orchestration error."""
    match error:
        case FilterError() | ConfigError():
            return int(ErrorCode.USER_ERROR)
        case BuildError(kind="cancelled"):
            return int(ErrorCode.CANCELLED)
        case BuildError():
            return int(ErrorCode.BUILD_ERROR)
        case SigningKeyError():
            return int(ErrorCode.SIGNING_ERROR)
        case ManifestIOError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.BUILD_ERROR)
