"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relbuild.core.config import ConfigError
from relbuild.core.result import Err, Result
from relbuild.output.errors import dist_error_exit_code, print_dist_error
from relbuild.services.errors import DistError

if TYPE_CHECKING:
    from relbuild.cli.context import CLIContext

T = TypeVar("T")


def unwrap_or_exit(result: Result[T, DistError | ConfigError], ctx: CLIContext) -> T:
    """Return the Ok value, or report the error and exit with its code.

    This replaces the common pattern:
        match result:
            case Err(e):
                print_dist_error(e, ctx.console)
                raise typer.Exit(code=dist_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value


def fail(error: DistError | ConfigError, ctx: CLIContext) -> NoReturn:
    print_dist_error(error, ctx.console)
    raise typer.Exit(code=dist_error_exit_code(error))
