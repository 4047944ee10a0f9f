from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import typer

from relbuild.core.config import CONFIG_FILENAME, Config, load_config_or_default
from relbuild.core.errors import ErrorCode
from relbuild.core.result import Err
from relbuild.output.console import ConsoleProtocol, RichConsole
from relbuild.services.targets import Target, TargetFactory


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    targets: Sequence[Target]
    console: ConsoleProtocol


def build_context(config_path: Path | None, get_targets: TargetFactory) -> CLIContext:
    """Load config and evaluate the target registry once for this command.

    A missing default ``dist.toml`` means an empty config; a missing explicit
    ``--config`` file is an error.
    """
    console = RichConsole()
    root = Path.cwd()

    result = load_config_or_default(
        config_path or root / CONFIG_FILENAME, required=config_path is not None
    )
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = result.value

    return CLIContext(
        root=root,
        config=config,
        targets=list(get_targets(config)),
        console=console,
    )
