from __future__ import annotations

from pathlib import Path

import typer

from relbuild import __version__
from relbuild.cli.commands.build_cmd import BUILD_HELP, run_build
from relbuild.cli.commands.list_cmd import LIST_HELP, run_list
from relbuild.cli.context import build_context
from relbuild.core.config import BuildOptions
from relbuild.services.tarball import targets_from_config
from relbuild.services.targets import TargetFactory


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def create_app(get_targets: TargetFactory) -> typer.Typer:
    """Return a CLI app building the targets produced by ``get_targets``.

    ``get_targets`` receives the loaded config and is evaluated once per
    command invocation.
    """
    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="Build release packages for distribution.",
    )

    @app.callback()
    def _main(  # pyright: ignore[reportUnusedFunction]
        typer_ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
        config: Path | None = typer.Option(
            None,
            "--config",
            help="Config file (default: ./dist.toml if present)",
            show_default=False,
        ),
    ) -> None:
        typer_ctx.obj = config

    @app.command("list", help=LIST_HELP)
    def list_cmd(  # pyright: ignore[reportUnusedFunction]
        typer_ctx: typer.Context,
        filters: list[str] | None = typer.Argument(None, help="Target filters", show_default=False),
    ) -> None:
        run_list(build_context(typer_ctx.obj, get_targets), filters or [])

    @app.command("build", help=BUILD_HELP)
    def build_cmd(  # pyright: ignore[reportUnusedFunction]
        typer_ctx: typer.Context,
        filters: list[str] | None = typer.Argument(None, help="Target filters", show_default=False),
        manifest: str = typer.Option("", "--manifest", help="Manifest file to write"),
        verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
        tgz_signing_key: str = typer.Option(
            "",
            "--tgz-signing-key",
            help="Path to private signing key for release tarballs",
        ),
        out: Path | None = typer.Option(
            None, "--out", help="Output directory (default: ./dist)", show_default=False
        ),
        timeout: float | None = typer.Option(
            None,
            "--timeout",
            min=0,
            help="Stop before starting further targets after this many seconds",
            show_default=False,
        ),
    ) -> None:
        ctx = build_context(typer_ctx.obj, get_targets)
        options = BuildOptions.resolve(
            ctx.config,
            root=ctx.root,
            out_dir=out,
            manifest=Path(manifest) if manifest else None,
            verbose=True if verbose else None,
            tgz_signing_key=Path(tgz_signing_key) if tgz_signing_key else None,
            timeout=timeout,
        )
        run_build(ctx, filters or [], options)

    return app


def main() -> None:
    create_app(targets_from_config)()
