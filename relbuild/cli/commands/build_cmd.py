"""Build command - build release files and optionally write a manifest."""

from __future__ import annotations

import time
from collections.abc import Sequence

from relbuild.cli.commands._helpers import unwrap_or_exit
from relbuild.cli.context import CLIContext
from relbuild.core.config import BuildOptions
from relbuild.output.console import Style
from relbuild.services.build import Deadline, new_build, require_targets
from relbuild.services.manifest import write_manifest
from relbuild.services.signing import Signers, load_signing_key
from relbuild.services.targets import filter_targets

BUILD_HELP = """Build release files.

If filters are provided, only targets matching at least one filter are built.
Filters can use glob patterns (* and ?).
"""


def run_build(ctx: CLIContext, filters: Sequence[str], options: BuildOptions) -> None:
    """Filter, build, and write the manifest; exits on the first error."""
    targets = unwrap_or_exit(filter_targets(ctx.targets, filters), ctx)
    targets = unwrap_or_exit(require_targets(targets), ctx)
    tgz_signer = unwrap_or_exit(load_signing_key(options.tgz_signing_key), ctx)

    start = time.monotonic()
    build = unwrap_or_exit(
        new_build(
            options.root,
            options.out_dir,
            console=ctx.console,
            verbose=options.verbose,
            signers=Signers(tarball=tgz_signer),
        ),
        ctx,
    )
    with build:
        cancel = Deadline.after(options.timeout) if options.timeout is not None else None
        result = unwrap_or_exit(build.build(targets, cancel=cancel), ctx)

        if options.manifest is not None:
            written = unwrap_or_exit(write_manifest(options.manifest, result.paths, build.out), ctx)
            build.log(f"manifest: {written}")

    ctx.console.print(f"Done! Took {time.monotonic() - start:.2f}s", Style.SUCCESS)
