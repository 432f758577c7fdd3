from __future__ import annotations

from pathlib import Path

import typer

from modrel.cli.commands._helpers import exit_on_error, load_state_or_exit
from modrel.cli.context import build_context
from modrel.services.verify import run_verify


def verify(
    versioning_file: Path | None = typer.Option(
        None,
        "--versioning-file",
        "-v",
        help="Versioning file defining all module sets (default: <repo>/versions.yaml).",
    ),
) -> None:
    """Verify that the versioning file is consistent with the repository.

    - All modules are contained in exactly one module set.
    - Versions conform to semver semantics.
    - No more than one module set exists for any non-zero major version.
    - Warns if any stable modules depend on any unstable modules.
    """
    ctx = build_context()
    path = ctx.versioning_path(versioning_file)
    ctx.console.info(f"Using versioning file {path}")

    state = load_state_or_exit(ctx, path)
    exit_on_error(run_verify(state, ctx.console), ctx)

    ctx.console.success("Module sets successfully verified.")
