from __future__ import annotations

from pathlib import Path

import typer

from modrel.cli.commands._helpers import exit_on_error, exit_with_code, load_state_or_exit
from modrel.cli.context import build_context
from modrel.core.errors import ErrorCode
from modrel.git.repository import Repository
from modrel.services.prerelease import PrereleaseService
from modrel.versioning.tags import versions_and_modules_to_update


def prerelease(
    module_set: str = typer.Option(
        ...,
        "--module-set",
        "-m",
        help="Name of the module set being released, as listed in the versioning file.",
    ),
    versioning_file: Path | None = typer.Option(
        None,
        "--versioning-file",
        "-v",
        help="Versioning file defining all module sets (default: <repo>/versions.yaml).",
    ),
    from_existing_branch: str | None = typer.Option(
        None,
        "--from-existing-branch",
        "-f",
        help="Branch to base the prerelease branch on (default: current branch).",
    ),
    skip_make: bool = typer.Option(
        False,
        "--skip-make",
        "-s",
        help="Skip 'make lint' and 'make ci'. For debugging only, never for a real release.",
    ),
) -> None:
    """Prepare a module set release on a new branch.

    Checks that no tags exist for the new version and the working tree is
    clean, creates the prerelease branch, updates module versions in all
    declaration files, runs make and commits.
    """
    ctx = build_context()
    state = load_state_or_exit(ctx, ctx.versioning_path(versioning_file))
    targets = exit_on_error(
        versions_and_modules_to_update(state.registry, module_set, ctx.repo_root, state.discovered),
        ctx,
    )

    repo = Repository(ctx.repo_root)
    base = from_existing_branch or repo.current_branch()
    if base is None:
        ctx.console.error("could not determine current branch; pass --from-existing-branch")
        exit_with_code(int(ErrorCode.USER_ERROR))

    service = PrereleaseService(
        scm=repo,
        repo_root=ctx.repo_root,
        config=ctx.config.prerelease,
        console=ctx.console,
    )
    exit_on_error(
        service.run(
            targets,
            sorted(state.discovered.values()),
            base_branch=base,
            skip_make=skip_make,
        ),
        ctx,
    )

    ctx.console.newline()
    ctx.console.success("Prerelease finished. Now run the following to verify the changes:")
    ctx.console.print(f"  git diff {base}")
    ctx.console.print("Then, push the changes to upstream.")
