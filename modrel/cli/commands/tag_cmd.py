from __future__ import annotations

from pathlib import Path

import typer

from modrel.cli.commands._helpers import exit_on_error, exit_with_code, load_state_or_exit
from modrel.cli.context import build_context
from modrel.core.errors import ErrorCode
from modrel.git.repository import Repository
from modrel.services.tagging import delete_tags, tag_all_modules
from modrel.versioning.tags import versions_and_modules_to_update


def tag(
    commit_hash: str | None = typer.Option(
        None,
        "--commit-hash",
        "-c",
        help="Commit to tag (required unless --delete-module-set-tags).",
    ),
    module_set: str = typer.Option(
        ...,
        "--module-set",
        "-m",
        help="Name of the module set being tagged, as listed in the versioning file.",
    ),
    versioning_file: Path | None = typer.Option(
        None,
        "--versioning-file",
        "-v",
        help="Versioning file defining all module sets (default: <repo>/versions.yaml).",
    ),
    delete_module_set_tags: bool = typer.Option(
        False,
        "--delete-module-set-tags",
        "-d",
        help="Delete every tag of the set's current version. Only for undoing tagging mistakes.",
    ),
) -> None:
    """Tag a commit with the versions of every module in a set.

    If tagging fails partway, the tags created by this run are removed.
    """
    ctx = build_context()
    if not delete_module_set_tags and not commit_hash:
        ctx.console.error("--commit-hash is required unless --delete-module-set-tags is given")
        exit_with_code(int(ErrorCode.USER_ERROR))

    state = load_state_or_exit(ctx, ctx.versioning_path(versioning_file))
    targets = exit_on_error(
        versions_and_modules_to_update(state.registry, module_set, ctx.repo_root, state.discovered),
        ctx,
    )
    repo = Repository(ctx.repo_root)

    if delete_module_set_tags:
        exit_on_error(delete_tags(repo, targets.full_tags, console=ctx.console), ctx)
        ctx.console.success("Deleted module tags.")
        return

    assert commit_hash is not None
    exit_on_error(
        tag_all_modules(
            repo,
            targets.full_tags,
            commit_hash,
            console=ctx.console,
            sign=ctx.config.tag.sign,
        ),
        ctx,
    )
    ctx.console.success(f"Tagged {len(targets.full_tags)} modules at {targets.version}.")
