"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from modrel.core.result import Err, Result
from modrel.output.errors import error_exit_code, print_error
from modrel.services.release_errors import ReleaseError
from modrel.services.state import RepoState, load_repo_state
from modrel.versioning.errors import VersioningError

if TYPE_CHECKING:
    from modrel.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(
    result: Result[T, VersioningError | ReleaseError],
    ctx: CLIContext,
) -> T:
    """Return the value of an Ok result; print and exit on Err.

    The exit code follows the error kind (see modrel.output.errors).
    """
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def load_state_or_exit(ctx: CLIContext, versioning_file: Path) -> RepoState:
    return exit_on_error(
        load_repo_state(
            repo_root=ctx.repo_root,
            versioning_file=versioning_file,
            config=ctx.config,
            console=ctx.console,
        ),
        ctx,
    )
