"""Creating and deleting the git tags of a module set release."""

from __future__ import annotations

from collections.abc import Iterable

from modrel.core.result import Err, Ok, Result
from modrel.git.repository import SourceControl
from modrel.output.console import ConsoleProtocol, Style
from modrel.services.release_errors import ExternalToolError

__all__ = ["delete_tags", "tag_all_modules"]


def delete_tags(
    scm: SourceControl,
    full_tags: Iterable[str],
    *,
    console: ConsoleProtocol,
) -> Result[list[str], ExternalToolError]:
    """Delete tags in order, stopping at the first failure."""
    deleted: list[str] = []
    for tag in full_tags:
        console.print(f"Deleting tag {tag}", Style.DIM)
        result = scm.delete_tag(tag)
        if isinstance(result, Err):
            return Err(ExternalToolError.from_git(result.error))
        deleted.append(tag)
    return Ok(deleted)


def _rollback(scm: SourceControl, created: list[str], console: ConsoleProtocol) -> list[str]:
    """Best-effort removal of created tags; returns the ones left behind."""
    failures: list[str] = []
    for tag in reversed(created):
        console.print(f"Deleting tag {tag}", Style.DIM)
        if isinstance(scm.delete_tag(tag), Err):
            failures.append(tag)
    return failures


def tag_all_modules(
    scm: SourceControl,
    full_tags: Iterable[str],
    commit: str,
    *,
    console: ConsoleProtocol,
    sign: bool = True,
) -> Result[list[str], ExternalToolError]:
    """Tag commit with every full tag, all or nothing.

    If a tag cannot be created, the tags created earlier in this call are
    deleted before the error is returned.
    """
    created: list[str] = []
    console.info(f"Tagging commit {commit}:")
    for tag in full_tags:
        console.print(tag)
        result = scm.create_tag(tag, commit, f"Version {tag}", sign=sign)
        if isinstance(result, Err):
            console.error("error creating a tag, removing all newly created tags...")
            failures = _rollback(scm, created, console)
            error = ExternalToolError.from_git(result.error)
            return Err(
                ExternalToolError(
                    command=error.command,
                    detail=error.detail,
                    returncode=error.returncode,
                    rollback_failures=tuple(failures),
                )
            )
        created.append(tag)
    return Ok(created)
