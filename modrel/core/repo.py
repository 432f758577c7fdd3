"""Repository root detection.

The repository root is the directory holding `.git`. Release commands
derive tag names relative to it and look for the versioning file there.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "REPO_ROOT_ENV",
    "RepoRootError",
    "detect_repo_root",
    "find_repo_root_upward",
    "is_repo_root",
]

REPO_ROOT_ENV = "MODREL_REPO_ROOT"


@dataclass(frozen=True, slots=True)
class RepoRootError:
    """Error when no enclosing repository can be found."""

    message: str
    searched_from: Path | None = None


def is_repo_root(path: Path) -> bool:
    # `.git` is a file inside worktrees and submodules.
    return (path / ".git").exists()


def find_repo_root_upward(start: Path) -> Path | None:
    for parent in (start, *start.parents):
        if is_repo_root(parent):
            return parent
    return None


def detect_repo_root(
    *,
    start_dir: Path | None = None,
    env_var: str = REPO_ROOT_ENV,
) -> Result[Path, RepoRootError]:
    """Detect the repository root directory.

    Detection order:
    1. $MODREL_REPO_ROOT (if set, it must point at a repository)
    2. Search upward from start_dir (or cwd) for a `.git` entry
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir() and is_repo_root(env_path):
            return Ok(env_path)
        return Err(
            RepoRootError(
                message=f"${env_var} is set to '{env_value}' but it is not a git repository",
                searched_from=env_path if env_path.is_dir() else None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_repo_root_upward(search_start)
    if found is None:
        return Err(
            RepoRootError(
                message=f"unable to find git repository enclosing working dir {search_start}",
                searched_from=search_start,
            )
        )
    return Ok(found)
