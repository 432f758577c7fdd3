"""Git access for the release drivers.

SourceControl is the narrow capability the prerelease and tag drivers
need; Repository implements it by running the git CLI. All operations
that can fail return Result types.

Usage:
    repo = Repository(repo_root)
    match repo.create_tag("sdk/v1.2.0", "abc123", "Version sdk/v1.2.0"):
        case Ok(_):
            ...
        case Err(e):
            print(f"{e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from modrel.core.result import Err, Ok, Result
from modrel.platform.process import ProcessError
from modrel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 60.0

__all__ = [
    "GitError",
    "Repository",
    "SourceControl",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message (git's own output when available)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class SourceControl(Protocol):
    """Version-control operations used by the release drivers."""

    def current_branch(self) -> str | None: ...

    def create_branch(self, name: str, base: str) -> Result[None, GitError]: ...

    def tag_exists(self, name: str) -> Result[bool, GitError]: ...

    def create_tag(
        self, name: str, commit: str, message: str, *, sign: bool = True
    ) -> Result[None, GitError]: ...

    def delete_tag(self, name: str) -> Result[None, GitError]: ...

    def is_working_tree_clean(self) -> bool: ...

    def working_tree_diff(self) -> Result[str, GitError]: ...

    def commit_all(self, message: str) -> Result[None, GitError]: ...


class Repository:
    """Git repository driven through the git CLI.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        match self._run(["rev-parse", "--abbrev-ref", "HEAD"]):
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch in ("", "HEAD") else branch
            case Err(_):
                return None

    def create_branch(self, name: str, base: str) -> Result[None, GitError]:
        """Create and switch to branch `name` starting at `base`."""
        return self._checked(["checkout", "-b", name, base], command=f"checkout -b {name}")

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        match self._run(["tag", "-l", name]):
            case Ok(stdout):
                return Ok(name in (line.strip() for line in stdout.splitlines()))
            case Err(e):
                return Err(self._error(f"tag -l {name}", e))

    def create_tag(
        self, name: str, commit: str, message: str, *, sign: bool = True
    ) -> Result[None, GitError]:
        """Create an annotated tag, GPG-signed when `sign` is set."""
        args = ["tag", "-a", name]
        if sign:
            args.append("-s")
        args += ["-m", message, commit]
        return self._checked(args, command=f"tag {name}")

    def delete_tag(self, name: str) -> Result[None, GitError]:
        return self._checked(["tag", "-d", name], command=f"tag -d {name}")

    def working_tree_diff(self) -> Result[str, GitError]:
        """Diff of tracked, unstaged changes; empty when the tree is clean.

        Untracked files are not considered.
        """
        match self._run(["diff", "--exit-code"]):
            case Ok(_):
                return Ok("")
            case Err(e) if e.returncode == 1:
                return Ok(e.stdout or "(changes present)")
            case Err(e):
                return Err(self._error("diff --exit-code", e))

    def is_working_tree_clean(self) -> bool:
        """Returns False if the diff cannot be determined."""
        match self.working_tree_diff():
            case Ok(diff):
                return diff == ""
            case Err(_):
                return False

    def commit_all(self, message: str) -> Result[None, GitError]:
        """Stage everything (`git add .`) and commit it."""
        staged = self._checked(["add", "."], command="add .")
        if isinstance(staged, Err):
            return staged
        return self._checked(["commit", "-m", message], command="commit")

    def _checked(self, args: list[str], *, command: str) -> Result[None, GitError]:
        match self._run(args):
            case Ok(_):
                return Ok(None)
            case Err(e):
                return Err(self._error(command, e))

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.output or f"git {command} failed",
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
