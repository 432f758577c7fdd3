"""Shared fixtures: an on-disk repository builder and an in-memory git."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from modrel.core.result import Err, Ok, Result
from modrel.git.repository import GitError


class RepoBuilder:
    """Writes a fake multi-module repository under a temp directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        (root / ".git").mkdir(parents=True, exist_ok=True)

    def module(
        self,
        rel_dir: str,
        module_path: str,
        requires: dict[str, str] | None = None,
    ) -> Path:
        directory = self.root / rel_dir if rel_dir not in ("", ".") else self.root
        directory.mkdir(parents=True, exist_ok=True)
        lines = [f"module {module_path}", "", "go 1.21", ""]
        if requires:
            lines.append("require (")
            lines += [f"\t{dep} {version}" for dep, version in requires.items()]
            lines.append(")")
            lines.append("")
        path = directory / "go.mod"
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    def manifest(self, text: str, name: str = "versions.yaml") -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture
def repo(tmp_path: Path) -> RepoBuilder:
    return RepoBuilder(tmp_path / "repo")


def _git_error(command: str) -> GitError:
    return GitError(command=command, message=f"fatal: {command} refused", returncode=128)


@dataclass
class FakeSourceControl:
    """In-memory SourceControl; failures are injected by tag name or flag."""

    branch: str | None = "main"
    tags: dict[str, str] = field(default_factory=dict)
    diff: str = ""
    fail_create: set[str] = field(default_factory=set)
    fail_delete: set[str] = field(default_factory=set)
    fail_branch: bool = False
    fail_commit: bool = False
    branches: list[tuple[str, str]] = field(default_factory=list)
    commits: list[str] = field(default_factory=list)
    signed: list[bool] = field(default_factory=list)

    def current_branch(self) -> str | None:
        return self.branch

    def create_branch(self, name: str, base: str) -> Result[None, GitError]:
        if self.fail_branch:
            return Err(_git_error(f"checkout -b {name}"))
        self.branches.append((name, base))
        self.branch = name
        return Ok(None)

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        return Ok(name in self.tags)

    def create_tag(
        self, name: str, commit: str, message: str, *, sign: bool = True
    ) -> Result[None, GitError]:
        if name in self.fail_create or name in self.tags:
            return Err(_git_error(f"tag {name}"))
        self.tags[name] = commit
        self.signed.append(sign)
        return Ok(None)

    def delete_tag(self, name: str) -> Result[None, GitError]:
        if name in self.fail_delete or name not in self.tags:
            return Err(_git_error(f"tag -d {name}"))
        del self.tags[name]
        return Ok(None)

    def working_tree_diff(self) -> Result[str, GitError]:
        return Ok(self.diff)

    def is_working_tree_clean(self) -> bool:
        return self.diff == ""

    def commit_all(self, message: str) -> Result[None, GitError]:
        if self.fail_commit:
            return Err(_git_error("commit"))
        self.commits.append(message)
        return Ok(None)


@pytest.fixture
def scm() -> FakeSourceControl:
    return FakeSourceControl()
