from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from modrel.git.repository import GitError
from modrel.platform.process import ProcessError


@dataclass(frozen=True, slots=True)
class ExternalToolError:
    """A git or make invocation failed.

    `rollback_failures` lists tags that could not be removed while undoing
    a partially applied tagging batch.
    """

    command: str
    detail: str
    returncode: int = 1
    rollback_failures: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        text = f"{self.command} failed: {self.detail}"
        if self.rollback_failures:
            text += f"; could not remove tags: {', '.join(self.rollback_failures)}"
        return text

    @classmethod
    def from_git(cls, error: GitError) -> ExternalToolError:
        return cls(
            command=f"git {error.command}", detail=error.message, returncode=error.returncode
        )

    @classmethod
    def from_process(cls, error: ProcessError) -> ExternalToolError:
        return cls(
            command=" ".join(error.command),
            detail=error.output or f"exit {error.returncode}",
            returncode=error.returncode,
        )


@dataclass(frozen=True, slots=True)
class TagAlreadyExistsError:
    tag: str

    @property
    def message(self) -> str:
        return f"git tag already exists for {self.tag}"


@dataclass(frozen=True, slots=True)
class WorkingTreeDirtyError:
    diff: str

    @property
    def message(self) -> str:
        return "working tree is not clean, can't proceed with the release process"


@dataclass(frozen=True, slots=True)
class DeclarationUpdateError:
    declaration_file: Path
    reason: str

    @property
    def message(self) -> str:
        return f"could not update module versions in {self.declaration_file}: {self.reason}"


ReleaseError = (
    ExternalToolError | TagAlreadyExistsError | WorkingTreeDirtyError | DeclarationUpdateError
)
