"""Error presentation utilities.

Centralized error formatting and exit code mapping so every command
reports failures the same way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modrel.core.errors import ErrorCode
from modrel.output.console import Style
from modrel.services.release_errors import (
    DeclarationUpdateError,
    ExternalToolError,
    ReleaseError,
    TagAlreadyExistsError,
    WorkingTreeDirtyError,
)
from modrel.versioning.errors import (
    ConfigParseError,
    DeclarationParseError,
    DuplicateDeclarationError,
    DuplicateModuleError,
    ExcludedModuleConflictError,
    InvalidVersionError,
    MajorVersionCollisionError,
    ModuleOutsideRepoError,
    OrphanManifestEntryError,
    UnknownModuleSetError,
    UnregisteredModuleError,
    UnresolvedModuleError,
    VersioningError,
)

if TYPE_CHECKING:
    from modrel.output.console import ConsoleProtocol

__all__ = ["error_exit_code", "print_error"]


def print_error(error: VersioningError | ReleaseError, console: ConsoleProtocol) -> None:
    """Print an error with any extra detail it carries."""
    console.error(error.message)
    match error:
        case UnknownModuleSetError(available=available) if available:
            console.print(f"Available: {', '.join(available)}", Style.DIM)
        case WorkingTreeDirtyError(diff=diff):
            console.print(diff.rstrip(), Style.DIM)
        case TagAlreadyExistsError():
            console.print(
                "hint: bump the set version or delete the tags with --delete-module-set-tags",
                Style.DIM,
            )
        case _:
            pass


def error_exit_code(error: VersioningError | ReleaseError) -> int:
    """Get exit code for an error."""
    match error:
        case UnknownModuleSetError():
            return int(ErrorCode.USER_ERROR)
        case ConfigParseError() | DuplicateModuleError() | ExcludedModuleConflictError():
            return int(ErrorCode.CONFIG_ERROR)
        case (
            UnregisteredModuleError()
            | OrphanManifestEntryError()
            | InvalidVersionError()
            | MajorVersionCollisionError()
            | UnresolvedModuleError()
            | DuplicateDeclarationError()
            | DeclarationParseError()
            | ModuleOutsideRepoError()
        ):
            return int(ErrorCode.VALIDATION_ERROR)
        case ExternalToolError() | TagAlreadyExistsError() | WorkingTreeDirtyError():
            return int(ErrorCode.TOOL_ERROR)
        case DeclarationUpdateError():
            return int(ErrorCode.IO_ERROR)
