"""Errors raised (as values) by the module set registry and its validators."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ConfigParseError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"unable to read versioning file {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class DuplicateModuleError:
    module: str
    first_set: str
    second_set: str

    @property
    def message(self) -> str:
        return (
            f"module {self.module} exists more than once: "
            f"listed in sets {self.first_set} and {self.second_set}"
        )


@dataclass(frozen=True, slots=True)
class ExcludedModuleConflictError:
    module: str
    set_name: str

    @property
    def message(self) -> str:
        return (
            f"module {self.module} is listed in set {self.set_name} "
            "but is an excluded module and should not be versioned"
        )


@dataclass(frozen=True, slots=True)
class UnregisteredModuleError:
    module: str
    declaration_file: Path

    @property
    def message(self) -> str:
        return (
            f"module {self.module} (defined in {self.declaration_file}) "
            "is not contained in any module set"
        )


@dataclass(frozen=True, slots=True)
class OrphanManifestEntryError:
    module: str
    set_name: str

    @property
    def message(self) -> str:
        return (
            f"module {self.module} in module set {self.set_name} "
            "does not exist in the repository"
        )


@dataclass(frozen=True, slots=True)
class InvalidVersionError:
    set_name: str
    version: str

    @property
    def message(self) -> str:
        return f"module set {self.set_name} has invalid version string: {self.version!r}"


@dataclass(frozen=True, slots=True)
class MajorVersionCollisionError:
    major: str
    first_set: str
    first_version: str
    second_set: str
    second_version: str

    @property
    def message(self) -> str:
        return (
            f"multiple module sets have the same major version ({self.major}): "
            f"{self.first_set} (version {self.first_version}) and "
            f"{self.second_set} (version {self.second_version})"
        )


@dataclass(frozen=True, slots=True)
class UnknownModuleSetError:
    set_name: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"could not find module set {self.set_name} in versioning file"

    @property
    def hint(self) -> str | None:
        if not self.available:
            return None
        return f"available sets: {', '.join(self.available)}"


@dataclass(frozen=True, slots=True)
class UnresolvedModuleError:
    module: str

    @property
    def message(self) -> str:
        return f"module {self.module} has no declaration file in the repository"


@dataclass(frozen=True, slots=True)
class DuplicateDeclarationError:
    module: str
    first_file: Path
    second_file: Path

    @property
    def message(self) -> str:
        return (
            f"module {self.module} is declared twice: "
            f"{self.first_file} and {self.second_file}"
        )


@dataclass(frozen=True, slots=True)
class DeclarationParseError:
    declaration_file: Path
    reason: str

    @property
    def message(self) -> str:
        return f"unable to parse {self.declaration_file}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ModuleOutsideRepoError:
    module: str
    declaration_file: Path
    repo_root: Path

    @property
    def message(self) -> str:
        return (
            f"declaration {self.declaration_file} of module {self.module} "
            f"is not inside the repo root {self.repo_root}"
        )


ManifestError = ConfigParseError | DuplicateModuleError | ExcludedModuleConflictError

VersioningError = (
    ConfigParseError
    | DuplicateModuleError
    | ExcludedModuleConflictError
    | UnregisteredModuleError
    | OrphanManifestEntryError
    | InvalidVersionError
    | MajorVersionCollisionError
    | UnknownModuleSetError
    | UnresolvedModuleError
    | DuplicateDeclarationError
    | DeclarationParseError
    | ModuleOutsideRepoError
)
