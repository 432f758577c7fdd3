"""Consistency checks between the manifest and the repository.

- Every discovered module belongs to exactly one module set, and every
  listed module exists on disk.
- Set versions are valid semantic versions, and no two sets share a
  stable (non-zero) major version.
- Stable modules should not depend on unstable governed modules. This
  last check is advisory: it reports, it never fails.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from modrel.core.result import Err, Ok, Result
from modrel.output.console import ConsoleProtocol

from .errors import (
    DeclarationParseError,
    InvalidVersionError,
    MajorVersionCollisionError,
    OrphanManifestEntryError,
    UnregisteredModuleError,
)
from .manifest import ModuleSet
from .modfile import parse_declaration
from .registry import ModuleInfo
from .semver import parse_version

__all__ = [
    "UnstableDependency",
    "verify_all_modules_in_set",
    "verify_dependencies",
    "verify_versions",
]


@dataclass(frozen=True, slots=True)
class UnstableDependency:
    """A stable module requiring an unstable module governed by the same manifest."""

    module: str
    version: str
    dependency: str
    dependency_version: str

    @property
    def message(self) -> str:
        return (
            f"stable module {self.module} ({self.version}) depends on "
            f"unstable module {self.dependency} ({self.dependency_version})"
        )


def verify_all_modules_in_set(
    discovered: Mapping[str, Path],
    module_info: Mapping[str, ModuleInfo],
) -> Result[None, UnregisteredModuleError | OrphanManifestEntryError]:
    """Check that discovered modules and manifest entries match one to one."""
    for module in sorted(discovered):
        if module not in module_info:
            return Err(UnregisteredModuleError(module, discovered[module]))

    for module in sorted(module_info):
        if module not in discovered:
            return Err(OrphanManifestEntryError(module, module_info[module].set_name))

    return Ok(None)


def verify_versions(
    module_sets: Mapping[str, ModuleSet],
) -> Result[None, InvalidVersionError | MajorVersionCollisionError]:
    """Check set versions for syntax and stable major-version collisions.

    Sets are visited in name order; the "first" set of a collision is the
    alphabetically smaller name.
    """
    # major label -> name of the first stable set seen with it
    seen_majors: dict[str, str] = {}

    for name in sorted(module_sets):
        module_set = module_sets[name]
        parsed = parse_version(module_set.version)
        if parsed is None:
            return Err(InvalidVersionError(name, module_set.version))

        if not parsed.is_stable:
            continue

        major = parsed.major_label()
        first = seen_majors.get(major)
        if first is not None:
            return Err(
                MajorVersionCollisionError(
                    major=major,
                    first_set=first,
                    first_version=module_sets[first].version,
                    second_set=name,
                    second_version=module_set.version,
                )
            )
        seen_majors[major] = name

    return Ok(None)


def verify_dependencies(
    module_info: Mapping[str, ModuleInfo],
    discovered: Mapping[str, Path],
    *,
    console: ConsoleProtocol | None = None,
) -> list[UnstableDependency]:
    """List requirements of stable modules on unstable governed modules.

    Declarations that cannot be read are reported on the console and
    skipped.
    """
    findings: list[UnstableDependency] = []

    for module in sorted(module_info):
        info = module_info[module]
        if not info.is_stable:
            continue

        declaration_file = discovered.get(module)
        if declaration_file is None:
            continue

        try:
            text = declaration_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if console is not None:
                console.warning(DeclarationParseError(declaration_file, str(e)).message)
            continue

        parsed = parse_declaration(text)
        if isinstance(parsed, Err):
            if console is not None:
                console.warning(DeclarationParseError(declaration_file, parsed.error).message)
            continue

        for requirement in parsed.value.requires:
            dep_info = module_info.get(requirement.path)
            if dep_info is None or dep_info.is_stable:
                continue
            findings.append(
                UnstableDependency(
                    module=module,
                    version=info.version,
                    dependency=requirement.path,
                    dependency_version=dep_info.version,
                )
            )

    return findings
