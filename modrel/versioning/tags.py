"""Deriving release tags for a module set.

Each module is tagged under the directory of its declaration file,
relative to the repository root, so `sdk/metric/go.mod` released at
`v1.2.0` is tagged `sdk/metric/v1.2.0`. The module at the repository
root uses ROOT_TAG, whose full tag is the bare version.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from modrel.core.result import Err, Ok, Result

from .errors import ModuleOutsideRepoError, UnknownModuleSetError, UnresolvedModuleError
from .registry import Registry

__all__ = [
    "ROOT_TAG",
    "ReleaseTargets",
    "TagDerivationError",
    "combine_tag_names_and_version",
    "module_file_to_tag_name",
    "versions_and_modules_to_update",
]

# Relative directory of a declaration sitting at the repository root.
ROOT_TAG: Final = "."

TagDerivationError = UnknownModuleSetError | UnresolvedModuleError | ModuleOutsideRepoError


@dataclass(frozen=True, slots=True)
class ReleaseTargets:
    """Everything the release drivers need for one module set.

    `module_paths`, `tag_names` and `declaration_files` share one order:
    the order modules are listed in the manifest.
    """

    set_name: str
    version: str
    module_paths: tuple[str, ...]
    tag_names: tuple[str, ...]
    declaration_files: tuple[Path, ...]

    @property
    def full_tags(self) -> list[str]:
        return combine_tag_names_and_version(self.tag_names, self.version)


def combine_tag_names_and_version(tag_names: Iterable[str], version: str) -> list[str]:
    """Join tag names with a version, preserving order."""
    return [version if name == ROOT_TAG else f"{name}/{version}" for name in tag_names]


def module_file_to_tag_name(
    module: str,
    declaration_file: Path,
    repo_root: Path,
) -> Result[str, ModuleOutsideRepoError]:
    try:
        relative = declaration_file.relative_to(repo_root)
    except ValueError:
        return Err(ModuleOutsideRepoError(module, declaration_file, repo_root))
    return Ok(relative.parent.as_posix())


def versions_and_modules_to_update(
    registry: Registry,
    set_name: str,
    repo_root: Path,
    discovered: Mapping[str, Path],
) -> Result[ReleaseTargets, TagDerivationError]:
    """Resolve a module set to its version, modules and tag names.

    Args:
        registry: Loaded module set registry
        set_name: Module set being released
        repo_root: Repository root that tag names are relative to
        discovered: Module path -> declaration file, from discovery

    Returns:
        Ok(ReleaseTargets), or Err when the set is unknown, a module has no
        declaration file, or a declaration lies outside repo_root
    """
    module_set = registry.module_set(set_name)
    if isinstance(module_set, Err):
        return module_set

    files: list[Path] = []
    tag_names: list[str] = []
    for module in module_set.value.modules:
        declaration_file = discovered.get(module)
        if declaration_file is None:
            return Err(UnresolvedModuleError(module))

        tag_name = module_file_to_tag_name(module, declaration_file, repo_root)
        if isinstance(tag_name, Err):
            return tag_name

        files.append(declaration_file)
        tag_names.append(tag_name.value)

    return Ok(
        ReleaseTargets(
            set_name=set_name,
            version=module_set.value.version,
            module_paths=module_set.value.modules,
            tag_names=tuple(tag_names),
            declaration_files=tuple(files),
        )
    )
