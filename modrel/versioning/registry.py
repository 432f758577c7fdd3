"""Module set registry.

A Registry is built once per run from an explicit manifest path and is
read-only afterwards. Besides the manifest itself it holds the inverted
view: for every module path, the set it belongs to and that set's version.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from modrel.core.result import Err, Ok, Result

from .errors import (
    DuplicateModuleError,
    ExcludedModuleConflictError,
    ManifestError,
    UnknownModuleSetError,
)
from .manifest import Manifest, ModuleSet, load_manifest
from .semver import is_stable_version

__all__ = [
    "ModuleInfo",
    "Registry",
    "build_module_info_map",
    "load_registry",
]


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    set_name: str
    version: str

    @property
    def is_stable(self) -> bool:
        return is_stable_version(self.version)


def build_module_info_map(
    manifest: Manifest,
) -> Result[dict[str, ModuleInfo], DuplicateModuleError | ExcludedModuleConflictError]:
    """Invert the manifest into module path -> ModuleInfo.

    Sets are visited in name order, so when a module is listed twice the
    error names the alphabetically first set as the original owner.
    """
    info: dict[str, ModuleInfo] = {}
    for set_name in manifest.set_names():
        module_set = manifest.module_sets[set_name]
        for module in module_set.modules:
            existing = info.get(module)
            if existing is not None:
                return Err(DuplicateModuleError(module, existing.set_name, set_name))
            if module in manifest.excluded_modules:
                return Err(ExcludedModuleConflictError(module, set_name))
            info[module] = ModuleInfo(set_name=set_name, version=module_set.version)
    return Ok(info)


@dataclass(frozen=True, slots=True)
class Registry:
    """Manifest plus its inverted lookup table."""

    manifest: Manifest
    module_info: Mapping[str, ModuleInfo]

    @classmethod
    def from_manifest(cls, manifest: Manifest) -> Result[Registry, ManifestError]:
        info = build_module_info_map(manifest)
        if isinstance(info, Err):
            return info
        return Ok(cls(manifest=manifest, module_info=info.value))

    @property
    def module_sets(self) -> Mapping[str, ModuleSet]:
        return self.manifest.module_sets

    @property
    def excluded_modules(self) -> frozenset[str]:
        return self.manifest.excluded_modules

    def module_set(self, name: str) -> Result[ModuleSet, UnknownModuleSetError]:
        module_set = self.manifest.module_sets.get(name)
        if module_set is None:
            return Err(UnknownModuleSetError(name, tuple(self.manifest.set_names())))
        return Ok(module_set)

    def is_governed(self, module: str) -> bool:
        return module in self.module_info


def load_registry(path: Path) -> Result[Registry, ManifestError]:
    """Load the manifest at path and build a Registry from it."""
    manifest = load_manifest(path)
    if isinstance(manifest, Err):
        return manifest
    return Registry.from_manifest(manifest.value)
