"""Module set registry and validators.

This package has no knowledge of git; release drivers in
`modrel.services` consume what it derives.
"""

from modrel.versioning.discovery import ModulePathMap, discover_modules
from modrel.versioning.errors import VersioningError
from modrel.versioning.manifest import Manifest, ModuleSet, load_manifest
from modrel.versioning.registry import ModuleInfo, Registry, load_registry
from modrel.versioning.tags import (
    ROOT_TAG,
    ReleaseTargets,
    combine_tag_names_and_version,
    versions_and_modules_to_update,
)
from modrel.versioning.verify import (
    UnstableDependency,
    verify_all_modules_in_set,
    verify_dependencies,
    verify_versions,
)

__all__ = [
    "ROOT_TAG",
    "Manifest",
    "ModuleInfo",
    "ModulePathMap",
    "ModuleSet",
    "Registry",
    "ReleaseTargets",
    "UnstableDependency",
    "VersioningError",
    "combine_tag_names_and_version",
    "discover_modules",
    "load_manifest",
    "load_registry",
    "verify_all_modules_in_set",
    "verify_dependencies",
    "verify_versions",
    "versions_and_modules_to_update",
]
