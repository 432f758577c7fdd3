"""Loading everything a command needs about the repository.

Each command builds the registry from the manifest and discovers the
on-disk modules fresh; nothing is cached between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from modrel.core.config import Config
from modrel.core.result import Err, Ok, Result
from modrel.output.console import ConsoleProtocol
from modrel.versioning.discovery import ModulePathMap, discover_modules
from modrel.versioning.errors import DuplicateDeclarationError, ManifestError
from modrel.versioning.registry import Registry, load_registry


@dataclass(frozen=True, slots=True)
class RepoState:
    repo_root: Path
    versioning_file: Path
    registry: Registry
    discovered: ModulePathMap


def load_repo_state(
    *,
    repo_root: Path,
    versioning_file: Path,
    config: Config,
    console: ConsoleProtocol,
) -> Result[RepoState, ManifestError | DuplicateDeclarationError]:
    registry = load_registry(versioning_file)
    if isinstance(registry, Err):
        return registry

    discovered = discover_modules(
        repo_root,
        excluded=registry.value.excluded_modules,
        skip_dirs=config.discovery.skip_dirs,
        console=console,
    )
    if isinstance(discovered, Err):
        return discovered

    return Ok(
        RepoState(
            repo_root=repo_root,
            versioning_file=versioning_file,
            registry=registry.value,
            discovered=discovered.value,
        )
    )
