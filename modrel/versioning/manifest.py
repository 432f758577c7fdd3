"""Loading the versioning manifest (`versions.yaml`).

The manifest assigns every versioned module to exactly one named module
set and lists the modules that are deliberately left unversioned:

    moduleSets:
      stable-v1:
        version: v1.2.0
        modules:
          - go.opentelemetry.io/otel
          - go.opentelemetry.io/otel/sdk
    excludedModules:
      - go.opentelemetry.io/otel/internal/tools

The format follows the file extension: YAML (`.yaml`, `.yml`), TOML
(`.toml`) or JSON (`.json`). Top-level keys may also be spelled
`module-sets` and `excluded-modules`.
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from modrel.core.result import Err, Ok, Result
from modrel.core.structured import as_str_dict, as_str_list, first_present

from .errors import ConfigParseError

__all__ = [
    "Manifest",
    "ModuleSet",
    "load_manifest",
    "parse_manifest",
]

_MODULE_SETS_KEYS = ("moduleSets", "module-sets")
_EXCLUDED_KEYS = ("excludedModules", "excluded-modules")


@dataclass(frozen=True, slots=True)
class ModuleSet:
    """A named group of modules released together under one version."""

    version: str
    modules: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Manifest:
    """Parsed manifest, in file order.

    Attributes:
        module_sets: Set name -> ModuleSet
        excluded_modules: Module paths that are never versioned
        path: File the manifest was read from
    """

    module_sets: Mapping[str, ModuleSet]
    excluded_modules: frozenset[str] = field(default_factory=frozenset)
    path: Path | None = None

    def set_names(self) -> list[str]:
        return sorted(self.module_sets)


def _version_text(value: object) -> str | None:
    # YAML turns `version: 1.2` into a float; keep it as text so version
    # validation can report it instead of the loader.
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return None


def parse_manifest(data: object, path: Path) -> Result[Manifest, ConfigParseError]:
    """Validate the shape of an already-decoded manifest document."""
    root = as_str_dict(data)
    if root is None:
        return Err(ConfigParseError(path, "top level must be a mapping"))

    sets_obj = first_present(root, *_MODULE_SETS_KEYS)
    if sets_obj is None:
        return Err(ConfigParseError(path, "missing 'moduleSets' section"))
    sets_table = as_str_dict(sets_obj)
    if sets_table is None:
        return Err(ConfigParseError(path, "'moduleSets' must map set names to module sets"))

    module_sets: dict[str, ModuleSet] = {}
    for name, set_obj in sets_table.items():
        table = as_str_dict(set_obj)
        if table is None:
            return Err(ConfigParseError(path, f"module set {name!r} must be a mapping"))

        version = _version_text(table.get("version"))
        if version is None:
            return Err(ConfigParseError(path, f"module set {name!r} has no version string"))

        modules = as_str_list(table.get("modules") or [])
        if modules is None:
            return Err(
                ConfigParseError(path, f"module set {name!r}: 'modules' must be a list of strings")
            )

        module_sets[name] = ModuleSet(version=version, modules=tuple(m.strip() for m in modules))

    excluded_obj = first_present(root, *_EXCLUDED_KEYS)
    excluded: list[str] = []
    if excluded_obj is not None:
        parsed = as_str_list(excluded_obj)
        if parsed is None:
            return Err(ConfigParseError(path, "'excludedModules' must be a list of strings"))
        excluded = [m.strip() for m in parsed]

    return Ok(
        Manifest(
            module_sets=module_sets,
            excluded_modules=frozenset(excluded),
            path=path,
        )
    )


def _decode(path: Path, text: str) -> Result[object, ConfigParseError]:
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            return Ok(yaml.safe_load(text))
        if suffix == ".toml":
            return Ok(tomllib.loads(text))
        if suffix == ".json":
            return Ok(json.loads(text))
    except yaml.YAMLError as e:
        return Err(ConfigParseError(path, f"invalid YAML: {e}"))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigParseError(path, f"invalid TOML: {e}"))
    except json.JSONDecodeError as e:
        return Err(ConfigParseError(path, f"invalid JSON: {e}"))
    return Err(ConfigParseError(path, f"unsupported file type {suffix or '(none)'!r}"))


def load_manifest(path: Path) -> Result[Manifest, ConfigParseError]:
    """Read and validate a manifest file.

    Args:
        path: Path to the versioning file

    Returns:
        Ok(Manifest) on success, Err(ConfigParseError) naming the file otherwise
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigParseError(path, "file not found"))
    except PermissionError:
        return Err(ConfigParseError(path, "permission denied"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigParseError(path, str(e)))

    decoded = _decode(path, text)
    if isinstance(decoded, Err):
        return decoded
    return parse_manifest(decoded.value, path)
