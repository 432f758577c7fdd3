"""Typed tool configuration.

An optional `.modrel.toml` at the repository root tunes the release
drivers. Every key has a default, so a repository without the file
behaves like the upstream release scripts:

    versioning_file = "versions.yaml"

    [prerelease]
    branch_prefix = "pre_release"
    lint_target = "lint"
    ci_target = "ci"

    [tag]
    sign = true

    [discovery]
    skip_dirs = [".git"]
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_VERSIONING_FILE",
    "Config",
    "ConfigError",
    "DiscoveryConfig",
    "PrereleaseConfig",
    "TagConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = ".modrel.toml"
DEFAULT_VERSIONING_FILE = "versions.yaml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the tool config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PrereleaseConfig:
    branch_prefix: str = "pre_release"
    lint_target: str = "lint"
    ci_target: str = "ci"


@dataclass(frozen=True, slots=True)
class TagConfig:
    sign: bool = True


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    """Directory names never descended into while looking for declarations."""

    skip_dirs: tuple[str, ...] = (".git",)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    versioning_file: str = DEFAULT_VERSIONING_FILE
    prerelease: PrereleaseConfig = field(default_factory=PrereleaseConfig)
    tag: TagConfig = field(default_factory=TagConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)

    def versioning_path(self, repo_root: Path) -> Path:
        """Absolute path of the manifest for a repository root."""
        path = Path(self.versioning_file)
        if path.is_absolute():
            return path
        return repo_root / path

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        prerelease: StrDict = get_table(data, "prerelease") or {}
        tag: StrDict = get_table(data, "tag") or {}
        discovery: StrDict = get_table(data, "discovery") or {}

        if "skip_dirs" in discovery and get_str_list(discovery, "skip_dirs") is None:
            raise ValueError("discovery.skip_dirs must be a list of strings")
        if "sign" in tag and get_bool(tag, "sign") is None:
            raise ValueError("tag.sign must be a boolean")

        skip_dirs = get_str_list(discovery, "skip_dirs")
        sign = get_bool(tag, "sign")

        return cls(
            versioning_file=get_str(data, "versioning_file") or DEFAULT_VERSIONING_FILE,
            prerelease=PrereleaseConfig(
                branch_prefix=get_str(prerelease, "branch_prefix") or "pre_release",
                lint_target=get_str(prerelease, "lint_target") or "lint",
                ci_target=get_str(prerelease, "ci_target") or "ci",
            ),
            tag=TagConfig(sign=True if sign is None else sign),
            discovery=DiscoveryConfig(
                skip_dirs=(".git",) if skip_dirs is None else tuple(skip_dirs),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to .modrel.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[Config, ConfigError]:
    """Load `<repo_root>/.modrel.toml`, or defaults when the file is absent.

    A file that exists but is malformed is still an error.
    """
    path = repo_root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
