"""Tests for modrel.versioning.tags module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from modrel.core.result import Err, Ok
from modrel.versioning.errors import (
    ModuleOutsideRepoError,
    UnknownModuleSetError,
    UnresolvedModuleError,
)
from modrel.versioning.manifest import Manifest, ModuleSet
from modrel.versioning.registry import Registry
from modrel.versioning.tags import (
    ROOT_TAG,
    ReleaseTargets,
    combine_tag_names_and_version,
    module_file_to_tag_name,
    versions_and_modules_to_update,
)

if TYPE_CHECKING:
    from modrel.test.conftest import RepoBuilder


def _registry(sets: dict[str, ModuleSet]) -> Registry:
    result = Registry.from_manifest(Manifest(module_sets=sets))
    assert isinstance(result, Ok)
    return result.value


class TestCombineTagNamesAndVersion:
    def test_root_and_nested(self) -> None:
        assert combine_tag_names_and_version(["sdk/metric", ROOT_TAG], "v1.2.0") == [
            "sdk/metric/v1.2.0",
            "v1.2.0",
        ]

    def test_empty(self) -> None:
        assert combine_tag_names_and_version([], "v1.0.0") == []


class TestModuleFileToTagName:
    def test_nested(self, tmp_path: Path) -> None:
        result = module_file_to_tag_name("m", tmp_path / "sdk" / "metric" / "go.mod", tmp_path)
        assert result == Ok("sdk/metric")

    def test_root(self, tmp_path: Path) -> None:
        assert module_file_to_tag_name("m", tmp_path / "go.mod", tmp_path) == Ok(ROOT_TAG)

    def test_outside_repo(self, tmp_path: Path) -> None:
        outside = tmp_path / "other" / "go.mod"
        repo_root = tmp_path / "repo"

        result = module_file_to_tag_name("m", outside, repo_root)

        assert result == Err(ModuleOutsideRepoError("m", outside, repo_root))


class TestVersionsAndModulesToUpdate:
    def test_derives_in_manifest_order(self, repo: RepoBuilder) -> None:
        metric = repo.module("sdk/metric", "otel/sdk/metric")
        root_mod = repo.module(".", "otel")
        registry = _registry({"core": ModuleSet("v1.2.0", ("otel/sdk/metric", "otel"))})
        discovered = {"otel": root_mod, "otel/sdk/metric": metric}

        result = versions_and_modules_to_update(registry, "core", repo.root, discovered)

        assert result == Ok(
            ReleaseTargets(
                set_name="core",
                version="v1.2.0",
                module_paths=("otel/sdk/metric", "otel"),
                tag_names=("sdk/metric", ROOT_TAG),
                declaration_files=(metric, root_mod),
            )
        )
        assert result.value.full_tags == ["sdk/metric/v1.2.0", "v1.2.0"]

    def test_unknown_set(self, repo: RepoBuilder) -> None:
        registry = _registry({"core": ModuleSet("v1.2.0", ())})

        result = versions_and_modules_to_update(registry, "nope", repo.root, {})

        assert result == Err(UnknownModuleSetError("nope", ("core",)))

    def test_unresolved_module(self, repo: RepoBuilder) -> None:
        registry = _registry({"core": ModuleSet("v1.2.0", ("otel/api",))})

        result = versions_and_modules_to_update(registry, "core", repo.root, {})

        assert result == Err(UnresolvedModuleError("otel/api"))
