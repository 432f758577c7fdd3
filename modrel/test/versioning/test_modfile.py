"""Tests for modrel.versioning.modfile module."""

from __future__ import annotations

from modrel.core.result import Err, Ok
from modrel.versioning.modfile import (
    ModuleDeclaration,
    Requirement,
    parse_declaration,
    read_module_path,
    rewrite_requirement_versions,
)

GO_MOD = """\
module go.opentelemetry.io/otel/example/jaeger

go 1.14

replace (
	go.opentelemetry.io/otel => ../..
	go.opentelemetry.io/otel/sdk => ../../sdk
)

require (
	go.opentelemetry.io/otel v1.2.0
	go.opentelemetry.io/otel/sdk v1.2.0 // indirect
	github.com/google/go-cmp v0.5.6
)

require go.opentelemetry.io/otel/trace v1.2.0
"""


class TestReadModulePath:
    def test_plain(self) -> None:
        assert read_module_path(GO_MOD) == "go.opentelemetry.io/otel/example/jaeger"

    def test_quoted(self) -> None:
        assert read_module_path('module "example.com/quoted" // comment\n') == "example.com/quoted"

    def test_missing(self) -> None:
        assert read_module_path("go 1.21\n") is None


class TestParseDeclaration:
    def test_requires_from_block_and_line(self) -> None:
        result = parse_declaration(GO_MOD)

        assert isinstance(result, Ok)
        decl = result.value
        assert decl.module_path == "go.opentelemetry.io/otel/example/jaeger"
        assert decl.requires == (
            Requirement("go.opentelemetry.io/otel", "v1.2.0"),
            Requirement("go.opentelemetry.io/otel/sdk", "v1.2.0", indirect=True),
            Requirement("github.com/google/go-cmp", "v0.5.6"),
            Requirement("go.opentelemetry.io/otel/trace", "v1.2.0"),
        )

    def test_replace_targets_are_not_requirements(self) -> None:
        result = parse_declaration(GO_MOD)
        assert isinstance(result, Ok)
        assert "../.." not in [r.version for r in result.value.requires]

    def test_no_requires(self) -> None:
        assert parse_declaration("module example.com/a\n") == Ok(
            ModuleDeclaration(module_path="example.com/a")
        )

    def test_missing_module_directive(self) -> None:
        result = parse_declaration("require example.com/a v1.0.0\n")
        assert result == Err("no module directive")

    def test_unterminated_block(self) -> None:
        result = parse_declaration("module example.com/a\nrequire (\n\texample.com/b v1.0.0\n")
        assert result == Err("unterminated require block")

    def test_malformed_requirement(self) -> None:
        result = parse_declaration("module example.com/a\nrequire (\n\texample.com/b\n)\n")
        assert isinstance(result, Err)
        assert "line 3" in result.error


class TestRewriteRequirementVersions:
    def test_bumps_listed_modules_only(self) -> None:
        updated = rewrite_requirement_versions(
            GO_MOD,
            ["go.opentelemetry.io/otel", "go.opentelemetry.io/otel/trace"],
            "v1.3.0",
        )

        assert "\tgo.opentelemetry.io/otel v1.3.0\n" in updated
        assert "require go.opentelemetry.io/otel/trace v1.3.0" in updated
        assert "go.opentelemetry.io/otel/sdk v1.2.0 // indirect" in updated
        assert "github.com/google/go-cmp v0.5.6" in updated

    def test_module_directive_untouched(self) -> None:
        text = "module go.opentelemetry.io/otel\n\nrequire go.opentelemetry.io/otel/sdk v1.0.0\n"
        updated = rewrite_requirement_versions(text, ["go.opentelemetry.io/otel"], "v2.0.0")
        assert updated == text

    def test_suffix_path_not_matched(self) -> None:
        text = "require example.com/vendor/otel v1.0.0\n"
        assert rewrite_requirement_versions(text, ["otel"], "v2.0.0") == text

    def test_pseudo_version_replaced_whole(self) -> None:
        text = "require example.com/a v0.0.0-20210101000000-abcdef123456\n"
        updated = rewrite_requirement_versions(text, ["example.com/a"], "v0.1.0")
        assert updated == "require example.com/a v0.1.0\n"
