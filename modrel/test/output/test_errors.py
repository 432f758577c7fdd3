"""Tests for modrel.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from modrel.core.errors import ErrorCode
from modrel.output.console import MockConsole
from modrel.output.errors import error_exit_code, print_error
from modrel.services.release_errors import (
    DeclarationUpdateError,
    ExternalToolError,
    TagAlreadyExistsError,
    WorkingTreeDirtyError,
)
from modrel.versioning.errors import (
    ConfigParseError,
    DuplicateDeclarationError,
    DuplicateModuleError,
    InvalidVersionError,
    MajorVersionCollisionError,
    UnknownModuleSetError,
    UnregisteredModuleError,
    VersioningError,
)


class TestErrorExitCode:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (UnknownModuleSetError("x"), ErrorCode.USER_ERROR),
            (ConfigParseError(Path("versions.yaml"), "invalid YAML"), ErrorCode.CONFIG_ERROR),
            (DuplicateModuleError("m", "a", "b"), ErrorCode.CONFIG_ERROR),
            (UnregisteredModuleError("m", Path("go.mod")), ErrorCode.VALIDATION_ERROR),
            (InvalidVersionError("a", "1.0"), ErrorCode.VALIDATION_ERROR),
            (
                MajorVersionCollisionError("v1", "a", "v1.0.0", "b", "v1.1.0"),
                ErrorCode.VALIDATION_ERROR,
            ),
            (
                DuplicateDeclarationError("m", Path("a/go.mod"), Path("b/go.mod")),
                ErrorCode.VALIDATION_ERROR,
            ),
            (ExternalToolError("git tag v1", "fatal"), ErrorCode.TOOL_ERROR),
            (TagAlreadyExistsError("v1.0.0"), ErrorCode.TOOL_ERROR),
            (WorkingTreeDirtyError("diff"), ErrorCode.TOOL_ERROR),
            (DeclarationUpdateError(Path("go.mod"), "denied"), ErrorCode.IO_ERROR),
        ],
    )
    def test_codes(self, error: VersioningError, code: ErrorCode) -> None:
        assert error_exit_code(error) == int(code)


class TestPrintError:
    def test_message_printed_as_error(self) -> None:
        console = MockConsole()
        print_error(InvalidVersionError("core", "1.0"), console)
        assert console.messages == ["error: module set core has invalid version string: '1.0'"]

    def test_unknown_set_lists_available(self) -> None:
        console = MockConsole()
        print_error(UnknownModuleSetError("nope", ("core", "exp")), console)
        assert "Available: core, exp" in console.messages

    def test_dirty_tree_shows_diff(self) -> None:
        console = MockConsole()
        print_error(WorkingTreeDirtyError("M go.mod\n"), console)
        assert console.messages[-1] == "M go.mod"

    def test_existing_tag_hint(self) -> None:
        console = MockConsole()
        print_error(TagAlreadyExistsError("v1.0.0"), console)
        assert len(console.find("--delete-module-set-tags")) == 1
