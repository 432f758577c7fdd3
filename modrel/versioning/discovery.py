"""Filesystem discovery of module declaration files.

Walks a repository and maps every declared module path to the file that
declares it. Discovery is best-effort: directories or files that cannot
be read are reported as warnings and skipped.
"""

from __future__ import annotations

import os
from collections.abc import Collection
from pathlib import Path

from modrel.core.result import Err, Ok, Result
from modrel.output.console import ConsoleProtocol

from .errors import DuplicateDeclarationError
from .modfile import DECLARATION_FILENAME, read_module_path

__all__ = [
    "ModulePathMap",
    "discover_modules",
    "iter_declaration_files",
]

ModulePathMap = dict[str, Path]


def iter_declaration_files(
    root: Path,
    *,
    filename: str = DECLARATION_FILENAME,
    skip_dirs: Collection[str] = (".git",),
    console: ConsoleProtocol | None = None,
) -> list[Path]:
    """Return every declaration file under root, in sorted walk order."""

    def on_error(err: OSError) -> None:
        if console is not None:
            console.warning(f"could not be read during walk: {err}")

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in skip_dirs)
        if filename in filenames:
            found.append(Path(dirpath) / filename)
    return found


def discover_modules(
    root: Path,
    *,
    excluded: Collection[str] = frozenset(),
    skip_dirs: Collection[str] = (".git",),
    filename: str = DECLARATION_FILENAME,
    console: ConsoleProtocol | None = None,
) -> Result[ModulePathMap, DuplicateDeclarationError]:
    """Map module path -> declaration file for every module under root.

    Modules listed in `excluded` are left out even if a declaration file
    exists for them. Two files declaring the same module path is an error.
    """
    modules: ModulePathMap = {}
    files = iter_declaration_files(root, filename=filename, skip_dirs=skip_dirs, console=console)
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if console is not None:
                console.warning(f"skipping unreadable {path}: {e}")
            continue

        module_path = read_module_path(text)
        if module_path is None:
            if console is not None:
                console.warning(f"skipping {path}: no module directive")
            continue
        if module_path in excluded:
            continue

        previous = modules.get(module_path)
        if previous is not None:
            return Err(DuplicateDeclarationError(module_path, previous, path))
        modules[module_path] = path

    return Ok(modules)
