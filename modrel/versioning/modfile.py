"""Reading and rewriting module declaration files (`go.mod`).

Only the parts the release tooling needs are understood: the `module`
directive and `require` entries, in both single-line and block form.
Other directives (`go`, `replace`, `exclude`, `retract`, ...) are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from modrel.core.result import Err, Ok, Result

__all__ = [
    "DECLARATION_FILENAME",
    "ModuleDeclaration",
    "Requirement",
    "parse_declaration",
    "read_module_path",
    "rewrite_requirement_versions",
]

DECLARATION_FILENAME = "go.mod"

_MODULE_RE = re.compile(r'^module\s+(?:"([^"]+)"|(\S+))\s*$')
_REQUIRE_LINE_RE = re.compile(r"^require\s+(?!\()(.+)$")
_REQUIRE_BLOCK_START_RE = re.compile(r"^require\s*\(\s*$")
_REQUIREMENT_RE = re.compile(r'^(?:"([^"]+)"|(\S+))\s+(\S+)$')
# Versions as they appear in a requirement; pseudo-versions and
# +incompatible suffixes are covered by the trailing character class.
_VERSION_TOKEN = r"v\d+\.\d+\.\d+[0-9A-Za-z.+-]*"


@dataclass(frozen=True, slots=True)
class Requirement:
    path: str
    version: str
    indirect: bool = False


@dataclass(frozen=True, slots=True)
class ModuleDeclaration:
    module_path: str
    requires: tuple[Requirement, ...] = field(default_factory=tuple)

    def required_paths(self) -> list[str]:
        return [r.path for r in self.requires]


def _split_comment(line: str) -> tuple[str, str]:
    code, sep, comment = line.partition("//")
    return code.strip(), comment.strip() if sep else ""


def _parse_requirement(entry: str, comment: str) -> Requirement | None:
    m = _REQUIREMENT_RE.match(entry)
    if m is None:
        return None
    path = m.group(1) or m.group(2)
    return Requirement(path=path, version=m.group(3), indirect=comment.startswith("indirect"))


def read_module_path(text: str) -> str | None:
    """Return the path named by the `module` directive, or None."""
    for raw in text.splitlines():
        code, _ = _split_comment(raw)
        m = _MODULE_RE.match(code)
        if m:
            return m.group(1) or m.group(2)
    return None


def parse_declaration(text: str) -> Result[ModuleDeclaration, str]:
    """Parse a declaration file.

    Returns Err with a short reason when the module directive is missing,
    a require block is left open, or a requirement line is malformed.
    """
    module_path: str | None = None
    requires: list[Requirement] = []
    in_block = False

    for lineno, raw in enumerate(text.splitlines(), start=1):
        code, comment = _split_comment(raw)
        if not code:
            continue

        if in_block:
            if code == ")":
                in_block = False
                continue
            req = _parse_requirement(code, comment)
            if req is None:
                return Err(f"line {lineno}: malformed requirement {code!r}")
            requires.append(req)
            continue

        if _REQUIRE_BLOCK_START_RE.match(code):
            in_block = True
            continue

        m = _REQUIRE_LINE_RE.match(code)
        if m:
            req = _parse_requirement(m.group(1).strip(), comment)
            if req is None:
                return Err(f"line {lineno}: malformed requirement {code!r}")
            requires.append(req)
            continue

        if module_path is None:
            mm = _MODULE_RE.match(code)
            if mm:
                module_path = mm.group(1) or mm.group(2)

    if in_block:
        return Err("unterminated require block")
    if module_path is None:
        return Err("no module directive")
    return Ok(ModuleDeclaration(module_path=module_path, requires=tuple(requires)))


def rewrite_requirement_versions(text: str, module_paths: Iterable[str], version: str) -> str:
    """Set the version of every reference to module_paths in text.

    A reference is a whole module path followed by whitespace and a
    version, e.g. `go.opentelemetry.io/otel v1.2.0`. A longer path that
    merely ends with a listed one is left alone.
    """
    for path in module_paths:
        pattern = re.compile(
            rf'(?<![\w./-])("?{re.escape(path)}"?)([ \t]+){_VERSION_TOKEN}(?![0-9A-Za-z.+-])'
        )
        text = pattern.sub(lambda m: f"{m.group(1)}{m.group(2)}{version}", text)
    return text
