from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["SemVer", "is_stable_version", "is_valid_version", "parse_version"]

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_VERSION_RE = re.compile(
    r"^(v?)(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None
    prefix: str = "v"

    @property
    def is_stable(self) -> bool:
        """A version is stable once its major component reaches 1."""
        return self.major >= 1

    def major_label(self) -> str:
        return f"v{self.major}"

    def __str__(self) -> str:
        text = f"{self.prefix}{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_version(version: str) -> SemVer | None:
    """Parse `[v]MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`; None if malformed."""
    m = _VERSION_RE.match(version)
    if m is None:
        return None
    return SemVer(
        major=int(m.group(2)),
        minor=int(m.group(3)),
        patch=int(m.group(4)),
        prerelease=m.group(5),
        build=m.group(6),
        prefix=m.group(1),
    )


def is_valid_version(version: str) -> bool:
    return parse_version(version) is not None


def is_stable_version(version: str) -> bool:
    parsed = parse_version(version)
    return parsed is not None and parsed.is_stable
