"""Error codes for CLI exit status.

These map the error families of the release tooling onto shell exit codes
so scripts driving `modrel` can tell a bad manifest from a git failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown module set, bad arguments)
    - 2: Config error (manifest or tool config unreadable or malformed)
    - 3: Validation error (manifest inconsistent with the repository)
    - 4: Tool error (git or make failed, tag exists, dirty tree)
    - 5: I/O error (declaration file could not be rewritten)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    VALIDATION_ERROR = 3
    TOOL_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
