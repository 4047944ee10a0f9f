"""Exit codes for CLI commands.

The numeric values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad filter, bad config, bad arguments)
- 3: Build error (no targets matched, a target failed)
- 4: Signing error (unreadable or invalid signing key)
- 5: I/O error (manifest could not be written)
- 6: Cancelled (deadline reached before all targets ran)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    BUILD_ERROR = 3
    SIGNING_ERROR = 4
    IO_ERROR = 5
    CANCELLED = 6

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
