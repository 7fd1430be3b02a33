"""Process exit codes.

relkit only distinguishes success from an explicit fatal error. When an
invoked tool (go, git) fails, its own exit code is propagated instead, the
same way a shell script running under `set -e` would.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "propagated_exit_code"]


class ErrorCode(IntEnum):
    """Exit codes for the relkit CLI."""

    OK = 0
    FATAL = 1


def propagated_exit_code(returncode: int) -> int:
    """Exit code to use after a subprocess failed with `returncode`.

    Negative codes (signals, spawn failures) and zero collapse to FATAL.
    """
    if returncode > 0:
        return returncode
    return int(ErrorCode.FATAL)
