"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode, propagated_exit_code
from relkit.output.console import Style
from relkit.services.errors import (
    BuildError,
    DiscoveryFailed,
    OutputUnavailable,
    ReleaseError,
    ToolchainFailed,
)

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = [
    "build_error_exit_code",
    "print_build_error",
    "print_release_error",
    "release_error_exit_code",
]


def print_build_error(error: BuildError, console: ConsoleProtocol) -> None:
    match error:
        case DiscoveryFailed(returncode=rc, stderr=stderr):
            console.error(f"go list failed (exit {rc})")
            if stderr:
                console.print(stderr, Style.DIM)
        case ToolchainFailed(binary=binary, target=target, returncode=rc):
            console.error(f"go build failed for {binary} ({target}, exit {rc})")
        case OutputUnavailable(path=path, reason=reason):
            console.error(f"cannot prepare output directory {path}: {reason}")


def build_error_exit_code(error: BuildError) -> int:
    """Toolchain failures propagate the tool's own exit code."""
    match error:
        case DiscoveryFailed(returncode=rc) | ToolchainFailed(returncode=rc):
            return propagated_exit_code(rc)
        case OutputUnavailable():
            return int(ErrorCode.FATAL)
    return int(ErrorCode.FATAL)


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print the message, then the HTTP status and response body if any."""
    console.error(error.message)
    if error.status is not None:
        console.print(f"HTTP status: {error.status}", Style.DIM)
    if error.body:
        console.print(error.body, Style.DIM)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    del error
    return int(ErrorCode.FATAL)
