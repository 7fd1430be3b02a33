"""Tests for relkit.output.errors."""

from __future__ import annotations

from pathlib import Path

from relkit.output.console import MockConsole
from relkit.output.errors import (
    build_error_exit_code,
    print_build_error,
    print_release_error,
    release_error_exit_code,
)
from relkit.services.errors import (
    DiscoveryFailed,
    OutputUnavailable,
    ReleaseError,
    ToolchainFailed,
)


def test_toolchain_failure_propagates_exit_code() -> None:
    error = ToolchainFailed(binary="tool", target="linux/386", returncode=2)
    console = MockConsole()

    print_build_error(error, console)

    assert build_error_exit_code(error) == 2
    assert console.messages == ["error: go build failed for tool (linux/386, exit 2)"]


def test_discovery_failure_shows_stderr() -> None:
    error = DiscoveryFailed(returncode=1, stderr="go: cannot find main module")
    console = MockConsole()

    print_build_error(error, console)

    assert build_error_exit_code(error) == 1
    assert "go: cannot find main module" in console.text


def test_spawn_failure_is_fatal() -> None:
    assert build_error_exit_code(ToolchainFailed("tool", "linux/amd64", -1)) == 1
    assert build_error_exit_code(OutputUnavailable(Path("/ro/release"), "read-only")) == 1


def test_release_error_prints_status_and_body() -> None:
    error = ReleaseError(
        kind="create_failed",
        message="release creation failed: v1.2.0 (HTTP 422)",
        status=422,
        body='{"message": "Validation Failed"}',
    )
    console = MockConsole()

    print_release_error(error, console)

    assert console.messages == [
        "error: release creation failed: v1.2.0 (HTTP 422)",
        "HTTP status: 422",
        '{"message": "Validation Failed"}',
    ]
    assert release_error_exit_code(error) == 1
