from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class DiscoveryFailed:
    """`go list` could not enumerate packages."""

    returncode: int
    stderr: str


@dataclass(frozen=True, slots=True)
class ToolchainFailed:
    """A compiler invocation exited non-zero."""

    binary: str
    target: str
    returncode: int


@dataclass(frozen=True, slots=True)
class OutputUnavailable:
    path: Path
    reason: str


BuildError = DiscoveryFailed | ToolchainFailed | OutputUnavailable


ReleaseErrorKind = Literal[
    "missing_artifacts",
    "invalid_repository",
    "missing_tag",
    "changelog_failed",
    "create_failed",
    "upload_failed",
    "network_error",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    status: int | None = None
    body: str | None = None
