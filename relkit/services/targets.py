"""Cross-compilation targets and artifact naming."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = ["Artifact", "Target", "TARGETS", "artifact_name"]


@dataclass(frozen=True, slots=True)
class Target:
    """A GOOS/GOARCH pair."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


TARGETS: tuple[Target, ...] = (
    Target("linux", "amd64"),
    Target("linux", "386"),
    Target("darwin", "amd64"),
)


def artifact_name(binary: str, target: Target, tag: str) -> str:
    """`{binary}_{os}_{arch}_{tag}`; unique per (binary, target, tag)."""
    return f"{binary}_{target.os}_{target.arch}_{tag}"


@dataclass(frozen=True, slots=True)
class Artifact:
    binary: str
    target: Target
    path: Path

    @property
    def name(self) -> str:
        return self.path.name
