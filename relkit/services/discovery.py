"""Discovery of Go command packages (`package main`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import run

from .errors import BuildError, DiscoveryFailed

__all__ = ["MainPackage", "discover_main_packages", "parse_package_listing"]

_LIST_TIMEOUT_SECONDS = 5 * 60.0
_LIST_FORMAT = "{{.Name}} {{.Dir}}"


@dataclass(frozen=True, slots=True)
class MainPackage:
    """A buildable program: its binary name and source directory."""

    binary: str
    source: Path


def parse_package_listing(output: str) -> list[MainPackage]:
    """Keep `main` packages from `go list -f '{{.Name}} {{.Dir}}'` output."""
    packages: list[MainPackage] = []
    for line in output.splitlines():
        name, _, directory = line.strip().partition(" ")
        if name != "main" or not directory:
            continue
        source = Path(directory.strip())
        packages.append(MainPackage(binary=source.name, source=source))
    return packages


def discover_main_packages(repo_root: Path) -> Result[list[MainPackage], BuildError]:
    """List every command package under `repo_root`.

    Returns:
        Ok(packages) in `go list` order (possibly empty),
        Err(DiscoveryFailed) if `go list` fails
    """
    result = run(
        ["go", "list", "-f", _LIST_FORMAT, "./..."],
        cwd=repo_root,
        timeout=_LIST_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            DiscoveryFailed(
                returncode=result.error.returncode,
                stderr=result.error.stderr.strip(),
            )
        )
    return Ok(parse_package_listing(result.value))
