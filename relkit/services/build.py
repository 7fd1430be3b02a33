"""Clean and cross-compile Go command packages.

Each discovered `main` package is compiled once per target, sequentially:

    GOOS=linux GOARCH=amd64 CGO_ENABLED=0 go build -installsuffix nocgo \
        -ldflags "-s -w -X <pkg>.Version=<tag> -X <pkg>.BuildDate=<date>" \
        -o release/<binary>_linux_amd64_<tag> ./cmd/<binary>

The first failing compilation stops the build.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import merged_env, run_silent

from .discovery import MainPackage, discover_main_packages
from .errors import BuildError, OutputUnavailable, ToolchainFailed
from .targets import TARGETS, Artifact, Target, artifact_name

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

    from .settings import BuildSettings

__all__ = ["BUILD_DATE_FORMAT", "BuildService", "clean_output"]

BUILD_DATE_FORMAT = "%Y-%m-%d_%H:%M:%S"

_COMPILE_TIMEOUT_SECONDS = 30 * 60.0


def _utc_now() -> datetime:
    return datetime.now(UTC)


def clean_output(output_dir: Path) -> Result[Path, BuildError]:
    """Remove `output_dir` and recreate it empty."""
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(OutputUnavailable(path=output_dir, reason=str(e)))
    return Ok(output_dir)


class BuildService:
    """Cross-compiles every command package of a repository."""

    def __init__(
        self,
        settings: BuildSettings,
        console: ConsoleProtocol,
        *,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._settings = settings
        self._console = console
        self._now = now

    def ldflags(self, built_at: str) -> str:
        s = self._settings
        return f"-s -w -X {s.tag_symbol}={s.tag} -X {s.date_symbol}={built_at}"

    def build_all(self) -> Result[list[Artifact], BuildError]:
        """Discover command packages and build each for every target.

        Returns:
            Ok(artifacts) in build order
            Err(BuildError) at the first failure
        """
        packages = discover_main_packages(self._settings.repo_root)
        if isinstance(packages, Err):
            return packages

        output = clean_output(self._settings.output_dir)
        if isinstance(output, Err):
            return output

        if not packages.value:
            self._console.warning(f"no main package found in {self._settings.repo_root}")
            return Ok([])

        built_at = self._now().strftime(BUILD_DATE_FORMAT)
        artifacts: list[Artifact] = []
        for package in packages.value:
            result = self.build_binary(package, built_at=built_at)
            if isinstance(result, Err):
                return result
            artifacts.extend(result.value)

        return Ok(artifacts)

    def build_binary(
        self, package: MainPackage, *, built_at: str | None = None
    ) -> Result[list[Artifact], BuildError]:
        """Compile one package for each target in TARGETS."""
        stamp = built_at or self._now().strftime(BUILD_DATE_FORMAT)
        artifacts: list[Artifact] = []
        for target in TARGETS:
            result = self._compile(package, target, stamp)
            if isinstance(result, Err):
                return result
            artifacts.append(result.value)
        return Ok(artifacts)

    def _compile(
        self, package: MainPackage, target: Target, built_at: str
    ) -> Result[Artifact, BuildError]:
        s = self._settings
        out = s.output_dir / artifact_name(package.binary, target, s.tag)
        self._console.print(f"Building {package.binary} for {target}")

        cmd = [
            "go",
            "build",
            "-installsuffix",
            "nocgo",
            "-ldflags",
            self.ldflags(built_at),
            "-o",
            str(out),
            self._source_arg(package.source),
        ]
        env = merged_env({"GOOS": target.os, "GOARCH": target.arch, "CGO_ENABLED": "0"})

        result = run_silent(cmd, cwd=s.repo_root, env=env, timeout=_COMPILE_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                ToolchainFailed(
                    binary=package.binary,
                    target=str(target),
                    returncode=result.error.returncode,
                )
            )
        return Ok(Artifact(binary=package.binary, target=target, path=out))

    def _source_arg(self, source: Path) -> str:
        # go build wants a package path; "./x" keeps it relative to the module.
        try:
            rel = source.relative_to(self._settings.repo_root)
        except ValueError:
            return str(source)
        rel_str = rel.as_posix()
        return "." if rel_str == "." else f"./{rel_str}"

