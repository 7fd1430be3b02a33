from __future__ import annotations

import os
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from pathlib import Path

import typer

from relkit.core.config import RelkitConfig, load_config_or_default
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.git.repository import find_repo_root
from relkit.output.console import ConsoleProtocol, RichConsole


def _process_env() -> MutableMapping[str, str]:
    return os.environ


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: RelkitConfig
    console: ConsoleProtocol
    env: MutableMapping[str, str] = field(default_factory=_process_env)

    @property
    def output_dir(self) -> Path:
        return self.repo_root / self.config.release.output_dir


def build_context() -> CLIContext:
    repo_root = find_repo_root(Path.cwd())

    config_result = load_config_or_default(repo_root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.FATAL))

    return CLIContext(
        repo_root=repo_root,
        config=config_result.value,
        console=RichConsole(),
    )
