"""The clean / build / release steps behind the CLI.

Steps share one CLIContext. Release settings are resolved the first time a
step needs them and reused by every later step of the same run.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NoReturn

import typer

from relkit.core.result import Err
from relkit.github.http import HttpClient, RealHttpClient
from relkit.output.errors import (
    build_error_exit_code,
    print_build_error,
    print_release_error,
    release_error_exit_code,
)
from relkit.services.build import BuildService, clean_output
from relkit.services.publisher import ReleasePublisher
from relkit.services.releases_api import ReleasesApi
from relkit.services.settings import (
    BuildSettings,
    resolve_build_settings,
    resolve_publish_settings,
)

from .context import CLIContext

__all__ = ["STEPS", "Pipeline"]

STEPS: tuple[str, ...] = ("clean", "build", "release")


def _exit(code: int) -> NoReturn:
    raise typer.Exit(code=code)


class Pipeline:
    """Runs steps in the given order, exiting at the first failure."""

    def __init__(
        self,
        ctx: CLIContext,
        *,
        http_factory: Callable[[float], HttpClient] = RealHttpClient,
    ) -> None:
        self._ctx = ctx
        self._http_factory = http_factory
        self._settings: BuildSettings | None = None

    def run(self, steps: Sequence[str]) -> None:
        handlers = {"clean": self.clean, "build": self.build, "release": self.release}
        for step in steps:
            self._ctx.console.header(step)
            handlers[step]()

    def settings(self) -> BuildSettings:
        if self._settings is None:
            self._settings = resolve_build_settings(
                repo_root=self._ctx.repo_root,
                config=self._ctx.config,
                console=self._ctx.console,
                env=self._ctx.env,
            )
        return self._settings

    def clean(self) -> None:
        console = self._ctx.console
        result = clean_output(self._ctx.output_dir)
        if isinstance(result, Err):
            print_build_error(result.error, console)
            _exit(build_error_exit_code(result.error))
        console.success(f"cleaned {result.value}")

    def build(self) -> None:
        console = self._ctx.console
        service = BuildService(self.settings(), console)
        result = service.build_all()
        if isinstance(result, Err):
            print_build_error(result.error, console)
            _exit(build_error_exit_code(result.error))
        console.success(f"built {len(result.value)} artifacts")

    def release(self) -> None:
        console = self._ctx.console
        settings = self.settings()
        publish = resolve_publish_settings(
            settings,
            config=self._ctx.config,
            console=console,
            env=self._ctx.env,
        )
        api = ReleasesApi(
            self._http_factory(publish.timeout),
            api_url=publish.api_url,
            token=publish.token,
            repository=settings.repository,
        )
        publisher = ReleasePublisher(settings, publish, api=api, console=console)

        result = publisher.publish()
        if isinstance(result, Err):
            print_release_error(result.error, console)
            console.print(f"stopped at stage: {publisher.stage}")
            _exit(release_error_exit_code(result.error))

        published = result.value
        console.success(f"release {settings.tag} published with {len(published.assets)} assets")
        if published.release.html_url:
            console.print(published.release.html_url)
