"""Release settings resolved once per invocation.

Values come from the environment, git, or the user (see
`relkit.core.variables`). The resulting frozen objects are passed explicitly
to the build and publish services.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from relkit.core.config import RelkitConfig, ReleaseLayoutConfig
from relkit.core.variables import resolve_variable
from relkit.git.repository import Repository, parse_remote_url

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = [
    "ENV_RELEASE_NAME",
    "ENV_REPOSITORY",
    "ENV_TAG",
    "ENV_TOKEN",
    "BuildSettings",
    "PublishSettings",
    "resolve_build_settings",
    "resolve_publish_settings",
]

ENV_TAG = "GIT_TAG"
ENV_REPOSITORY = "GITHUB_REPOSITORY"
ENV_TOKEN = "GITHUB_OAUTH_TOKEN"
ENV_RELEASE_NAME = "RELEASE_NAME"

_DEFAULT_MODULE_HOST = "github.com"


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Everything `build` and `release` need besides credentials.

    Attributes:
        repo_root: Repository top-level directory
        output_dir: Artifact directory (`<repo_root>/release` by default)
        tag: Release tag, also embedded in artifact names
        repository: `owner/name`
        module_host: Hosting domain used to build Go import paths
        layout: Symbols receiving the tag and build date
    """

    repo_root: Path
    output_dir: Path
    tag: str
    repository: str
    module_host: str = _DEFAULT_MODULE_HOST
    layout: ReleaseLayoutConfig = ReleaseLayoutConfig()

    @property
    def version_package(self) -> str:
        """Fully-qualified Go package holding the version variables."""
        base = f"{self.module_host}/{self.repository}"
        if self.layout.version_package:
            return f"{base}/{self.layout.version_package}"
        return base

    @property
    def tag_symbol(self) -> str:
        return f"{self.version_package}.{self.layout.tag_variable}"

    @property
    def date_symbol(self) -> str:
        return f"{self.version_package}.{self.layout.date_variable}"


@dataclass(frozen=True, slots=True)
class PublishSettings:
    token: str
    release_name: str
    api_url: str
    timeout: float


def resolve_build_settings(
    *,
    repo_root: Path,
    config: RelkitConfig,
    console: ConsoleProtocol,
    env: MutableMapping[str, str] | None = None,
) -> BuildSettings:
    """Resolve repository and tag, prompting where allowed."""
    repo = Repository(repo_root)
    remote = parse_remote_url(repo.push_url() or "")

    repository = resolve_variable(
        ENV_REPOSITORY,
        remote.slug if remote else "",
        console=console,
        env=env,
    )
    tag = resolve_variable(ENV_TAG, repo.latest_tag() or "", console=console, env=env)

    return BuildSettings(
        repo_root=repo_root,
        output_dir=repo_root / config.release.output_dir,
        tag=tag,
        repository=repository,
        module_host=remote.host if remote else _DEFAULT_MODULE_HOST,
        layout=config.release,
    )


def resolve_publish_settings(
    build: BuildSettings,
    *,
    config: RelkitConfig,
    console: ConsoleProtocol,
    env: MutableMapping[str, str] | None = None,
) -> PublishSettings:
    """Resolve the API token (secret) and the release display name."""
    token = resolve_variable(ENV_TOKEN, console=console, secret=True, env=env)
    name = resolve_variable(ENV_RELEASE_NAME, build.tag, console=console, env=env)
    return PublishSettings(
        token=token,
        release_name=name,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
