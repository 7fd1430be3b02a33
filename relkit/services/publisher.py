"""Publish built artifacts as a GitHub release.

Publishing walks four stages in order and stops at the first failure:

    RESOLVE   validate settings and the artifact directory
    DESCRIBE  render the changelog used as release body
    CREATE    POST the release (must answer 201)
    UPLOAD    POST every file of the artifact directory (each must answer 201)

Nothing is rolled back: a failed upload leaves the remote release with the
assets uploaded so far.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository

from .changelog import build_changelog
from .errors import ReleaseError
from .releases_api import CreatedRelease, ReleasesApi

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

    from .settings import BuildSettings, PublishSettings

__all__ = ["PublishStage", "PublishedRelease", "ReleasePublisher", "list_artifacts"]

_REPOSITORY_RE = re.compile(r"^[\w.-]+/[\w.-]+$")


class PublishStage(Enum):
    RESOLVE = "resolve"
    DESCRIBE = "describe"
    CREATE = "create"
    UPLOAD = "upload"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    release: CreatedRelease
    assets: tuple[str, ...]


def list_artifacts(output_dir: Path) -> list[Path]:
    """Regular files of `output_dir`, sorted by name."""
    return sorted(p for p in output_dir.iterdir() if p.is_file())


class ReleasePublisher:
    """Create the release for `settings.tag` and attach every artifact.

    `stage` reflects the stage in progress, or the one that failed.
    """

    def __init__(
        self,
        settings: BuildSettings,
        publish: PublishSettings,
        *,
        api: ReleasesApi,
        console: ConsoleProtocol,
        repo: Repository | None = None,
    ) -> None:
        self._settings = settings
        self._publish = publish
        self._api = api
        self._console = console
        self._repo = repo or Repository(settings.repo_root)
        self.stage = PublishStage.RESOLVE

    def publish(self) -> Result[PublishedRelease, ReleaseError]:
        self.stage = PublishStage.RESOLVE
        resolved = self._check_inputs()
        if isinstance(resolved, Err):
            return resolved

        self.stage = PublishStage.DESCRIBE
        body = build_changelog(self._repo, self._settings.tag)
        if isinstance(body, Err):
            return Err(
                ReleaseError(
                    kind="changelog_failed",
                    message=f"cannot compute changelog for {self._settings.tag}",
                    hint=body.error.message,
                )
            )
        self._console.print(body.value or "(no changes)")

        self.stage = PublishStage.CREATE
        self._console.print(
            f"Creating release {self._publish.release_name} on {self._settings.repository}"
        )
        created = self._api.create_release(
            tag=self._settings.tag,
            name=self._publish.release_name,
            body=body.value,
        )
        if isinstance(created, Err):
            return created

        self.stage = PublishStage.UPLOAD
        uploaded: list[str] = []
        for path in list_artifacts(self._settings.output_dir):
            self._console.print(f"Uploading {path.name}")
            result = self._api.upload_asset(created.value, path)
            if isinstance(result, Err):
                return result
            uploaded.append(result.value)

        self.stage = PublishStage.DONE
        return Ok(PublishedRelease(release=created.value, assets=tuple(uploaded)))

    def _check_inputs(self) -> Result[None, ReleaseError]:
        s = self._settings
        if not s.tag:
            return Err(
                ReleaseError(
                    kind="missing_tag",
                    message="release tag is empty",
                    hint="Set GIT_TAG=vX.Y.Z or create a tag",
                )
            )
        if not _REPOSITORY_RE.match(s.repository):
            return Err(
                ReleaseError(
                    kind="invalid_repository",
                    message=f"invalid repository: {s.repository!r}",
                    hint="Set GITHUB_REPOSITORY=owner/name",
                )
            )
        if not s.output_dir.is_dir():
            return Err(
                ReleaseError(
                    kind="missing_artifacts",
                    message=f"artifact directory not found: {s.output_dir}",
                    hint="Run: relkit build",
                )
            )
        return Ok(None)
