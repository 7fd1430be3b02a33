"""GitHub releases API: create a release, attach assets.

Both calls must answer 201 Created; any other status is a failure carrying
the status and response body for diagnostics.
"""

from __future__ import annotations

import json
import urllib.parse
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from relkit.core.result import Err, Ok, Result
from relkit.core.structured import as_str_dict, get_str

from .errors import ReleaseError, ReleaseErrorKind

if TYPE_CHECKING:
    from relkit.github.http import HttpClient, HttpResponse

__all__ = ["ASSET_CONTENT_TYPE", "CreatedRelease", "ReleasesApi", "upload_endpoint"]

ASSET_CONTENT_TYPE = "application/x-executable"

_CREATED = 201


@dataclass(frozen=True, slots=True)
class CreatedRelease:
    """The part of the create-release response relkit uses."""

    tag: str
    upload_url: str
    release_id: int | None = None
    html_url: str | None = None

    @property
    def upload_endpoint(self) -> str:
        return upload_endpoint(self.upload_url)


def upload_endpoint(upload_url: str) -> str:
    """Strip the URI template suffix from `upload_url`.

    GitHub returns e.g. `https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}`.
    """
    return upload_url.split("{", 1)[0]


class ReleasesApi:
    """Authenticated access to one repository's releases."""

    def __init__(self, http: HttpClient, *, api_url: str, token: str, repository: str) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")
        self._token = token
        self._repository = repository

    @property
    def releases_url(self) -> str:
        return f"{self._api_url}/repos/{self._repository}/releases"

    def create_release(
        self, *, tag: str, name: str, body: str
    ) -> Result[CreatedRelease, ReleaseError]:
        payload = json.dumps({"tag_name": tag, "name": name, "body": body}).encode("utf-8")
        url = self.releases_url

        response = self._http.post(url, payload, self._headers("application/json"))
        if isinstance(response, Err):
            return Err(
                ReleaseError(kind="network_error", message=str(response.error), hint=url)
            )
        if response.value.status != _CREATED:
            return Err(
                _status_error("create_failed", f"release creation failed: {tag}", response.value)
            )

        return _parse_created(tag, response.value)

    def upload_asset(self, release: CreatedRelease, path: Path) -> Result[str, ReleaseError]:
        """Upload `path` as an asset named after the file.

        Returns:
            Ok(asset name) on 201
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="missing_artifacts",
                    message=f"cannot read artifact: {e}",
                    hint=str(path),
                )
            )

        query = urllib.parse.urlencode({"name": path.name})
        url = f"{release.upload_endpoint}?{query}"

        response = self._http.post(url, data, self._headers(ASSET_CONTENT_TYPE))
        if isinstance(response, Err):
            return Err(
                ReleaseError(kind="network_error", message=str(response.error), hint=path.name)
            )
        if response.value.status != _CREATED:
            return Err(
                _status_error("upload_failed", f"asset upload failed: {path.name}", response.value)
            )

        return Ok(path.name)

    def _headers(self, content_type: str) -> dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": content_type,
        }


def _status_error(
    kind: ReleaseErrorKind, message: str, response: HttpResponse
) -> ReleaseError:
    return ReleaseError(
        kind=kind,
        message=f"{message} (HTTP {response.status})",
        status=response.status,
        body=response.body,
    )


def _parse_created(tag: str, response: HttpResponse) -> Result[CreatedRelease, ReleaseError]:
    try:
        obj: object = json.loads(response.body)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="create_failed",
                message=f"create-release returned invalid JSON: {e}",
                status=response.status,
                body=response.body,
            )
        )

    data = as_str_dict(obj)
    upload_url = get_str(data, "upload_url") if data is not None else None
    if data is None or upload_url is None:
        return Err(
            ReleaseError(
                kind="create_failed",
                message="create-release response has no upload_url",
                status=response.status,
                body=response.body,
            )
        )

    release_id = data.get("id")
    return Ok(
        CreatedRelease(
            tag=tag,
            upload_url=upload_url,
            release_id=release_id if isinstance(release_id, int) else None,
            html_url=get_str(data, "html_url"),
        )
    )
