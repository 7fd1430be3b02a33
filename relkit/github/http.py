"""HTTP client abstraction for the releases API.

This module provides:
- HttpClient: Protocol for HTTP POSTs (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

Any HTTP status is a response, not an error: callers decide which status
counts as success. HttpError is reserved for transport failures.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from relkit import __version__
from relkit.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RecordedRequest",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport failure (DNS, TLS, refused connection, timeout).

    Attributes:
        url: The URL that failed
        status: Always 0; kept for symmetry with HttpResponse
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: str


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def post(
        self, url: str, data: bytes, headers: dict[str, str]
    ) -> Result[HttpResponse, HttpError]:
        """POST `data` to `url`.

        Returns:
            Ok with the response (whatever its status), or Err on transport
            failure
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib with system certificates."""

    def __init__(self, timeout: float = 60.0, user_agent: str = f"relkit/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def post(
        self, url: str, data: bytes, headers: dict[str, str]
    ) -> Result[HttpResponse, HttpError]:
        req = urllib.request.Request(
            url,
            data=data,
            headers={"User-Agent": self.user_agent, **headers},
            method="POST",
        )
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(HttpResponse(status=response.status, body=_decode(response.read())))
        except urllib.error.HTTPError as e:
            return Ok(HttpResponse(status=e.code, body=_decode(e.read())))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    url: str
    data: bytes
    headers: dict[str, str]


def _empty_requests() -> list[RecordedRequest]:
    return []


def _empty_responses() -> dict[str, HttpResponse | HttpError]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are registered per exact URL; unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_response(url, HttpResponse(201, '{"upload_url": "..."}'))
        client.post(url, b"{}", {})
        assert client.requests[0].url == url
    """

    responses: dict[str, HttpResponse | HttpError] = field(default_factory=_empty_responses)
    requests: list[RecordedRequest] = field(default_factory=_empty_requests)

    def set_response(self, url: str, response: HttpResponse | HttpError) -> None:
        self.responses[url] = response

    def post(
        self, url: str, data: bytes, headers: dict[str, str]
    ) -> Result[HttpResponse, HttpError]:
        self.requests.append(RecordedRequest(url=url, data=data, headers=dict(headers)))

        response = self.responses.get(url)
        if response is None:
            return Ok(HttpResponse(status=404, body='{"message": "Not Found (mock)"}'))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
