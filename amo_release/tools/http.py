"""HTTP client abstraction for the AMO API.

This module provides:
- HttpClient: Protocol for a single HTTP exchange (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

A non-2xx status is not an error at this level: it is returned as an
``HttpResponse`` and classified by the caller. ``HttpError`` is reserved for
transport failures where no response was received.
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from amo_release.core.result import Err, Ok, Result
from amo_release.tools.multipart import MultipartBody

__all__ = [
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpError",
    "RealHttpClient",
    "MockHttpClient",
    "json_response",
]

HTTP_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class HttpRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | MultipartBody | None = None


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A received HTTP response, whatever its status.

    Attributes:
        url: Final URL of the response
        status: HTTP status code
        content_type: Value of the Content-Type header ("" if absent)
        body: Raw response bytes
    """

    url: str
    status: int
    content_type: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def decoded(self) -> object:
        """Body as parsed JSON when declared as JSON, else as text."""
        text = self.body.decode("utf-8", errors="replace")
        if "application/json" in self.content_type.lower():
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                return text
        return text


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport failure: no HTTP response was received.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def send(self, request: HttpRequest) -> Result[HttpResponse, HttpError]:
        """Perform one exchange.

        Returns:
            Ok with the response (any status), or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Streaming multipart request bodies
    - Timeout handling
    """

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        user_agent: str = "amo-release/0.1.0",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def send(self, request: HttpRequest) -> Result[HttpResponse, HttpError]:
        url = request.url
        headers = {"User-Agent": self.user_agent, **request.headers}

        data: bytes | Iterator[bytes] | None
        if isinstance(request.body, MultipartBody):
            try:
                length = request.body.content_length()
            except OSError as e:
                return Err(HttpError(url=url, message=str(e)))
            headers["Content-Type"] = request.body.content_type
            headers["Content-Length"] = str(length)
            data = request.body.iter_chunks()
        else:
            data = request.body

        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=request.method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        url=response.geturl(),
                        status=response.status,
                        content_type=response.headers.get("Content-Type", ""),
                        body=response.read(),
                    )
                )
        except urllib.error.HTTPError as e:
            return Ok(_response_from_http_error(e, url))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, message=f"{type(e).__name__}: {e}"))
        except TimeoutError:
            return Err(HttpError(url=url, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, message=str(e)))


def _response_from_http_error(e: urllib.error.HTTPError, url: str) -> HttpResponse:
    try:
        body = e.read()
    except OSError:
        body = b""
    finally:
        e.close()
    content_type = e.headers.get("Content-Type", "") if e.headers is not None else ""
    return HttpResponse(url=e.geturl() or url, status=e.code, content_type=content_type, body=body)


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are queued per (method, url). Each call consumes the head of
    the queue; the last queued response keeps being returned, which models
    an upload that stays unprocessed. Every request is recorded.

    Usage:
        client = MockHttpClient()
        client.add_json("GET", "https://amo.test/api/v5/addons/upload/u1/", {...})
        result = client.send(HttpRequest("GET", "https://amo.test/api/v5/addons/upload/u1/"))
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], list[HttpResponse | HttpError]] = {}
        self.requests: list[HttpRequest] = []

    def add(self, method: str, url: str, *responses: HttpResponse | HttpError) -> None:
        self._routes.setdefault((method, url), []).extend(responses)

    def add_json(self, method: str, url: str, payload: object, status: int = 200) -> None:
        self.add(method, url, json_response(url, payload, status=status))

    def send(self, request: HttpRequest) -> Result[HttpResponse, HttpError]:
        self.requests.append(request)

        queue = self._routes.get((request.method, request.url))
        if not queue:
            return Ok(
                HttpResponse(
                    url=request.url,
                    status=404,
                    content_type="text/plain",
                    body=b"Not found (mock)",
                )
            )

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def calls(self, method: str, url: str | None = None) -> list[HttpRequest]:
        """Recorded requests for a method, optionally restricted to one URL."""
        return [
            r for r in self.requests if r.method == method and (url is None or r.url == url)
        ]


def json_response(url: str, payload: object, *, status: int = 200) -> HttpResponse:
    return HttpResponse(
        url=url,
        status=status,
        content_type="application/json; charset=utf-8",
        body=json.dumps(payload).encode("utf-8"),
    )
