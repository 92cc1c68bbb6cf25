"""httpx transport.

Why a wrapper:
- Standardizes timeouts, headers and request/response logging for the API.
- Eases testing: the transport can be swapped (httpx.MockTransport) without
  touching the core.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ApiResponse, Configuration, SnippetRequest
from core.errors import TransportError, TransportUnavailableError
from core.log import get_logger

try:
    import httpx
except Exception:  # pragma: no cover - exercised only when deps are missing
    httpx = None  # type: ignore

_log = get_logger("http")


def require_httpx() -> Any:
    """Fail fast when no HTTP-capable transport is installed."""

    if httpx is None:
        raise TransportUnavailableError("missing dependency: httpx (pip install httpx)")
    return httpx


def _log_request(request: httpx.Request) -> None:
    _log.debug("-> %s %s", request.method, request.url)


def _log_response(response: httpx.Response) -> None:
    request = response.request
    _log.debug("<- %s %s %s", response.status_code, request.method, request.url)


def build_client(
    config: Configuration,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults.

    Why a builder:
    - Centralizes timeout and User-Agent so every command behaves the same.
    - `transport` lets tests plug in `httpx.MockTransport`.
    """

    lib = require_httpx()
    return lib.Client(
        timeout=lib.Timeout(config.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": config.user_agent, "Accept": "application/json, text/plain;q=0.9, */*;q=0.8"},
        event_hooks={"request": [_log_request], "response": [_log_response]},
        transport=transport,
    )


class HttpxTransport:
    """`SnippetTransport` implementation backed by an `httpx.Client`."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def send(self, request: SnippetRequest) -> ApiResponse:
        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params or None,
                json=request.json,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            # UnicodeEncodeError: header values (the token) must be ASCII.
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc
        return ApiResponse(
            status_code=response.status_code,
            text=response.text,
            content=response.content,
            content_type=response.headers.get("content-type", ""),
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
