"""Snippet operations.

One method per command. Each builds exactly one request, sends it through
the injected `SnippetTransport` and turns the answer into domain objects.
Non-success statuses become `ApiError`; nothing is retried.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from core.domain.commands import Command
from core.domain.models import (
    ApiResponse,
    Configuration,
    Snippet,
    SnippetChanges,
    SnippetDraft,
)
from core.errors import ApiError
from core.interfaces.transport import SnippetTransport
from core.log import get_logger
from core.services.request_builder import build_request

_log = get_logger("service")


def _error_message(response: ApiResponse) -> str:
    """Best-effort extraction of GitLab's error message."""

    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "error", "error_description"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (dict, list)) and value:
                return str(value)
    return response.text.strip()[:500]


def _json_body(response: ApiResponse) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(response.status_code, f"invalid JSON in response: {exc}") from exc


def _to_snippet(data: Any, *, status_code: int) -> Snippet:
    try:
        return Snippet.model_validate(data)
    except ValidationError as exc:
        raise ApiError(status_code, f"unexpected snippet payload: {exc.error_count()} error(s)") from exc


class SnippetService:
    def __init__(self, config: Configuration, transport: SnippetTransport) -> None:
        self._config = config
        self._transport = transport

    def _call(
        self,
        command: Command,
        *,
        snippet_id: int | None = None,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> ApiResponse:
        request = build_request(self._config, command, snippet_id=snippet_id, body=body, params=params)
        _log.debug("%s %s", request.method, request.url)
        response = self._transport.send(request)
        if not response.ok:
            raise ApiError(response.status_code, _error_message(response), url=request.url)
        return response

    def _snippet_list(self, response: ApiResponse) -> list[Snippet]:
        data = _json_body(response)
        if not isinstance(data, list):
            raise ApiError(response.status_code, "expected a JSON list of snippets")
        return [_to_snippet(item, status_code=response.status_code) for item in data]

    def list(self, *, page: int | None = None, per_page: int | None = None) -> list[Snippet]:
        params: dict[str, str] = {}
        if page is not None:
            params["page"] = str(page)
        if per_page is not None:
            params["per_page"] = str(per_page)
        return self._snippet_list(self._call(Command.LIST, params=params))

    def search(self, term: str) -> list[Snippet]:
        """Query with `search=term`, then keep only snippets that match.

        The project snippets endpoint may ignore the parameter, so the
        returned page is also filtered locally.
        """

        response = self._call(Command.SEARCH, params={"search": term})
        return [snippet for snippet in self._snippet_list(response) if snippet.matches(term)]

    def raw(self, snippet_id: int) -> bytes:
        """Body exactly as served, without decoding."""

        response = self._call(Command.GET, snippet_id=snippet_id)
        return response.content or response.text.encode("utf-8")

    def details(self, snippet_id: int) -> Any:
        return _json_body(self._call(Command.DETAILS, snippet_id=snippet_id))

    def create(self, draft: SnippetDraft) -> Snippet:
        response = self._call(Command.CREATE, body=draft.to_payload())
        return _to_snippet(_json_body(response), status_code=response.status_code)

    def update(self, snippet_id: int, changes: SnippetChanges) -> Snippet:
        if changes.is_empty():
            raise ValueError("no changes given")
        response = self._call(Command.UPDATE, snippet_id=snippet_id, body=changes.to_payload())
        return _to_snippet(_json_body(response), status_code=response.status_code)

    def delete(self, snippet_id: int) -> None:
        self._call(Command.DELETE, snippet_id=snippet_id)
