"""Tests for core.services.snippets using an in-memory transport."""

from __future__ import annotations

import json
from typing import Any

import pytest

from core.domain.models import (
    ApiResponse,
    Configuration,
    SnippetChanges,
    SnippetDraft,
    SnippetRequest,
    Visibility,
)
from core.errors import ApiError
from core.interfaces.transport import SnippetTransport
from core.services.snippets import SnippetService

CONFIG = Configuration(host="example.com", api_root="https://example.com/api/v4", project_id="42", token="t")
BASE = "https://example.com/api/v4/projects/42/snippets"


class FakeTransport:
    def __init__(self, response: ApiResponse) -> None:
        self.response = response
        self.sent: list[SnippetRequest] = []

    def send(self, request: SnippetRequest) -> ApiResponse:
        self.sent.append(request)
        return self.response


def _json(status: int, payload: Any) -> ApiResponse:
    return ApiResponse(status_code=status, text=json.dumps(payload), content_type="application/json")


def _service(response: ApiResponse) -> tuple[SnippetService, FakeTransport]:
    transport = FakeTransport(response)
    return SnippetService(CONFIG, transport), transport


def test_fake_transport_satisfies_protocol() -> None:
    assert isinstance(FakeTransport(ApiResponse(200)), SnippetTransport)


def test_list_parses_snippets(snippet_payloads: list[dict[str, Any]]) -> None:
    service, transport = _service(_json(200, snippet_payloads))
    snippets = service.list(per_page=50)
    assert [s.id for s in snippets] == [1, 2]
    assert snippets[0].file_name == "deploy.sh"
    assert transport.sent[0].url == BASE
    assert transport.sent[0].params == {"per_page": "50"}


def test_search_sends_query_and_filters_locally(snippet_payloads: list[dict[str, Any]]) -> None:
    """Assumes the server may ignore `search`, so results are filtered again here."""
    service, transport = _service(_json(200, snippet_payloads))
    snippets = service.search("SQL")
    assert [s.id for s in snippets] == [2]
    assert transport.sent[0].params == {"search": "SQL"}


def test_search_matches_description(snippet_payloads: list[dict[str, Any]]) -> None:
    service, _ = _service(_json(200, snippet_payloads))
    assert [s.id for s in service.search("release")] == [1]


def test_raw_returns_bytes_unchanged() -> None:
    body = b"\xff\xfe\x00echo hi\n"
    service, transport = _service(ApiResponse(200, content=body, content_type="text/plain"))
    assert service.raw(5) == body
    assert transport.sent[0].url == f"{BASE}/5/raw"


def test_details_returns_json() -> None:
    service, _ = _service(_json(200, {"id": 5, "title": "x", "files": [{"path": "a"}]}))
    assert service.details(5)["files"] == [{"path": "a"}]


def test_create_posts_draft() -> None:
    service, transport = _service(_json(201, {"id": 9, "title": "New", "web_url": "https://w/9"}))
    draft = SnippetDraft(title="New", file_name="a.txt", content="hello", visibility=Visibility.PUBLIC)
    snippet = service.create(draft)
    assert snippet.id == 9
    request = transport.sent[0]
    assert request.method == "POST"
    assert request.json == {"title": "New", "file_name": "a.txt", "content": "hello", "visibility": "public"}


def test_update_sends_only_given_fields() -> None:
    service, transport = _service(_json(200, {"id": 9, "title": "Renamed"}))
    service.update(9, SnippetChanges(title="Renamed"))
    assert transport.sent[0].method == "PUT"
    assert transport.sent[0].url == f"{BASE}/9"
    assert transport.sent[0].json == {"title": "Renamed"}


def test_update_without_changes_is_rejected() -> None:
    service, transport = _service(_json(200, {}))
    with pytest.raises(ValueError, match="no changes"):
        service.update(9, SnippetChanges())
    assert transport.sent == []


def test_delete_accepts_no_content() -> None:
    service, transport = _service(ApiResponse(204))
    service.delete(3)
    assert transport.sent[0].method == "DELETE"


def test_error_status_raises_api_error_with_message() -> None:
    service, _ = _service(_json(403, {"message": "403 Forbidden"}))
    with pytest.raises(ApiError) as excinfo:
        service.list()
    assert excinfo.value.status_code == 403
    assert "403 Forbidden" in str(excinfo.value)
    assert excinfo.value.url == BASE


def test_error_with_plain_text_body() -> None:
    service, _ = _service(ApiResponse(502, text="Bad gateway"))
    with pytest.raises(ApiError, match="Bad gateway"):
        service.raw(1)


def test_invalid_json_is_api_error() -> None:
    service, _ = _service(ApiResponse(200, text="<html>"))
    with pytest.raises(ApiError, match="invalid JSON"):
        service.details(1)


def test_list_expects_a_list() -> None:
    service, _ = _service(_json(200, {"id": 1}))
    with pytest.raises(ApiError, match="JSON list"):
        service.list()
