"""Shared fixtures: isolated environment and a fake GitLab API."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import httpx
import pytest

import adapters.http_client as http_client
import cli.main as cli_main


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Hide real GITLAB_* variables and `.env` files from every test."""

    for name in list(os.environ):
        if name.upper().startswith("GITLAB_"):
            monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class FakeGitLab:
    """In-memory stand-in for the snippets endpoints, served via httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], httpx.Response | Exception] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        content: bytes | None = None,
    ) -> None:
        if content is not None:
            response = httpx.Response(status, content=content, headers={"content-type": "text/plain"})
        elif text is not None:
            response = httpx.Response(status, text=text, headers={"content-type": "text/plain"})
        elif json_body is not None:
            response = httpx.Response(status, json=json_body)
        else:
            response = httpx.Response(status)
        self._routes[(method.upper(), path)] = response

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self._routes[(method.upper(), path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, raw_path(request)))
        if route is None:
            return httpx.Response(404, json={"message": "404 Not Found"})
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    @property
    def last_path(self) -> str:
        return raw_path(self.last)

    def last_json(self) -> Any:
        return json.loads(self.last.content.decode("utf-8"))


def raw_path(request: httpx.Request) -> str:
    """Path exactly as sent on the wire (percent-escapes kept, no query)."""

    return request.url.raw_path.decode("ascii").split("?", 1)[0]


@pytest.fixture
def gitlab(monkeypatch: pytest.MonkeyPatch) -> FakeGitLab:
    """Route every CLI request to a `FakeGitLab` instead of the network."""

    fake = FakeGitLab()

    def _build(config):  # type: ignore[no-untyped-def]
        return http_client.build_client(config, transport=httpx.MockTransport(fake.handler))

    monkeypatch.setattr(cli_main, "build_client", _build)
    return fake


_SNIPPETS = [
    {
        "id": 1,
        "title": "Deploy script",
        "file_name": "deploy.sh",
        "description": "Pushes the release",
        "visibility": "private",
        "web_url": "https://gitlab.example/group/proj/-/snippets/1",
        "updated_at": "2024-03-01T10:00:00Z",
    },
    {
        "id": 2,
        "title": "SQL cleanup",
        "file_name": "cleanup.sql",
        "description": None,
        "visibility": "internal",
        "web_url": "https://gitlab.example/group/proj/-/snippets/2",
        "updated_at": "2024-03-02T11:30:00Z",
    },
]


@pytest.fixture
def snippet_payloads() -> list[dict[str, Any]]:
    """Two snippets as the list endpoint returns them."""

    return [dict(item) for item in _SNIPPETS]
