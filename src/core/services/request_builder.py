"""Request construction for the snippets resource.

Pure functions: given the resolved `Configuration` and a command, produce
the `SnippetRequest` to send. No I/O happens here, which keeps the
command table testable without a network or an HTTP library.
"""

from __future__ import annotations

from typing import Any

from core.domain.commands import Command, spec_for
from core.domain.models import Configuration, SnippetRequest
from core.errors import ConfigurationError

TOKEN_HEADER = "PRIVATE-TOKEN"


def join_url(base: str, *segments: str) -> str:
    """Concatenate URL path segments, dropping redundant slashes."""

    url = base.rstrip("/")
    for segment in segments:
        cleaned = str(segment).strip("/")
        if cleaned:
            url = f"{url}/{cleaned}"
    return url


def snippets_url(config: Configuration) -> str:
    if not config.project_id:
        raise ConfigurationError("no project configured (use --project or set GITLAB_PROJECT)")
    return join_url(config.api_root, "projects", config.project_id, "snippets")


def auth_headers(config: Configuration) -> dict[str, str]:
    headers = {"User-Agent": config.user_agent}
    if config.token:
        headers[TOKEN_HEADER] = config.token
    return headers


def build_request(
    config: Configuration,
    command: str | Command,
    *,
    snippet_id: int | None = None,
    body: dict[str, Any] | None = None,
    params: dict[str, str] | None = None,
) -> SnippetRequest:
    """Build the single request for `command`.

    Raises:
        ConfigurationError: when no project is configured.
        ValueError: when the command needs an id or a body that was not given.
    """

    spec = spec_for(command)
    if spec.needs_body and not body:
        raise ValueError(f"command {spec.command.value!r} requires a request body")

    url = join_url(snippets_url(config), spec.path_for(snippet_id))
    return SnippetRequest(
        method=spec.method,
        url=url,
        headers=auth_headers(config),
        params=dict(params or {}),
        json=dict(body) if spec.needs_body and body else None,
    )
