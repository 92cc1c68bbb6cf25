"""Option/environment resolution.

Turns the raw `SnippetSettings` plus the presentation flags from the CLI
into one frozen `Configuration`. The rules live here rather than in the
CLI so they can be reused and tested without invoking Typer.
"""

from __future__ import annotations

from urllib.parse import quote

from core.config import SnippetSettings
from core.domain.log_level import LogLevel
from core.domain.models import Configuration


def derive_api_root(host: str) -> str:
    """Default REST root for a GitLab host."""

    return f"https://{host.strip().strip('/')}/api/v4"


def encode_project_id(project: str) -> str:
    """Normalize a project reference for use in a URL path.

    Purely numeric ids pass through. Anything else is percent-encoded over
    its UTF-8 bytes; only `_.~a-zA-Z0-9-` stay unescaped, so
    `group/proj` becomes `group%2Fproj`.
    """

    value = project.strip()
    if value.isascii() and value.isdigit():
        return value
    return quote(value, safe="")


def resolve_configuration(
    settings: SnippetSettings,
    *,
    log_level: LogLevel = LogLevel.INFO,
    interactive: bool = True,
    colour: bool = True,
) -> Configuration:
    api_root = settings.root.strip() or derive_api_root(settings.host)
    return Configuration(
        host=settings.host.strip(),
        api_root=api_root.rstrip("/"),
        project_id=encode_project_id(settings.project),
        token=settings.token.strip(),
        log_level=log_level,
        interactive=interactive,
        colour=colour and interactive,
        http_timeout_seconds=settings.http_timeout_seconds,
        user_agent=settings.user_agent,
    )
