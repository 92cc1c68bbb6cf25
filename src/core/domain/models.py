"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to any I/O library.
- Snippet payloads from the API are normalized in one place; unknown keys
  are ignored so newer GitLab versions do not break parsing.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.log_level import LogLevel


class Visibility(str, Enum):
    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"


class Configuration(BaseModel):
    """Resolved configuration for one invocation.

    Why frozen:
    - Built once at startup from defaults, `.env`, environment and flags,
      then threaded explicitly into the request builder. Nothing may
      change the API root or the project halfway through a command.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        min_length=1,
        description="GitLab host name, e.g. 'gitlab.com'.",
    )
    api_root: str = Field(
        ...,
        min_length=1,
        description="Base URL of the REST API, without trailing slash.",
    )
    project_id: str = Field(
        default="",
        description="Numeric project id or percent-encoded project path.",
    )
    token: str = Field(
        default="",
        description="Private token sent in the PRIVATE-TOKEN header (may be empty).",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Verbosity of stderr logging.",
    )
    interactive: bool = Field(
        default=True,
        description="Rich output and confirmation prompts; off for pipelines.",
    )
    colour: bool = Field(
        default=True,
        description="Whether terminal output may use colour.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for the single HTTP call (seconds).",
    )
    user_agent: str = Field(
        default="gitlab-snippets",
        min_length=1,
        description="User-Agent header for API calls.",
    )


class Snippet(BaseModel):
    """A snippet as returned by the project snippets endpoints."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., ge=1, description="Snippet id, unique within the instance.")
    title: str = Field(default="", description="Human readable title.")
    file_name: str | None = Field(default=None, description="Name of the (first) file.")
    description: str | None = Field(default=None, description="Optional long description.")
    visibility: str | None = Field(default=None, description="private, internal or public.")
    web_url: str | None = Field(default=None, description="Browser URL of the snippet.")
    raw_url: str | None = Field(default=None, description="URL of the raw content.")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, file name and description."""

        needle = term.casefold()
        haystack = (self.title, self.file_name or "", self.description or "")
        return any(needle in value.casefold() for value in haystack)


class SnippetDraft(BaseModel):
    """Body of a create request."""

    title: str = Field(..., min_length=1, max_length=255)
    file_name: str = Field(..., min_length=1)
    content: str = Field(...)
    description: str | None = None
    visibility: Visibility = Visibility.PRIVATE

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class SnippetChanges(BaseModel):
    """Body of an update request: only the supplied fields are sent."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    file_name: str | None = Field(default=None, min_length=1)
    content: str | None = None
    description: str | None = None
    visibility: Visibility | None = None

    def is_empty(self) -> bool:
        return not self.to_payload()

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class SnippetRequest:
    """One outbound API call, built per invocation and then discarded."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None


@dataclass(frozen=True)
class ApiResponse:
    """Status and body of a completed call, independent of the HTTP library."""

    status_code: int
    text: str = ""
    content_type: str = ""
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text) if self.text else None
