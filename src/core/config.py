"""Core settings.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets the resolver and the HTTP adapter read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError

APP_NAME = "gitlab-snippets"
APP_VERSION = "0.1.0"
DEFAULT_HOST = "gitlab.com"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_env_files() -> tuple[str, ...]:
    # Project first (dev), then the user's global file.
    return (".env", str(get_user_env_file()))


class SnippetSettings(BaseSettings):
    """Raw settings before resolution.

    Why pydantic-settings:
    - Typing and validation at the edge (env vars and `.env` files).
    - Init kwargs win over the environment, which is exactly the
      "flag > env > default" order the CLI needs.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITLAB_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env",),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default=DEFAULT_HOST,
        min_length=1,
        description="GitLab host used to derive the API root.",
    )
    root: str = Field(
        default="",
        description="Explicit API root URL; derived from host when empty.",
    )
    token: str = Field(
        default="",
        description="Private token for the PRIVATE-TOKEN header.",
    )
    project: str = Field(
        default="",
        description="Numeric project id or 'group/project' path.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"{APP_NAME}/{APP_VERSION}",
        min_length=1,
        description="User-Agent for API calls.",
    )


def load_settings(**overrides: str | None) -> SnippetSettings:
    """Build settings with explicit values (CLI flags) taking precedence.

    `None` means "not given on the command line" and falls back to the
    environment, the `.env` files and finally the defaults.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return SnippetSettings(_env_file=get_env_files(), **values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"invalid configuration ({problems})") from exc
