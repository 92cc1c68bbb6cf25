"""Error taxonomy.

Every failure is terminal for the current invocation: the CLI reports the
message on stderr and exits with status 1. Nothing here is retried.
"""

from __future__ import annotations


class SnippetsError(Exception):
    pass


class ConfigurationError(SnippetsError):
    """Missing or invalid configuration (e.g. no project configured)."""


class TransportUnavailableError(SnippetsError):
    """The HTTP transport library is not installed."""


class TransportError(SnippetsError):
    """The request never produced an HTTP response (DNS, TLS, timeout...)."""


class ApiError(SnippetsError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, *, url: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")
