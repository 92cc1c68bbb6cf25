"""Log verbosity levels for gitlab-snippets.

This module centralizes the verbosity options accepted by `-v/--verbose`.
Keeping it in the domain layer lets the CLI, the settings and the logging
setup share a single source of truth without circular imports.
"""

from __future__ import annotations

import logging
from enum import Enum

TRACE = 5


class LogLevel(str, Enum):
    """Supported verbosity choices, from most to least chatty."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def default(cls) -> "LogLevel":
        """Return the verbosity used when no flag is given."""

        return cls.INFO

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Parse a user supplied level, case-insensitively (`warn` is accepted)."""

        normalized = value.strip().lower()
        if normalized == "warn":
            normalized = "warning"
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"invalid log level {value!r} (choose from {choices})") from None

    def to_logging(self) -> int:
        """Numeric level for the standard `logging` module."""

        if self is LogLevel.TRACE:
            return TRACE
        return getattr(logging, self.value.upper())

    @property
    def traces_transport(self) -> bool:
        return self is LogLevel.TRACE
