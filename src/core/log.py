"""Logging for gitlab-snippets.

Log records go to stderr through a Rich handler so stdout stays clean for
command output (raw snippet content is often piped). The `trace` level
additionally turns on the `httpx`/`httpcore` loggers for transport tracing.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from core.domain.log_level import TRACE, LogLevel

ROOT_LOGGER = "snippets"
TRANSPORT_LOGGERS = ("httpx", "httpcore")

logging.addLevelName(TRACE, "TRACE")

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Logger under the `snippets` namespace, e.g. `snippets.http`."""

    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: LogLevel, *, colour: bool = True) -> logging.Logger:
    """Install (or replace) the stderr handler and apply `level`.

    Safe to call more than once per process; the previous handler is
    detached first so records are never duplicated.
    """

    global _handler

    handler = RichHandler(
        console=Console(stderr=True, no_color=not colour, highlight=False),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    targets = [logging.getLogger(ROOT_LOGGER)] + [logging.getLogger(name) for name in TRANSPORT_LOGGERS]
    for logger in targets:
        if _handler is not None:
            logger.removeHandler(_handler)

    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(level.to_logging())
    root.propagate = False

    for name in TRANSPORT_LOGGERS:
        transport_logger = logging.getLogger(name)
        if level.traces_transport:
            transport_logger.addHandler(handler)
            transport_logger.setLevel(logging.DEBUG)
            transport_logger.propagate = False
        else:
            transport_logger.setLevel(logging.WARNING)
            transport_logger.propagate = True

    _handler = handler
    return root
