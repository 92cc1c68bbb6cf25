"""Contract for sending a snippet request.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- Lets the httpx adapter and test doubles be swapped freely without
  coupling the core to a concrete HTTP library.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ApiResponse, SnippetRequest


@runtime_checkable
class SnippetTransport(Protocol):
    """Minimal contract for the transport.

    Design rules:
    - `send` performs exactly one HTTP exchange, with no retries.
    - Transport failures raise `TransportError`; HTTP error statuses are
      returned as-is and judged by the caller.
    """

    def send(self, request: SnippetRequest) -> ApiResponse:
        ...
