"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from thumby.core.models import HttpResult


class HttpClient(Protocol):
    """Contract for the outbound HTTP transport.

    Any object that implements :meth:`get` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def get(self, url: str) -> HttpResult:
        """Issue a single GET for *url* and return its outcome.

        Implementations must NOT raise for non-2xx statuses; the status
        is reported on the returned :class:`HttpResult`.  Transport
        failures (DNS, timeout, connection reset, undecodable body) are
        reported via :meth:`HttpResult.transport_failure`.

        *url* is requested exactly as given — no re-encoding of the
        query string.
        """
        ...  # pragma: no cover
