"""In-memory transports for tests.

:class:`FakeHttpClient` and :class:`RaisingHttpClient` satisfy the
:class:`~thumby.core.protocols.HttpClient` protocol without any network
access.
"""

from __future__ import annotations

from typing import Any

from thumby.core.models import HttpResult


class FakeHttpClient:
    """Routes exact URLs to canned results.

    *routes* maps a URL to the :class:`HttpResult` to return, or to an
    exception instance to raise.  Unknown URLs answer ``404``.  Every
    requested URL is recorded in :attr:`calls`.
    """

    def __init__(self, routes: dict[str, HttpResult | Exception] | None = None) -> None:
        self.routes: dict[str, HttpResult | Exception] = dict(routes or {})
        self.calls: list[str] = []

    def get(self, url: str) -> HttpResult:
        self.calls.append(url)
        outcome = self.routes.get(url, HttpResult(status=404, body=None))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RaisingHttpClient:
    """Transport whose every call raises."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc if exc is not None else ConnectionError("connection reset")
        self.calls: list[str] = []

    def get(self, url: str) -> HttpResult:
        self.calls.append(url)
        raise self.exc


def ok(body: dict[str, Any]) -> HttpResult:
    return HttpResult(status=200, body=body)
