"""requests-backed implementation of :class:`~thumby.core.protocols.HttpClient`.

This module is the **only** place in the codebase that imports
``requests``.  Transport exceptions are caught here and reported as
:meth:`HttpResult.transport_failure` — nothing raw escapes the
infrastructure boundary, and HTTP error statuses are returned as data.
"""

from __future__ import annotations

import logging
from typing import Any

from thumby.core.models import HttpResult
from thumby.exceptions import EnvironmentError
from thumby.version import __version__

logger = logging.getLogger(__name__)


def _load_requests() -> Any:
    """Return the ``requests`` module or raise ``EnvironmentError``."""
    try:
        import requests
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "requests is not installed. Install with: pip install requests",
        ) from exc
    return requests


class RequestsHttpClient:
    """Concrete :class:`HttpClient` backed by a ``requests.Session``.

    Usage::

        http = RequestsHttpClient()
        result = http.get("https://vimeo.com/api/oembed.json?url=...")

    Parameters
    ----------
    timeout:
        Seconds passed to ``requests``; ``None`` keeps the transport
        default (no timeout).
    session:
        Optional pre-configured session, mainly for tests.
    """

    USER_AGENT = f"thumby/{__version__}"

    def __init__(
        self,
        *,
        timeout: float | None = None,
        session: Any | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session

    def _get_session(self, requests: Any) -> Any:
        if self._session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.USER_AGENT
            self._session = session
        return self._session

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def get(self, url: str) -> HttpResult:
        """GET *url* once, without retries.

        Returns
        -------
        HttpResult
            ``status`` and the decoded JSON body (``None`` for an empty
            or non-JSON error body), or a transport failure.
        """
        requests = _load_requests()
        session = self._get_session(requests)

        try:
            response = session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("GET %s failed: %s", url, exc)
            return HttpResult.transport_failure(f"{type(exc).__name__}: {exc}")

        return HttpResult(status=response.status_code, body=self._decode(response))

    @staticmethod
    def _decode(response: Any) -> Any:
        """Return the JSON body, or ``None`` when it is not JSON."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug(
                "Non-JSON body from %s (status %s)", response.url, response.status_code,
            )
            return None
