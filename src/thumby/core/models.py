"""Domain models for thumby.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are safe to share between concurrent resolutions.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

class Provider(enum.Enum):
    """Video hosting service a URL belongs to."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ProviderRule:
    """One URL shape recognised for a provider."""

    match: str
    """Literal substring the URL must contain for this rule to apply."""

    id_pattern: re.Pattern[str]
    """Regex whose first group captures the video identifier."""


# ---------------------------------------------------------------------------
# Resolution result
# ---------------------------------------------------------------------------

class ResolutionStatus(enum.Enum):
    """User-visible outcome of a resolution."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True, slots=True)
class VideoInfo:
    """Display metadata for a single video URL.

    ``found=False`` with empty strings is the explicit "not resolvable"
    state.  ``network_error=True`` marks a transport failure and always
    comes with ``found=False``.
    """

    url: str
    """The input URL, unchanged."""

    thumbnail: str = ""
    title: str = ""
    author: str = ""
    author_url: str = ""
    found: bool = False
    network_error: bool = False

    @classmethod
    def not_found(cls, url: str) -> VideoInfo:
        return cls(url=url)

    @property
    def status(self) -> ResolutionStatus:
        if self.network_error:
            return ResolutionStatus.NETWORK_ERROR
        if self.found:
            return ResolutionStatus.FOUND
        return ResolutionStatus.NOT_FOUND


# ---------------------------------------------------------------------------
# HTTP result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HttpResult:
    """Outcome of one HTTP GET.

    Either a response was received (``status`` and decoded JSON ``body``)
    or the transport failed before one arrived (``transport_error`` set,
    ``status`` is ``0``).  HTTP error statuses are data, not failures.
    """

    status: int
    body: Any = None
    transport_error: str | None = None

    @classmethod
    def transport_failure(cls, message: str) -> HttpResult:
        return cls(status=0, body=None, transport_error=message)

    @property
    def failed(self) -> bool:
        """``True`` when no response was received at all."""
        return self.transport_error is not None

    @property
    def ok(self) -> bool:
        """``True`` for a received ``200`` response."""
        return not self.failed and self.status == 200


# ---------------------------------------------------------------------------
# Resolver configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Per-call configuration for :class:`~thumby.core.resolver.MetadataResolver`."""

    youtube_api_key: str | None = None
    """YouTube Data API key used when the public oEmbed endpoint fails."""

    @property
    def has_api_key(self) -> bool:
        return bool(self.youtube_api_key and self.youtube_api_key.strip())
