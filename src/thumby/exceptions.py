"""Custom exception hierarchy for thumby.

All exceptions that cross layer boundaries must inherit from
:class:`ThumbyError`.  Raw third-party exceptions (e.g. from requests or
PyYAML) must NEVER propagate beyond the infrastructure layer — they are
either converted into result data or re-raised as a typed subclass
defined here.

Video resolution does not raise for lookup failures: transport failures
become :attr:`~thumby.core.models.VideoInfo.network_error` on the result.
Only :class:`ThumbyError` subclasses (e.g. a missing ``requests``) escape.

Hierarchy
---------
ThumbyError
├── InvalidURLError
├── VideoNotFoundError
├── ConfigurationError
├── DocumentError
├── NetworkError
└── EnvironmentError
"""

from __future__ import annotations


class ThumbyError(Exception):
    """Base exception for all thumby errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- URL validation --------------------------------------------------------

class InvalidURLError(ThumbyError):
    """Raised when a URL does not belong to a supported video provider."""


# --- Resolution ------------------------------------------------------------

class VideoNotFoundError(ThumbyError):
    """Raised by commands when a supported URL resolves to no video."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(ThumbyError):
    """Raised when an explicitly requested configuration file is unusable."""


# --- Documents -------------------------------------------------------------

class DocumentError(ThumbyError):
    """Raised when a Markdown document cannot be read or written."""


# --- Network ---------------------------------------------------------------

class NetworkError(ThumbyError):
    """Raised by commands that cannot continue after a transport failure."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ThumbyError):
    """Raised when a required runtime dependency is not available."""


def append_api_key_suggestion(hint: str) -> str:
    """Append YouTube Data API key guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "A YouTube Data API key enables a fallback lookup:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    export THUMBY_YOUTUBE_API_KEY=<key>",
        )
    )
