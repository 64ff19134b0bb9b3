"""Core metadata resolver — turns a video URL into display metadata.

The resolver depends on an :class:`~thumby.core.protocols.HttpClient`
injected at construction time (dependency inversion), keeping the core
free of any transport imports.

Resolution chain (strictly sequential, single attempt per request):

1. Classify the URL; unsupported URLs return immediately.
2. Query the provider's public oEmbed endpoint.
3. YouTube only, when the oEmbed call is refused and an API key is
   configured: video snippet lookup, then channel snippet lookup.
4. Resolve the thumbnail.

Guarantees
----------
* Lookup failures never raise; they are reported on the returned
  :class:`~thumby.core.models.VideoInfo`.  Only a
  :class:`~thumby.exceptions.ThumbyError` from the transport (a missing
  dependency) propagates.
* Transport failures set ``network_error`` and are logged where caught.
* Holds no per-call state, so one instance can serve concurrent callers.
"""

from __future__ import annotations

import logging
from typing import Any

from thumby.core.classifier import VIMEO_OEMBED_URL, classify, extract_id
from thumby.core.models import HttpResult, Provider, ResolverConfig, VideoInfo
from thumby.core.protocols import HttpClient
from thumby.exceptions import ThumbyError

logger = logging.getLogger(__name__)

YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed?format=json&url={url}"
YOUTUBE_VIDEOS_URL = (
    "https://youtube.googleapis.com/youtube/v3/videos"
    "?part=snippet&id={video_id}&key={key}"
)
YOUTUBE_CHANNELS_URL = (
    "https://youtube.googleapis.com/youtube/v3/channels"
    "?part=snippet&id={channel_id}&key={key}"
)
YOUTUBE_THUMBNAIL_URL = "https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"
YOUTUBE_CHANNEL_URL = "https://www.youtube.com/{custom_url}"

AUTHOR_URL_PLACEHOLDER = "javascript:void(0)"
"""No-op link used when the channel page cannot be determined."""

_OEMBED_URLS: dict[Provider, str] = {
    Provider.YOUTUBE: YOUTUBE_OEMBED_URL,
    Provider.VIMEO: VIMEO_OEMBED_URL,
}


class _TransportFailure(Exception):
    """Internal signal: a request produced no response."""


class MetadataResolver:
    """Stateless service that resolves video URLs into :class:`VideoInfo`.

    Parameters
    ----------
    http:
        Any object satisfying the :class:`HttpClient` protocol.
    """

    def __init__(self, http: HttpClient) -> None:
        self._http: HttpClient = http

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, url: str, config: ResolverConfig | None = None) -> VideoInfo:
        """Resolve *url* into display metadata.

        *config* supplies the optional YouTube Data API key for the
        fallback path; it is read, never stored.
        """
        config = config if config is not None else ResolverConfig()
        provider = classify(url)
        if provider is Provider.NONE:
            logger.debug("No provider matches %s", url)
            return VideoInfo.not_found(url)

        fields: dict[str, Any] = {}
        try:
            self._resolve_into(fields, url, provider, config)
        except _TransportFailure as exc:
            logger.warning("Network error while resolving %s: %s", url, exc)
            return self._network_failure(url, fields)
        except ThumbyError:
            raise
        except Exception:  # noqa: BLE001
            logger.warning("Network error while resolving %s", url, exc_info=True)
            return self._network_failure(url, fields)

        info = VideoInfo(url=url, **fields)
        if info.found and not (info.title and info.author and info.thumbnail):
            logger.debug("Incomplete metadata for %s: %r", url, info)
            return VideoInfo.not_found(url)
        return info

    # ------------------------------------------------------------------
    # Resolution steps
    # ------------------------------------------------------------------

    def _resolve_into(
        self,
        fields: dict[str, Any],
        url: str,
        provider: Provider,
        config: ResolverConfig,
    ) -> None:
        """Run the request chain, recording results in *fields* as they arrive."""
        oembed = self._get(_OEMBED_URLS[provider].format(url=url))

        if oembed.ok and isinstance(oembed.body, dict):
            fields["title"] = _text(oembed.body.get("title"))
            fields["author"] = _text(oembed.body.get("author_name"))
            fields["author_url"] = _text(oembed.body.get("author_url"))
            fields["found"] = True
        elif provider is Provider.YOUTUBE and config.has_api_key:
            logger.debug(
                "oEmbed returned %s for %s; trying the Data API", oembed.status, url,
            )
            self._resolve_with_api(fields, url, str(config.youtube_api_key).strip())

        if not fields.get("found"):
            return

        if provider is Provider.YOUTUBE:
            # The oEmbed thumbnail is usually letterboxed.
            video_id = extract_id(url, self._http)
            fields["thumbnail"] = (
                YOUTUBE_THUMBNAIL_URL.format(video_id=video_id) if video_id else ""
            )
        else:
            fields["thumbnail"] = _text(oembed.body.get("thumbnail_url"))

    def _resolve_with_api(self, fields: dict[str, Any], url: str, key: str) -> None:
        """Fill *fields* from the YouTube Data API video and channel snippets."""
        video_id = extract_id(url, self._http)
        videos = self._get(YOUTUBE_VIDEOS_URL.format(video_id=video_id, key=key))
        if not videos.ok:
            logger.debug("Data API video lookup returned %s", videos.status)
            return

        snippet = _first_snippet(videos.body)
        if snippet is None:
            logger.debug("Data API has no video %r", video_id)
            return

        fields["title"] = _text(snippet.get("title"))
        fields["author"] = _text(snippet.get("channelTitle"))
        fields["author_url"] = AUTHOR_URL_PLACEHOLDER
        fields["found"] = True

        channel_id = _text(snippet.get("channelId"))
        channels = self._get(
            YOUTUBE_CHANNELS_URL.format(channel_id=channel_id, key=key),
        )
        if not channels.ok:
            logger.debug("Data API channel lookup returned %s", channels.status)
            return

        channel = _first_snippet(channels.body)
        custom_url = _text(channel.get("customUrl")) if channel is not None else ""
        if custom_url:
            fields["author_url"] = YOUTUBE_CHANNEL_URL.format(custom_url=custom_url)

    # ------------------------------------------------------------------
    # Transport delegation
    # ------------------------------------------------------------------

    def _get(self, url: str) -> HttpResult:
        result = self._http.get(url)
        if result.failed:
            raise _TransportFailure(result.transport_error)
        return result

    @staticmethod
    def _network_failure(url: str, fields: dict[str, Any]) -> VideoInfo:
        partial = {k: v for k, v in fields.items() if k != "found"}
        return VideoInfo(url=url, found=False, network_error=True, **partial)


# ---------------------------------------------------------------------------
# Response parsing helpers (pure)
# ---------------------------------------------------------------------------

def _text(value: object) -> str:
    return str(value) if value is not None else ""


def _first_snippet(body: object) -> dict[str, Any] | None:
    """Return ``items[0].snippet`` from a Data API response, if present."""
    if not isinstance(body, dict):
        return None
    items = body.get("items")
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if not isinstance(first, dict):
        return None
    snippet = first.get("snippet")
    return snippet if isinstance(snippet, dict) else None


def resolve(
    url: str,
    config: ResolverConfig | None,
    http: HttpClient,
) -> VideoInfo:
    """Convenience wrapper: ``MetadataResolver(http).resolve(url, config)``."""
    return MetadataResolver(http).resolve(url, config)
