"""URL classification and video-ID extraction.

Each provider owns an ordered table of :class:`ProviderRule` entries.  A
rule applies when the URL contains its literal ``match`` substring; its
``id_pattern`` then captures the identifier.  Rules are applied in
declared order and a later capture overwrites an earlier one.

The tables are module-level tuples and never mutated, so any number of
resolutions may read them concurrently.
"""

from __future__ import annotations

import logging
import re

from thumby.core.models import Provider, ProviderRule
from thumby.core.protocols import HttpClient
from thumby.exceptions import ThumbyError

logger = logging.getLogger(__name__)


def _rule(match: str, pattern: str) -> ProviderRule:
    # ASCII: identifiers are plain [A-Za-z0-9_-], never unicode word chars.
    return ProviderRule(match=match, id_pattern=re.compile(pattern, re.ASCII))


YOUTUBE_RULES: tuple[ProviderRule, ...] = (
    _rule("https://www.youtube.com/watch?v=", r"v=([-\w]+)"),
    _rule("https://youtu.be/", r"youtu\.be/([-\w]+)"),
    _rule("youtube.com/shorts/", r"shorts/([-\w]+)"),
    _rule("youtube.com/live/", r"live/(\w+)"),
)

VIMEO_RULES: tuple[ProviderRule, ...] = (
    _rule("https://vimeo.com/", r"vimeo\.com/(\w+)"),
)

PROVIDER_RULES: tuple[tuple[Provider, tuple[ProviderRule, ...]], ...] = (
    (Provider.YOUTUBE, YOUTUBE_RULES),
    (Provider.VIMEO, VIMEO_RULES),
)

VIMEO_OEMBED_URL = "https://vimeo.com/api/oembed.json?url={url}"

_NUMERIC_ID = re.compile(r"^[0-9]+$")


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _matches_any(url: str, rules: tuple[ProviderRule, ...]) -> bool:
    return any(rule.match in url for rule in rules)


def classify(url: str) -> Provider:
    """Return the provider *url* belongs to, or :attr:`Provider.NONE`.

    Providers are tried in :data:`PROVIDER_RULES` order and the first one
    with a matching rule wins, so a URL is never classified twice.
    Matching is a literal, case-sensitive substring test.
    """
    for provider, rules in PROVIDER_RULES:
        if _matches_any(url, rules):
            return provider
    return Provider.NONE


# ---------------------------------------------------------------------------
# ID extraction
# ---------------------------------------------------------------------------

def match_rules(url: str, rules: tuple[ProviderRule, ...]) -> str:
    """Apply *rules* to *url* in order; the last successful capture wins.

    Returns ``""`` when no rule both matches and captures.
    """
    candidate = ""
    for rule in rules:
        if rule.match not in url:
            continue
        found = rule.id_pattern.search(url)
        if found is not None:
            candidate = found.group(1)
    return candidate


def is_numeric_id(candidate: str) -> bool:
    return _NUMERIC_ID.match(candidate) is not None


def fetch_vimeo_video_id(url: str, http: HttpClient) -> str:
    """Look up the numeric Vimeo ID for a URL that does not contain one.

    Vanity paths such as ``https://vimeo.com/channels/staffpicks`` carry
    no numeric ID; the oEmbed response's ``video_id`` field does.
    Returns ``""`` on any lookup failure; a :class:`ThumbyError` from the
    transport (e.g. a missing dependency) propagates.
    """
    try:
        result = http.get(VIMEO_OEMBED_URL.format(url=url))
    except ThumbyError:
        raise
    except Exception:  # noqa: BLE001
        logger.warning("Vimeo ID lookup failed for %s", url, exc_info=True)
        return ""

    if result.failed:
        logger.warning(
            "Vimeo ID lookup failed for %s: %s", url, result.transport_error,
        )
        return ""
    if not result.ok or not isinstance(result.body, dict):
        return ""

    video_id = result.body.get("video_id")
    if not video_id:
        return ""
    return str(video_id)


def extract_id(url: str, http: HttpClient | None = None) -> str:
    """Extract the canonical video identifier from *url*.

    YouTube rules run first, then Vimeo rules; a Vimeo capture overwrites
    a YouTube one.  A Vimeo capture that is not purely numeric is
    resolved through :func:`fetch_vimeo_video_id`, which needs *http*;
    without a client such URLs yield ``""``.

    Never raises for malformed input.
    """
    video_id = match_rules(url, YOUTUBE_RULES)

    vimeo_id = match_rules(url, VIMEO_RULES)
    if vimeo_id:
        video_id = vimeo_id
        if not is_numeric_id(vimeo_id):
            video_id = fetch_vimeo_video_id(url, http) if http is not None else ""

    return video_id
