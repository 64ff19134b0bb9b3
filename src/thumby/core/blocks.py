"""``vidy`` block handling.

A ``vidy`` block is a fenced Markdown code block whose first line is a
video URL::

    ```vidy
    https://youtu.be/abc123
    ```

Lines after the URL are stale stored metadata; once the video resolves,
the block is rewritten back to its minimal single-URL form.  Everything
here is pure except :func:`process_block` and :func:`rewrite_document`,
which resolve through the injected resolver.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass

from thumby.core.models import ResolverConfig, VideoInfo
from thumby.core.render import (
    MANY_URLS_MESSAGE,
    NOT_FOUND_MESSAGE,
    UNAVAILABLE_MESSAGE,
    warning_callout,
)
from thumby.core.resolver import MetadataResolver

BLOCK_TAG = "vidy"

_FENCE = "```"
_BARE_URL = re.compile(r"^((https*://)|(www\.))+\S*$")
_FENCE_LINE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class BlockKind(enum.Enum):
    RENDER = "render"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    MANY_URLS = "many_urls"


@dataclass(frozen=True, slots=True)
class VidyBlock:
    """A ``vidy`` block located in a document."""

    source: str
    """Block body, without the fence lines."""

    line_start: int
    """0-based index of the opening fence line."""

    line_end: int
    """0-based index of the closing fence line (inclusive)."""


@dataclass(frozen=True, slots=True)
class BlockOutcome:
    """What the host should display (and possibly rewrite) for one block."""

    kind: BlockKind
    info: VideoInfo | None = None
    warning: str | None = None
    """Markdown callout to display instead of the thumbnail."""

    rewrite: str | None = None
    """Replacement block text when stored metadata must be stripped."""


@dataclass(frozen=True, slots=True)
class DocumentRewrite:
    text: str
    rewritten: int
    """Number of blocks replaced by their minimal form."""


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def split_source(source: str) -> list[str]:
    """Trim *source* and split it into lines."""
    return source.strip().split("\n")


def has_many_urls(lines: Sequence[str]) -> bool:
    """Return ``True`` when there are 2+ lines and every one is a bare URL."""
    return len(lines) > 1 and all(_BARE_URL.match(line.strip()) for line in lines)


def minimal_block(url: str) -> str:
    """Return the single-URL form of a ``vidy`` block."""
    return f"{_FENCE}{BLOCK_TAG}\n{url}\n{_FENCE}"


def wrap_url(url: str) -> str:
    """Wrap a raw URL into a new ``vidy`` block."""
    return minimal_block(url)


def _opening_fence(line: str) -> tuple[str, str] | None:
    """Return ``(fence, info)`` when *line* opens a fenced code block."""
    found = _FENCE_LINE.match(line)
    if found is None:
        return None
    fence, info = found.group("fence"), found.group("info").strip()
    # A backtick fence's info string may not itself contain backticks.
    if fence[0] == "`" and "`" in info:
        return None
    return fence, info


def _closes(line: str, fence: str) -> bool:
    """Return ``True`` when *line* closes a block opened with *fence*."""
    found = _FENCE_LINE.match(line)
    if found is None or found.group("info").strip():
        return False
    closing = found.group("fence")
    return closing[0] == fence[0] and len(closing) >= len(fence)


def find_blocks(text: str) -> list[VidyBlock]:
    """Locate every terminated ``vidy`` block in a Markdown document.

    Fences of any kind are tracked, so a ``vidy`` fence quoted inside
    another code block is not a block.  A block closes only on a bare
    fence of the same character that is at least as long as its opener;
    unterminated blocks are ignored.
    """
    lines = text.split("\n")
    blocks: list[VidyBlock] = []
    open_fence: str | None = None
    is_vidy = False
    start = 0
    for index, line in enumerate(lines):
        if open_fence is None:
            opening = _opening_fence(line)
            if opening is None:
                continue
            open_fence, info = opening
            is_vidy = info.split()[:1] == [BLOCK_TAG]
            start = index
        elif _closes(line, open_fence):
            if is_vidy:
                blocks.append(
                    VidyBlock(
                        source="\n".join(lines[start + 1:index]),
                        line_start=start,
                        line_end=index,
                    )
                )
            open_fence = None
    return blocks


# ---------------------------------------------------------------------------
# Resolution-backed processing
# ---------------------------------------------------------------------------

def process_block(
    source: str,
    resolver: MetadataResolver,
    config: ResolverConfig | None = None,
) -> BlockOutcome:
    """Decide how a ``vidy`` block is displayed.

    Multiple URLs are rejected before any request is made.  A resolved
    block that still carries stored metadata lines gets a ``rewrite``.
    """
    lines = split_source(source)
    if has_many_urls(lines):
        return BlockOutcome(
            kind=BlockKind.MANY_URLS,
            warning=warning_callout(MANY_URLS_MESSAGE),
        )

    info = resolver.resolve(lines[0], config)
    if info.network_error:
        return BlockOutcome(
            kind=BlockKind.UNAVAILABLE,
            info=info,
            warning=warning_callout(UNAVAILABLE_MESSAGE, info.url),
        )
    if not info.found:
        return BlockOutcome(
            kind=BlockKind.NOT_FOUND,
            info=info,
            warning=warning_callout(NOT_FOUND_MESSAGE, info.url),
        )

    rewrite = minimal_block(info.url) if len(lines) > 1 else None
    return BlockOutcome(kind=BlockKind.RENDER, info=info, rewrite=rewrite)


def rewrite_document(
    text: str,
    resolver: MetadataResolver,
    config: ResolverConfig | None = None,
) -> DocumentRewrite:
    """Rewrite every resolvable ``vidy`` block carrying stored metadata.

    Single-line blocks are left untouched without being resolved.  The
    block's own fence lines are kept; only its body is reduced to the URL.
    """
    lines = text.split("\n")
    rewritten = 0
    # Bottom-up so earlier line indices stay valid.
    for block in reversed(find_blocks(text)):
        if len(split_source(block.source)) < 2:
            continue
        outcome = process_block(block.source, resolver, config)
        if outcome.rewrite is None or outcome.info is None:
            continue
        lines[block.line_start + 1:block.line_end] = [outcome.info.url]
        rewritten += 1
    return DocumentRewrite(text="\n".join(lines), rewritten=rewritten)
