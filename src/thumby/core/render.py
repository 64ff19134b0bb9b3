"""Presentation of resolved metadata.

Pure string builders: a :class:`~thumby.core.models.VideoInfo` is the
only input, HTML and Markdown snippets are the only output.
"""

from __future__ import annotations

from html import escape

from thumby.core.models import VideoInfo

NOT_FOUND_MESSAGE = "Cannot find video"
UNAVAILABLE_MESSAGE = "Video temporarily unavailable"
MANY_URLS_MESSAGE = "Cannot accept multiple URLs yet"


def warning_callout(message: str, detail: str | None = None) -> str:
    """Return an Obsidian-style ``[!WARNING]`` callout."""
    callout = f">[!WARNING] {message}"
    if detail is not None:
        callout += f"\n>{detail}"
    return callout


def title_link(info: VideoInfo) -> str:
    """Return a Markdown link ``[title](url)``."""
    return f"[{info.title}]({info.url})"


def render_thumbnail_html(info: VideoInfo) -> str:
    """Render the clickable thumbnail card for a resolved video.

    Layout::

        <a class="thumbnail" href=url>
          <img class="thumbnail-img" src=thumbnail>
          <div class="thumbnail-text">
            <p class="thumbnail-title">title</p>
            <a class="thumbnail-author" href=author_url>author</a>
          </div>
        </a>
    """
    url = escape(info.url, quote=True)
    thumbnail = escape(info.thumbnail, quote=True)
    title = escape(info.title, quote=True)
    author = escape(info.author, quote=True)
    author_url = escape(info.author_url, quote=True)
    return (
        f'<a class="thumbnail" href="{url}">'
        f'<img class="thumbnail-img" src="{thumbnail}">'
        f'<div class="thumbnail-text">'
        f'<p class="thumbnail-title" title="{title}">{title}</p>'
        f'<a class="thumbnail-author" href="{author_url}" title="{author}">{author}</a>'
        f"</div>"
        f"</a>"
    )
