"""Tests for ``vidy`` block handling (core/blocks.py) and rendering (core/render.py)."""

from __future__ import annotations

import pytest
from fakes import FakeHttpClient, RaisingHttpClient, ok

from thumby.core.blocks import (
    BlockKind,
    find_blocks,
    has_many_urls,
    minimal_block,
    process_block,
    rewrite_document,
    split_source,
    wrap_url,
)
from thumby.core.models import VideoInfo
from thumby.core.render import (
    render_thumbnail_html,
    title_link,
    warning_callout,
)
from thumby.core.resolver import MetadataResolver

YT_URL = "https://youtu.be/abc123"
YT_OEMBED = f"https://www.youtube.com/oembed?format=json&url={YT_URL}"


def _resolver(found: bool = True) -> tuple[MetadataResolver, FakeHttpClient]:
    routes = {YT_OEMBED: ok({"title": "T", "author_name": "A", "author_url": "U"})}
    http = FakeHttpClient(routes if found else {})
    return MetadataResolver(http), http


def _info(**overrides: object) -> VideoInfo:
    defaults: dict[str, object] = {
        "url": YT_URL,
        "thumbnail": "https://i.ytimg.com/vi/abc123/mqdefault.jpg",
        "title": "T",
        "author": "A",
        "author_url": "U",
        "found": True,
    }
    defaults.update(overrides)
    return VideoInfo(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# has_many_urls
# ---------------------------------------------------------------------------

class TestHasManyUrls:
    def test_two_urls(self) -> None:
        assert has_many_urls(["https://youtu.be/a", "https://vimeo.com/1"]) is True

    def test_www_and_http_shapes(self) -> None:
        assert has_many_urls(["www.youtube.com/x", "  http://vimeo.com/1  "]) is True

    @pytest.mark.parametrize(
        "lines",
        [
            ["https://youtu.be/a"],
            ["not a url"],
            [""],
        ],
    )
    def test_single_line_is_never_many(self, lines: list[str]) -> None:
        assert has_many_urls(lines) is False

    def test_stored_metadata_lines_are_not_urls(self) -> None:
        assert has_many_urls([YT_URL, "Title: Something"]) is False

    def test_url_with_space_is_not_bare(self) -> None:
        assert has_many_urls([YT_URL, "https://youtu.be/a b"]) is False


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

class TestPureHelpers:
    def test_minimal_block(self) -> None:
        assert minimal_block(YT_URL) == "```vidy\nhttps://youtu.be/abc123\n```"

    def test_wrap_url_matches_minimal_block(self) -> None:
        assert wrap_url(YT_URL) == minimal_block(YT_URL)

    def test_split_source_trims(self) -> None:
        assert split_source("\n  https://a\nb  \n") == ["https://a", "b"]

    def test_find_blocks(self) -> None:
        text = "\n".join([
            "# Notes",
            "```vidy",
            YT_URL,
            "```",
            "```python",
            "print('x')",
            "```",
            "```vidy",
            "https://vimeo.com/1",
            "stored",
            "```",
        ])
        blocks = find_blocks(text)
        assert [(b.line_start, b.line_end) for b in blocks] == [(1, 3), (7, 10)]
        assert blocks[0].source == YT_URL
        assert blocks[1].source == "https://vimeo.com/1\nstored"

    def test_unterminated_block_ignored(self) -> None:
        assert find_blocks(f"```vidy\n{YT_URL}\n") == []

    @pytest.mark.parametrize(
        "text",
        [
            f"~~~markdown\n```vidy\n{YT_URL}\nTitle\n```\n~~~\n",
            f"````\n```vidy\n{YT_URL}\nTitle\n```\n````\n",
        ],
    )
    def test_vidy_fence_quoted_in_other_block_ignored(self, text: str) -> None:
        assert find_blocks(text) == []

    @pytest.mark.parametrize(
        ("opener", "closer"),
        [("~~~vidy", "~~~"), ("````vidy", "````"), ("```vidy", "`````")],
    )
    def test_alternative_fences(self, opener: str, closer: str) -> None:
        blocks = find_blocks(f"{opener}\n{YT_URL}\nTitle\n{closer}\n")
        assert [(b.line_start, b.line_end) for b in blocks] == [(0, 3)]
        assert blocks[0].source == f"{YT_URL}\nTitle"

    def test_fence_with_info_string_does_not_close(self) -> None:
        blocks = find_blocks(f"```vidy\n{YT_URL}\n```python\n```\n")
        assert [(b.line_start, b.line_end) for b in blocks] == [(0, 3)]
        assert blocks[0].source == f"{YT_URL}\n```python"

    def test_shorter_or_other_fence_does_not_close(self) -> None:
        blocks = find_blocks(f"````vidy\n{YT_URL}\n```\n~~~~\n````\n")
        assert [(b.line_start, b.line_end) for b in blocks] == [(0, 4)]

    def test_info_string_with_extra_words(self) -> None:
        assert len(find_blocks(f"```vidy title\n{YT_URL}\n```")) == 1

    def test_other_tag_prefix_is_not_vidy(self) -> None:
        assert find_blocks(f"```vidyx\n{YT_URL}\n```") == []


# ---------------------------------------------------------------------------
# process_block
# ---------------------------------------------------------------------------

class TestProcessBlock:
    def test_render_single_line(self) -> None:
        resolver, _ = _resolver()
        outcome = process_block(YT_URL, resolver)
        assert outcome.kind is BlockKind.RENDER
        assert outcome.info is not None and outcome.info.title == "T"
        assert outcome.rewrite is None
        assert outcome.warning is None

    def test_stored_info_triggers_rewrite(self) -> None:
        resolver, _ = _resolver()
        outcome = process_block(f"{YT_URL}\nT\nA", resolver)
        assert outcome.kind is BlockKind.RENDER
        assert outcome.rewrite == minimal_block(YT_URL)

    def test_not_found(self) -> None:
        resolver, _ = _resolver(found=False)
        outcome = process_block(YT_URL, resolver)
        assert outcome.kind is BlockKind.NOT_FOUND
        assert outcome.warning == f">[!WARNING] Cannot find video\n>{YT_URL}"

    def test_network_error_is_distinct(self) -> None:
        outcome = process_block(YT_URL, MetadataResolver(RaisingHttpClient()))
        assert outcome.kind is BlockKind.UNAVAILABLE
        assert outcome.warning is not None
        assert "temporarily unavailable" in outcome.warning

    def test_many_urls_short_circuits(self) -> None:
        resolver, http = _resolver()
        outcome = process_block(f"{YT_URL}\nhttps://vimeo.com/1", resolver)
        assert outcome.kind is BlockKind.MANY_URLS
        assert outcome.warning == ">[!WARNING] Cannot accept multiple URLs yet"
        assert http.calls == []

    def test_round_trip_reproduces_minimal_block(self) -> None:
        resolver, _ = _resolver()
        original = minimal_block(YT_URL)
        outcome = process_block(f"{YT_URL}\nstale title", resolver)
        assert outcome.info is not None
        assert minimal_block(outcome.info.url) == original


# ---------------------------------------------------------------------------
# rewrite_document
# ---------------------------------------------------------------------------

class TestRewriteDocument:
    def test_strips_stored_metadata(self) -> None:
        resolver, _ = _resolver()
        text = f"intro\n```vidy\n{YT_URL}\nT\nA\n```\noutro\n"
        result = rewrite_document(text, resolver)
        assert result.rewritten == 1
        assert result.text == f"intro\n```vidy\n{YT_URL}\n```\noutro\n"

    def test_single_line_blocks_not_resolved(self) -> None:
        resolver, http = _resolver()
        text = f"```vidy\n{YT_URL}\n```"
        result = rewrite_document(text, resolver)
        assert result.rewritten == 0
        assert result.text == text
        assert http.calls == []

    def test_unresolvable_block_left_alone(self) -> None:
        resolver, _ = _resolver(found=False)
        text = f"```vidy\n{YT_URL}\nstale\n```"
        assert rewrite_document(text, resolver).text == text

    @pytest.mark.parametrize("outer", ["~~~", "````"])
    def test_quoted_block_syntax_left_alone(self, outer: str) -> None:
        resolver, http = _resolver()
        text = f"Syntax:\n{outer}markdown\n```vidy\n{YT_URL}\nTitle\n```\n{outer}\n"
        result = rewrite_document(text, resolver)
        assert result.rewritten == 0
        assert result.text == text
        assert http.calls == []

    def test_tilde_fence_is_rewritten_in_place(self) -> None:
        resolver, _ = _resolver()
        text = f"~~~vidy\n{YT_URL}\nTitle\n~~~\n"
        result = rewrite_document(text, resolver)
        assert result.rewritten == 1
        assert result.text == f"~~~vidy\n{YT_URL}\n~~~\n"

    def test_inner_fence_line_stays_inside_block(self) -> None:
        resolver, _ = _resolver()
        text = f"```vidy\n{YT_URL}\n```python\n```\nafter\n"
        result = rewrite_document(text, resolver)
        assert result.text == f"```vidy\n{YT_URL}\n```\nafter\n"

    def test_multiple_blocks_keep_positions(self) -> None:
        resolver, _ = _resolver()
        block = f"```vidy\n{YT_URL}\nT\n```"
        text = f"{block}\n\nmiddle\n\n{block}"
        result = rewrite_document(text, resolver)
        expected_block = minimal_block(YT_URL)
        assert result.rewritten == 2
        assert result.text == f"{expected_block}\n\nmiddle\n\n{expected_block}"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRender:
    def test_title_link(self) -> None:
        assert title_link(_info()) == f"[T]({YT_URL})"

    def test_warning_callout_without_detail(self) -> None:
        assert warning_callout("Oops") == ">[!WARNING] Oops"

    def test_thumbnail_html_structure(self) -> None:
        html = render_thumbnail_html(_info())
        assert html.startswith(f'<a class="thumbnail" href="{YT_URL}">')
        assert '<img class="thumbnail-img" src="https://i.ytimg.com/vi/abc123/mqdefault.jpg">' in html
        assert '<p class="thumbnail-title" title="T">T</p>' in html
        assert '<a class="thumbnail-author" href="U" title="A">A</a>' in html
        assert html.endswith("</div></a>")

    def test_thumbnail_html_escapes(self) -> None:
        html = render_thumbnail_html(_info(title='<b>"x"</b> & y'))
        assert "<b>" not in html
        assert "&lt;b&gt;&quot;x&quot;&lt;/b&gt; &amp; y" in html
