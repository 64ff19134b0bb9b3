"""Rich rendering of a resolved :class:`~thumby.core.models.VideoInfo`.

The table is the command's result, so it goes to stdout like the other
commands' output.
"""

from __future__ import annotations

import sys

from thumby.cli.console import get_rich_console, rich_available
from thumby.core.models import VideoInfo


def _rows(info: VideoInfo) -> list[tuple[str, str]]:
    return [
        ("Title", info.title),
        ("Author", info.author),
        ("Author URL", info.author_url),
        ("Thumbnail", info.thumbnail),
        ("URL", info.url),
    ]


def render_info(info: VideoInfo) -> None:
    """Print *info* as a two-column table on stdout."""
    rows = _rows(info)

    if not rich_available():
        width = max(len(label) for label, _ in rows)
        for label, value in rows:
            print(f"{label:<{width}}  {value}", file=sys.stdout)
        return

    from rich.table import Table

    table = Table(show_header=False, border_style="dim")
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in rows:
        table.add_row(label, value)
    get_rich_console(stderr=False).print(table)
