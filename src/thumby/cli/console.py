"""CLI console helpers with optional Rich support.

Diagnostics and errors go to stderr through :data:`console`; command
results (blocks, links, HTML) go to stdout through :func:`emit` so they
can be piped.  Rich is imported lazily so ``--help`` and ``--version``
work without it.
"""

from __future__ import annotations

import sys
from typing import Any

from thumby.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def rich_available() -> bool:
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def emit(text: str) -> None:
    """Write a command result verbatim to stdout (no markup processing)."""
    print(text, file=sys.stdout)
