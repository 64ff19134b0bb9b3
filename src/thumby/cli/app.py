"""CLI application entry point and command routing for thumby.

This module is the **sole error boundary** for the entire application.
It catches :class:`~thumby.exceptions.ThumbyError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Commands
--------
* ``thumby info URL``        — resolve and show metadata
* ``thumby link URL``        — print a ``[title](url)`` Markdown link
* ``thumby block URL``       — print a ``vidy`` block for the URL
* ``thumby html URL``        — print the thumbnail card HTML
* ``thumby normalize FILE``  — strip stored metadata from ``vidy`` blocks
* ``thumby doctor``          — environment diagnostics

``URL`` may be ``-`` to read it from stdin.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from thumby.cli import exit_codes
from thumby.cli.console import console, emit
from thumby.exceptions import ThumbyError
from thumby.version import __version__

if TYPE_CHECKING:
    from thumby.core.models import ResolverConfig, VideoInfo
    from thumby.core.protocols import HttpClient
    from thumby.core.resolver import MetadataResolver


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_url_command(
    subparsers: argparse._SubParsersAction,
    name: str,
    help_text: str,
) -> None:
    sub = subparsers.add_parser(name, help=help_text, description=help_text)
    sub.add_argument("url", help="Video URL, or '-' to read it from stdin.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="thumby",
        description="Resolve YouTube and Vimeo URLs into thumbnail cards.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and fallbacks to stderr.",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="YouTube Data API key for the fallback lookup.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Read settings from this YAML file.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: none).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    _add_url_command(subparsers, "info", "Resolve a video URL and show its metadata.")
    _add_url_command(subparsers, "link", "Print a Markdown [title](url) link.")
    _add_url_command(subparsers, "block", "Print a vidy block for the URL.")
    _add_url_command(subparsers, "html", "Print the thumbnail card HTML.")

    normalize = subparsers.add_parser(
        "normalize",
        help="Strip stored metadata from vidy blocks in a Markdown file.",
        description="Strip stored metadata from vidy blocks in a Markdown file.",
    )
    normalize.add_argument("file", type=Path, help="Markdown file to rewrite.")
    normalize.add_argument(
        "--check",
        action="store_true",
        help="Report blocks that would change without writing the file.",
    )

    subparsers.add_parser("doctor", help="Check the runtime environment.")
    return parser


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _read_url(raw: str) -> str:
    if raw == "-":
        return sys.stdin.read().strip()
    return raw


def _build_resolver(
    args: argparse.Namespace,
) -> tuple[MetadataResolver, HttpClient]:
    """Instantiate the infra transport and the core resolver."""
    from thumby.core.resolver import MetadataResolver
    from thumby.infra.http_client import RequestsHttpClient

    http = RequestsHttpClient(timeout=args.timeout)
    return MetadataResolver(http), http


def _load_resolver_config(args: argparse.Namespace) -> ResolverConfig:
    from thumby.infra.config_loader import load_config

    return load_config(api_key=args.api_key, config_path=args.config).config


def _require_video_id(url: str, http: HttpClient) -> None:
    """Reject URLs from which no video ID can be extracted."""
    from thumby.core.classifier import extract_id
    from thumby.exceptions import InvalidURLError

    if extract_id(url, http) == "":
        raise InvalidURLError(
            f"No valid video in: {url or '<empty>'}",
            hint="Supported: youtube.com/watch, youtu.be, shorts, live, vimeo.com",
        )


def _resolve_or_raise(
    resolver: MetadataResolver,
    args: argparse.Namespace,
    url: str,
) -> VideoInfo:
    """Resolve *url*, mapping failures to typed errors for the boundary."""
    from thumby.core.models import ResolutionStatus
    from thumby.exceptions import (
        NetworkError,
        VideoNotFoundError,
        append_api_key_suggestion,
    )

    info = resolver.resolve(url, _load_resolver_config(args))

    if info.status is ResolutionStatus.NETWORK_ERROR:
        raise NetworkError(
            f"Video temporarily unavailable: {url}",
            hint="Check your connection and retry; run with -v for details.",
        )
    if info.status is ResolutionStatus.NOT_FOUND:
        raise VideoNotFoundError(
            f"Cannot find video: {url}",
            hint=append_api_key_suggestion(
                "The video may be private, removed, or embedding-restricted.",
            ),
        )
    return info


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_info(args: argparse.Namespace) -> int:
    from thumby.cli.info_table import render_info

    resolver, _ = _build_resolver(args)
    info = _resolve_or_raise(resolver, args, _read_url(args.url))
    render_info(info)
    return exit_codes.SUCCESS


def _handle_link(args: argparse.Namespace) -> int:
    from thumby.core.render import title_link

    url = _read_url(args.url)
    resolver, http = _build_resolver(args)
    _require_video_id(url, http)
    emit(title_link(_resolve_or_raise(resolver, args, url)))
    return exit_codes.SUCCESS


def _handle_block(args: argparse.Namespace) -> int:
    from thumby.core.blocks import wrap_url

    url = _read_url(args.url)
    _, http = _build_resolver(args)
    _require_video_id(url, http)
    emit(wrap_url(url))
    return exit_codes.SUCCESS


def _handle_html(args: argparse.Namespace) -> int:
    """Render the card, or the warning callout a host would show instead."""
    from thumby.core.blocks import BlockKind, process_block
    from thumby.core.render import render_thumbnail_html

    resolver, _ = _build_resolver(args)
    outcome = process_block(
        _read_url(args.url), resolver, _load_resolver_config(args),
    )
    if outcome.kind is BlockKind.RENDER and outcome.info is not None:
        emit(render_thumbnail_html(outcome.info))
        return exit_codes.SUCCESS
    emit(outcome.warning or "")
    return exit_codes.GENERAL_ERROR


def _handle_normalize(args: argparse.Namespace) -> int:
    from thumby.core.blocks import rewrite_document
    from thumby.exceptions import DocumentError

    path: Path = args.file
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    resolver, _ = _build_resolver(args)
    result = rewrite_document(text, resolver, _load_resolver_config(args))

    if result.rewritten == 0:
        console.print(f"[green]{path}: nothing to rewrite.[/green]")
        return exit_codes.SUCCESS

    if args.check:
        console.print(
            f"[yellow]{path}: {result.rewritten} block(s) carry stored metadata.[/yellow]"
        )
        return exit_codes.CHECK_FAILED

    try:
        path.write_text(result.text, encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot write {path}: {exc.strerror or exc}") from exc
    console.print(f"[green]{path}: rewrote {result.rewritten} block(s).[/green]")
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from thumby.cli.doctor import run_doctor

    return run_doctor(api_key=args.api_key, config_path=args.config)


_HANDLERS = {
    "info": _handle_info,
    "link": _handle_link,
    "block": _handle_block,
    "html": _handle_html,
    "normalize": _handle_normalize,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the thumby CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    from thumby.utils.logging import configure_logging

    configure_logging(verbose=args.verbose)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ThumbyError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
