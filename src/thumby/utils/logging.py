"""Logging setup for the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers;
handlers are installed once, here, by the entry point.
"""

from __future__ import annotations

import logging
import sys

logger = logging.getLogger("thumby")

_FORMAT = "%(name)s: %(message)s"


def _build_handler() -> logging.Handler:
    """Rich handler on stderr, or a plain stream handler without Rich."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(f"%(levelname)s {_FORMAT}"))
        return handler
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def configure_logging(verbose: bool = False) -> None:
    """Attach a single handler to the ``thumby`` logger.

    ``verbose`` selects DEBUG; the default level is WARNING.  Calling
    again replaces the previous handler.
    """
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
