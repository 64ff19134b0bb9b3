"""Allow ``python -m thumby`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m thumby`` behaves identically to the ``thumby`` console
script.
"""

from __future__ import annotations

from thumby.cli.app import cli

if __name__ == "__main__":
    cli()
