"""``thumby doctor`` — environment diagnostics command.

Collects one ``(label, value, status)`` row per runtime requirement and
renders them as a Rich table, or as plain text when Rich is missing.
Nothing here touches the network.
"""

from __future__ import annotations

import importlib
import platform
import sys
from pathlib import Path

from thumby.cli import exit_codes
from thumby.cli.console import console, rich_available
from thumby.exceptions import ConfigurationError, EnvironmentError
from thumby.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, OK if ok else "[red]FAIL (>=3.10 required)[/red]"


def _module_check(label: str, module: str, *, required: bool = True) -> Check:
    """Report whether *module* imports, with its ``__version__`` if any."""
    try:
        imported = importlib.import_module(module)
    except ImportError:
        return label, "NOT INSTALLED", FAIL if required else WARN
    return label, str(getattr(imported, "__version__", "unknown")), OK


def _api_key_check(api_key: str | None, config_path: Path | None) -> Check:
    from thumby.infra.config_loader import ConfigSource, load_config

    try:
        loaded = load_config(api_key=api_key, config_path=config_path)
    except (ConfigurationError, EnvironmentError) as exc:
        return "API key", str(exc), FAIL

    if not loaded.config.has_api_key:
        return "API key", "not configured (fallback disabled)", WARN
    where = loaded.source.value
    if loaded.path is not None and loaded.source is not ConfigSource.ARGUMENT:
        where = f"{where}: {loaded.path}"
    return "API key", f"set ({where})", OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[Check]) -> None:
    print("\nthumby doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<10} {value:<44} {_status_plain(status):<6}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks(
    api_key: str | None = None,
    config_path: Path | None = None,
) -> list[Check]:
    return [
        ("thumby", __version__, OK),
        _python_version_check(),
        _module_check("requests", "requests"),
        _module_check("PyYAML", "yaml"),
        _module_check("rich", "rich", required=False),
        _api_key_check(api_key, config_path),
    ]


def run_doctor(
    api_key: str | None = None,
    config_path: Path | None = None,
) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not fail.
    """
    checks = collect_checks(api_key, config_path)
    has_failure = any("FAIL" in status for _, _, status in checks)

    if rich_available():
        from rich.table import Table

        table = Table(
            title="thumby doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=10)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=6)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print(table)
    else:
        _print_plain_table(checks)

    if has_failure:
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR
    console.print("All checks passed.")
    return exit_codes.SUCCESS
