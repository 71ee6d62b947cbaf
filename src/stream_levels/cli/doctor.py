"""``stream-levels doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies stream-levels' requirements,
plus the level adapter registered for every known tech.

This module lives in the CLI layer — it may import from ``core`` and
``infra``, and it renders via Rich.  No business logic resides here; it
purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from stream_levels.cli import exit_codes
from stream_levels.cli.console import console
from stream_levels.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = major >= 3 and minor >= 10
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _ytdlp_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp version row."""
    try:
        from yt_dlp.version import __version__ as ydl_ver

        return "yt-dlp", ydl_ver, "[green]OK[/green]"
    except ImportError:
        pass

    # Fallback: yt-dlp installed but version submodule unavailable.
    try:
        import yt_dlp  # noqa: F401

        return "yt-dlp", "unknown", "[green]OK[/green]"
    except ImportError:
        return "yt-dlp", "NOT INSTALLED", "[red]FAIL[/red]"


def _questionary_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the questionary row.

    Only the interactive prompt needs it, so absence is a warning.
    """
    try:
        import questionary
    except ImportError:
        return "questionary", "not installed", "[yellow]WARN[/yellow]"
    return "questionary", getattr(questionary, "__version__", "unknown"), "[green]OK[/green]"


def _adapters_check() -> tuple[str, str, str]:
    """Return (label, value, status) listing techs with a level adapter."""
    from stream_levels.core.registry import registered_tags

    return "adapters", ", ".join(registered_tags()), "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _stream_levels_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the stream-levels version row."""
    return "stream-levels", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nstream-levels doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<14} {value:<36} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _stream_levels_version_check(),
        _python_version_check(),
        _ytdlp_version_check(),
        _questionary_check(),
        _adapters_check(),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="stream-levels doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
