"""CLI application entry point and command routing for stream-levels.

This module is the **sole error boundary** for the entire application.
It catches :class:`~stream_levels.exceptions.StreamLevelsError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core,
  plugin and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from stream_levels.cli import exit_codes
from stream_levels.cli.console import configure_logging, console
from stream_levels.exceptions import StreamLevelsError
from stream_levels.infra.backends import TECH_CHOICES
from stream_levels.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``stream-levels <url>``   — list and pick a level (interactive)
    * ``stream-levels doctor``  — environment diagnostics
    * ``stream-levels --version``
    """
    parser = argparse.ArgumentParser(
        prog="stream-levels",
        description="Inspect and force quality levels of a stream per playback backend.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Stream or page URL, or 'doctor' to run diagnostics.",
    )
    parser.add_argument(
        "--tech",
        choices=TECH_CHOICES,
        default="hls",
        help="Playback backend to simulate (default: hls).",
    )
    parser.add_argument(
        "--bandwidth",
        type=float,
        default=None,
        metavar="BPS",
        help="Measured throughput handed to the backend's own selection.",
    )
    parser.add_argument(
        "--level",
        type=int,
        default=None,
        metavar="INDEX",
        help="Pick this level index without prompting (-1 for Auto).",
    )
    parser.add_argument(
        "--auto-label",
        default=None,
        help="Label of the Auto entry (default: Auto).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log adapter decisions to stderr.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _backend_choice(tech: Any) -> str:
    """Describe what *tech* will play after the selection."""
    from stream_levels.core.adapters import level_from_variant
    from stream_levels.core.labels import level_label
    from stream_levels.core.selection import master_variants

    tag = getattr(tech, "tech_name", "")
    if tag == "hls":
        variant = tech.select_playlist()
        if variant is None:
            return "Backend has no variant to play."
        position = master_variants(tech).index(variant)
        label = level_label(level_from_variant(variant, position))
        return f"Next variant: {label} (index {position})  {variant.uri}"
    if tag == "hlsjs":
        return f"Engine next_level: {tech.hls.next_level}"
    if tag == "flash":
        return f"Plugin level property: {tech.get_el().get_property('level')}"
    return "Backend keeps choosing on its own."


def _handle_levels(url: str, args: argparse.Namespace) -> int:
    """Dispatch the level inspection / selection flow.

    Flow:
    1. Extract the master playlist with yt-dlp.
    2. Stand up the requested tech and a player carrying the plugin.
    3. Fire ``loadedmetadata`` so the plugin builds its control.
    4. Render the control and let the user pick an item.
    5. Click the item and report what the backend will play next.
    """
    from stream_levels.cli.level_prompt import prompt_level_selection
    from stream_levels.core.manifest_service import ManifestService
    from stream_levels.host.player import Player
    from stream_levels.infra.backends import build_tech
    from stream_levels.infra.ytdlp_manifest import YtDlpManifestProvider
    from stream_levels.plugin import LevelsPlugin

    options: dict[str, Any] = {}
    if args.auto_label is not None:
        options["auto_label"] = args.auto_label

    service = ManifestService(YtDlpManifestProvider())

    console.print(f"\n[bold]Fetching manifest…[/bold]  {url}\n")
    source = service.load(url)

    tech = build_tech(args.tech, source.master, bandwidth=args.bandwidth)
    player = Player(tech)
    plugin: LevelsPlugin = player.plugin("levels", **options)
    player.trigger("loadedmetadata")

    item = prompt_level_selection(
        source.metadata,
        plugin.button,
        player.get_levels(),
        preset=args.level,
    )
    item.handle_click()

    console.print(f"\n[bold green]Selected:[/bold green] {item.label}")
    console.print(_backend_choice(tech))
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from stream_levels.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the stream-levels CLI.

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

    if args.target is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    target: str = args.target

    if target.lower() == "doctor":
        return _handle_doctor()

    return _handle_levels(target, args)


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
    except StreamLevelsError as exc:
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
