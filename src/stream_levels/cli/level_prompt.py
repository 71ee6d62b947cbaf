"""Terminal rendering of the level selector control.

This module is responsible for:

* Rendering a Rich table of the control's items next to the level data
  they came from.
* Prompting the user to pick an item via questionary arrow keys, or
  resolving a preset ``--level`` index without prompting.
* Returning the chosen :class:`~stream_levels.host.components.MenuItem`.

Clicking the item is left to the caller, exactly as a user click on the
control would be.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from stream_levels.cli.console import console
from stream_levels.core.labels import format_bitrate
from stream_levels.core.models import Level, StreamMetadata
from stream_levels.exceptions import EnvironmentError, LevelSelectionError
from stream_levels.host.components import MenuItem
from stream_levels.plugin.menu_button import LevelsMenuButton


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for level rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def _format_bitrate(level: Level | None) -> str:
    """Render the level bitrate or ``"—"``."""
    if level is None or level.bitrate is None:
        return "—"
    return format_bitrate(level.bitrate)


def _format_resolution(level: Level | None) -> str:
    """Render ``"1280x720"``, ``"720p"`` or ``"—"``."""
    if level is None or level.height is None:
        return "—"
    if level.width is None:
        return f"{level.height}p"
    return f"{level.width}x{level.height}"


def _build_choice_label(item: MenuItem) -> str:
    """Single-line questionary label: ``"  1080p   (index 3)"``."""
    marker = "*" if item.selected else " "
    return f"{marker} {item.label:<16} (index {item.value})"


# ---------------------------------------------------------------------------
# Rich table display
# ---------------------------------------------------------------------------

def _display_level_table(
    metadata: StreamMetadata,
    button: LevelsMenuButton,
    levels: Sequence[Level],
) -> None:
    """Print a Rich table summarising the control's items."""
    table_class = _import_rich_table()
    by_index = {level.index: level for level in levels}

    console.print()
    console.print(f"[bold cyan]Title:[/bold cyan]  {metadata.title}")
    if metadata.duration is not None:
        minutes, seconds = divmod(metadata.duration, 60)
        console.print(f"[bold cyan]Duration:[/bold cyan] {minutes}m {seconds}s")
    console.print()

    table = table_class(
        title=f"Levels ({button.style_class})",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Index", justify="right", style="dim", width=6)
    table.add_column("Label", justify="left", min_width=12)
    table.add_column("Bitrate", justify="right", min_width=10)
    table.add_column("Resolution", justify="right", min_width=10)
    table.add_column("Selected", justify="center", min_width=8)

    for item in button.get_items():
        level = by_index.get(item.value)
        table.add_row(
            str(item.value),
            item.label,
            _format_bitrate(level),
            _format_resolution(level),
            "[green]●[/green]" if item.selected else "",
        )

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def find_item(button: LevelsMenuButton, index: int) -> MenuItem:
    """Return the item whose value is *index*.

    Raises
    ------
    LevelSelectionError
        If the control has no such item.
    """
    for item in button.get_items():
        if item.value == index:
            return item
    valid = ", ".join(str(item.value) for item in button.get_items())
    raise LevelSelectionError(
        f"No level with index {index}.",
        hint=f"Valid indexes: {valid}",
    )


def prompt_level_selection(
    metadata: StreamMetadata,
    button: LevelsMenuButton,
    levels: Sequence[Level],
    *,
    preset: int | None = None,
) -> MenuItem:
    """Display the control and return the item the user picks.

    Parameters
    ----------
    metadata:
        Source metadata used to display title and duration.
    button:
        A populated level selector control.
    levels:
        The levels the control was built from, for the detail columns.
    preset:
        Level index to pick without prompting.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during selection.
    LevelSelectionError
        If the control is empty, *preset* matches no item, or the user
        cancels the prompt.
    """
    items = button.get_items()
    if not items:
        raise LevelSelectionError(
            "This backend exposes no selectable levels.",
            hint="Try --tech hls or --tech hlsjs.",
        )

    _display_level_table(metadata, button, levels)

    if preset is not None:
        return find_item(button, preset)

    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(item), value=position)
        for position, item in enumerate(items)
    ]

    selected: int | None = questionary.select(
        "Select level:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise LevelSelectionError(
            "No level selected.",
            hint="Use arrow keys to pick a level, then press Enter.",
        )

    return items[selected]
