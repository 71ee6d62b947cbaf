"""Level selector control.

A menu button listing the active tech's levels behind a synthetic
"Auto" entry.  Clicking an entry moves the selection mark to it and
forwards its index to ``player.set_level``.

The control always starts with Auto selected, even when the tech still
holds an earlier forced level; the tech is not queried for it.
"""

from __future__ import annotations

from typing import Any

from stream_levels.config import LevelsConfig
from stream_levels.core.labels import level_label
from stream_levels.core.models import AUTO_INDEX, Level
from stream_levels.host.components import MenuButton, MenuItem
from stream_levels.host.events import Event


class LevelsMenuButton(MenuButton):
    """Menu button driving level selection for one tech.

    Parameters
    ----------
    player:
        Player exposing ``get_levels()`` and ``set_level()``.
    config:
        Plugin configuration; defaults apply when omitted.
    """

    def __init__(self, player: Any, config: LevelsConfig | None = None) -> None:
        # create_items() runs inside MenuButton.__init__ and needs this.
        self.config: LevelsConfig = config if config is not None else LevelsConfig()
        super().__init__(player, {"class_name": self.config.class_name})

    @property
    def style_class(self) -> str:
        return self.config.class_name

    def create_items(self) -> list[MenuItem]:
        levels = self.player().get_levels()
        if not levels:
            return []

        auto = Level(index=AUTO_INDEX, name=self.config.auto_label)
        return [self._create_item(level) for level in [auto, *levels]]

    def _create_item(self, level: Level) -> MenuItem:
        item = MenuItem(
            self.player(),
            {
                "label": level_label(level, unknown=self.config.unknown_label),
                "value": level.index,
                "selected": level.is_auto,
            },
        )
        item.on("click", self._handle_item_click)
        return item

    def _handle_item_click(self, event: Event) -> None:
        clicked: MenuItem = event.target
        for item in self.get_items():
            item.selected = False
        clicked.selected = True
        self.player().set_level(clicked.value)

    def selected_item(self) -> MenuItem | None:
        return next((item for item in self.items if item.selected), None)
