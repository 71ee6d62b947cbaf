"""Plugin glue: (re)attach the level selector whenever metadata loads.

The tech can change between sources on the same player, so the control
is rebuilt on every metadata event instead of being kept around.  The
previous control is disposed first, leaving exactly one attached.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from stream_levels.config import LevelsConfig
from stream_levels.host.events import Event
from stream_levels.host.player import Player, register_plugin
from stream_levels.plugin.menu_button import LevelsMenuButton

logger = logging.getLogger(__name__)


class LevelsPlugin:
    """Per-player state of the ``levels`` plugin."""

    def __init__(self, player: Player, config: LevelsConfig) -> None:
        self.player: Player = player
        self.config: LevelsConfig = config
        self.button: LevelsMenuButton | None = None
        player.on(config.attach_event, self._handle_metadata)

    def _handle_metadata(self, _event: Event) -> None:
        self.refresh()

    def refresh(self) -> LevelsMenuButton:
        """Replace the current control with a freshly probed one."""
        if self.button is not None:
            self.button.dispose()
        self.button = LevelsMenuButton(self.player, self.config)
        self.player.control_bar.add_child(self.button)
        logger.debug(
            "Attached level selector with %d item(s)", len(self.button.items)
        )
        return self.button

    def detach(self) -> None:
        """Stop listening and dispose the current control."""
        self.player.off(self.config.attach_event, self._handle_metadata)
        if self.button is not None:
            self.button.dispose()
            self.button = None


def levels(player: Player, options: Mapping[str, Any] | None = None) -> LevelsPlugin:
    """Plugin entry point: ``player.plugin("levels", **options)``.

    Raises
    ------
    ConfigurationError
        For unknown or invalid options.
    """
    return LevelsPlugin(player, LevelsConfig.from_options(options))


register_plugin("levels", levels)
