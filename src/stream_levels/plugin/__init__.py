"""The ``levels`` player plugin.

Importing this package registers the plugin with the host, after which
``player.plugin("levels")`` attaches a :class:`LevelsMenuButton` to the
player's control bar on every ``loadedmetadata`` event.
"""

from stream_levels.plugin.lifecycle import LevelsPlugin, levels
from stream_levels.plugin.menu_button import LevelsMenuButton

__all__: list[str] = ["LevelsMenuButton", "LevelsPlugin", "levels"]
