"""Player object and plugin registry.

The player holds its current tech as a plain attribute and exposes the
level surface (:meth:`Player.get_levels`, :meth:`Player.set_level`).
The tech's adapter is resolved once, when the tech is attached, and
kept until a different tech is found; level queries then only read the
backend.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from stream_levels.core import introspect
from stream_levels.core.models import Level
from stream_levels.core.protocols import LevelAdapter
from stream_levels.core.registry import adapter_for
from stream_levels.exceptions import ConfigurationError
from stream_levels.host.components import ControlBar
from stream_levels.host.events import EventTarget
from stream_levels.host.techs import Tech

logger = logging.getLogger(__name__)

PluginInit = Callable[["Player", Mapping[str, Any]], Any]

_PLUGINS: dict[str, PluginInit] = {}


def register_plugin(name: str, init: PluginInit) -> None:
    """Make *init* available as ``player.plugin(name, ...)``."""
    _PLUGINS[name] = init


def registered_plugins() -> tuple[str, ...]:
    return tuple(sorted(_PLUGINS))


class Player(EventTarget):
    """Player shell: a tech slot, a control bar, events and plugins."""

    def __init__(self, tech: Tech | None = None) -> None:
        super().__init__()
        self.control_bar: ControlBar = ControlBar(self)
        self.tech_: Tech | None = tech
        self._plugins: dict[str, Any] = {}
        self._adapter: tuple[Tech, LevelAdapter] | None = None
        self._level_adapter()

    # ------------------------------------------------------------------
    # Tech
    # ------------------------------------------------------------------

    def get_tech(self) -> Tech | None:
        return introspect.get_tech(self)

    def load_tech(self, tech: Tech | None) -> None:
        """Swap the active tech; listeners see ``loadstart``."""
        self.tech_ = tech
        self._level_adapter()
        self.trigger("loadstart", tech=tech)

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    def _level_adapter(self) -> LevelAdapter:
        """Adapter of the active tech, resolved once per tech instance.

        Resolution may prepare the backend (the override wrapper), so it
        happens when a tech is attached rather than on each query.
        """
        tech = self.get_tech()
        if tech is None:
            self._adapter = None
            return adapter_for(None)
        if self._adapter is None or self._adapter[0] is not tech:
            self._adapter = (tech, adapter_for(tech))
        return self._adapter[1]

    def get_levels(self) -> list[Level]:
        """Levels of the active tech; empty when it has none."""
        return self._level_adapter().get_levels()

    def set_level(self, index: int) -> None:
        """Request level *index* from the active tech; ``-1`` is Auto."""
        logger.debug("Player level request: %d", index)
        self._level_adapter().set_level(index)

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def plugin(self, name: str, **options: Any) -> Any:
        """Activate plugin *name* on this player and return its instance.

        Raises
        ------
        ConfigurationError
            If no plugin is registered under *name*.
        """
        init = _PLUGINS.get(name)
        if init is None:
            raise ConfigurationError(
                f"Unknown plugin: {name}",
                hint=f"Registered plugins: {', '.join(registered_plugins()) or 'none'}",
            )
        instance = init(self, options)
        self._plugins[name] = instance
        return instance

    def plugin_instance(self, name: str) -> Any:
        return self._plugins.get(name)

    def dispose(self) -> None:
        self.trigger("dispose")
        self.control_bar.dispose()
        self.off()
