"""Level adapters — one ``get_levels()`` / ``set_level()`` pair per backend kind.

Every adapter satisfies :class:`~stream_levels.core.protocols.LevelAdapter`
structurally.  ``get_levels()`` builds a fresh list on each call and
never raises: a backend that turns out to be inconsistent yields an
empty list and a warning in the log.

=======================  ==========================================
Adapter                  Backend shape
=======================  ==========================================
UnsupportedLevels        no level concept at all
PluginPropertyLevels     plugin element with named properties
ManifestLevels           master playlist, no way to force a choice
EngineLevels             live engine level list + ``next_level``
OverrideLevels           master playlist + replaceable selection
=======================  ==========================================
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from stream_levels.core.introspect import get_el
from stream_levels.core.models import Level, Variant
from stream_levels.core.selection import (
    install_forced_selection,
    master_variants,
    selection_state_of,
)

logger = logging.getLogger(__name__)

# Backend errors that mean "the shape is not what we expected".
_INCONSISTENCY_ERRORS: tuple[type[Exception], ...] = (
    AttributeError,
    KeyError,
    TypeError,
    ValueError,
)


def _safe_levels(kind: str, build: Callable[[], list[Level]]) -> list[Level]:
    """Run *build* and degrade any backend inconsistency to ``[]``."""
    try:
        return build()
    except _INCONSISTENCY_ERRORS as exc:
        logger.warning("%s backend returned inconsistent levels: %s", kind, exc)
        return []


def level_from_variant(variant: Variant, index: int) -> Level:
    """Map one master playlist entry onto a :class:`Level`."""
    resolution = variant.resolution
    return Level(
        index=index,
        bitrate=variant.bandwidth,
        name=variant.name,
        width=resolution.width if resolution is not None else None,
        height=resolution.height if resolution is not None else None,
        url=variant.uri,
    )


# ---------------------------------------------------------------------------
# Unsupported
# ---------------------------------------------------------------------------

class UnsupportedLevels:
    """Adapter for backends without levels (native media element, embeds)."""

    def __init__(self, tech: Any = None) -> None:
        self.tech = tech

    def get_levels(self) -> list[Level]:
        return []

    def set_level(self, index: int) -> None:
        logger.debug("Ignoring set_level(%d) on a backend without levels", index)


# ---------------------------------------------------------------------------
# Plugin-hosted
# ---------------------------------------------------------------------------

class PluginPropertyLevels:
    """Adapter for a plugin that publishes levels as element properties.

    Reads the ``levels`` property and writes the ``level`` property of
    the backend's display element.
    """

    levels_property: str = "levels"
    level_property: str = "level"

    def __init__(self, tech: Any) -> None:
        self.tech = tech

    def get_levels(self) -> list[Level]:
        return _safe_levels("plugin", self._read_levels)

    def _read_levels(self) -> list[Level]:
        element = get_el(self.tech)
        if element is None:
            return []
        raw = element.get_property(self.levels_property)
        if not raw:
            return []
        return [
            Level.from_mapping(entry, fallback_index=position)
            for position, entry in enumerate(raw)
        ]

    def set_level(self, index: int) -> None:
        element = get_el(self.tech)
        if element is None:
            logger.debug("No plugin element; set_level(%d) dropped", index)
            return
        element.set_property(self.level_property, index)


# ---------------------------------------------------------------------------
# Master playlist, read-only
# ---------------------------------------------------------------------------

class ManifestLevels:
    """Adapter listing master playlist variants in manifest order.

    The hosting backend offers no hook to force a variant, so
    :meth:`set_level` has no effect.
    """

    def __init__(self, tech: Any) -> None:
        self.tech = tech

    def get_levels(self) -> list[Level]:
        return _safe_levels("manifest", self._read_levels)

    def _read_levels(self) -> list[Level]:
        return [
            level_from_variant(variant, index)
            for index, variant in enumerate(master_variants(self.tech))
        ]

    def set_level(self, index: int) -> None:
        logger.debug("Backend cannot force a variant; set_level(%d) ignored", index)


# ---------------------------------------------------------------------------
# Engine-native, selection-capable
# ---------------------------------------------------------------------------

def _bitrate_key(level: Level) -> float | int:
    return level.bitrate if level.bitrate is not None else 0


class EngineLevels:
    """Adapter for an engine with a live level list and a ``next_level`` slot.

    Levels are copied before any mutation, indexed by their position in
    the engine's list, then sorted by ascending bitrate.  ``sorted`` is
    stable, so equal bitrates keep their engine order.
    """

    def __init__(self, tech: Any) -> None:
        self.tech = tech

    def get_levels(self) -> list[Level]:
        return _safe_levels("engine", self._read_levels)

    def _read_levels(self) -> list[Level]:
        live: list[Mapping[str, Any]] = self.tech.hls.levels
        levels = [
            Level.from_mapping(entry, index=position)
            for position, entry in enumerate(list(live))
        ]
        return sorted(levels, key=_bitrate_key)

    def set_level(self, index: int) -> None:
        self.tech.hls.next_level = index


# ---------------------------------------------------------------------------
# Engine-native, override-capable
# ---------------------------------------------------------------------------

class OverrideLevels(ManifestLevels):
    """Adapter forcing a variant past the backend's own selection routine.

    Construction installs the :class:`~stream_levels.core.selection.ForcedLevelSelector`
    once; :meth:`set_level` only writes the backend's forced index.
    """

    def __init__(self, tech: Any) -> None:
        super().__init__(tech)
        install_forced_selection(tech)

    def set_level(self, index: int) -> None:
        selection_state_of(self.tech).forced_index = index
        logger.debug("Forced level set to %d", index)
