"""Explicit registry from tech tag to level adapter.

Each tech class carries a ``tech_name`` tag.  :func:`adapter_for`
resolves it to the adapter registered for that tag; techs without a
tag, with an unknown tag, or missing altogether get
:class:`~stream_levels.core.adapters.UnsupportedLevels`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from stream_levels.core.adapters import (
    EngineLevels,
    ManifestLevels,
    OverrideLevels,
    PluginPropertyLevels,
    UnsupportedLevels,
)
from stream_levels.core.protocols import LevelAdapter

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[Any], LevelAdapter]

_ADAPTERS: dict[str, AdapterFactory] = {
    "html5": UnsupportedLevels,
    # The embed draws its own quality menu.
    "youtube": UnsupportedLevels,
    "flash": PluginPropertyLevels,
    "manifest": ManifestLevels,
    "hlsjs": EngineLevels,
    "hls": OverrideLevels,
}


def register_adapter(tag: str, factory: AdapterFactory) -> None:
    """Register (or replace) the adapter factory used for *tag*."""
    _ADAPTERS[tag.lower()] = factory


def registered_tags() -> tuple[str, ...]:
    return tuple(sorted(_ADAPTERS))


def adapter_for(tech: Any) -> LevelAdapter:
    """Return the level adapter for *tech*.

    Never raises: a factory that rejects the tech falls back to
    :class:`UnsupportedLevels` with a warning.
    """
    if tech is None:
        return UnsupportedLevels()

    tag = getattr(tech, "tech_name", None)
    factory = _ADAPTERS.get(tag.lower()) if isinstance(tag, str) else None
    if factory is None:
        logger.debug("No level adapter registered for tech %r", tag)
        return UnsupportedLevels(tech)

    try:
        return factory(tech)
    except (AttributeError, TypeError) as exc:
        logger.warning("Level adapter for tech %r unusable: %s", tag, exc)
        return UnsupportedLevels(tech)
