"""Backend introspection — find a player's tech and a tech's element.

Neither the player nor the tech has to expose these directly: the
probes scan the object's own attributes and return the first value of
the wanted type.  Attribute order is insertion order, so a player that
somehow holds two techs deterministically yields the one assigned
first.  ``None`` means "nothing found" and callers treat it as
"no levels", never as an error.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from stream_levels.host.techs import DisplayElement, Tech

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _first_attribute_of(obj: Any, kind: type[_T]) -> _T | None:
    try:
        attributes = vars(obj)
    except TypeError:
        return None
    for value in attributes.values():
        if isinstance(value, kind):
            return value
    return None


def get_tech(player: Any) -> Tech | None:
    """Return the tech currently held by *player*, or ``None``."""
    tech = _first_attribute_of(player, Tech)
    if tech is None:
        logger.debug("No tech found on %s", type(player).__name__)
    return tech


def get_el(tech: Any) -> DisplayElement | None:
    """Return the root display element of *tech*, or ``None``."""
    if tech is None:
        return None
    return _first_attribute_of(tech, DisplayElement)
