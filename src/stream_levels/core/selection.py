"""Forced-level override of a backend's variant selection routine.

A backend with its own adaptive algorithm exposes it as a
``select_playlist()`` callable.  :func:`install_forced_selection`
replaces that callable, exactly once, with a :class:`ForcedLevelSelector`
that returns the forced variant when one is set and otherwise calls
through to the saved original.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from stream_levels.core.models import AUTO_INDEX, SelectionState, Variant
from stream_levels.core.protocols import SelectPlaylist

logger = logging.getLogger(__name__)


def master_variants(tech: Any) -> tuple[Variant, ...]:
    """Return the variants of *tech*'s master playlist, or ``()``."""
    loader = getattr(tech, "playlists", None)
    master = getattr(loader, "master", None)
    if master is None:
        return ()
    return tuple(master.playlists)


class ForcedLevelSelector:
    """Callable wrapper around an original selection routine.

    Parameters
    ----------
    original:
        The backend's own ``select_playlist``.  Never itself a
        :class:`ForcedLevelSelector`.
    state:
        The backend-owned forced-level slot.
    variants:
        Returns the current master playlist variants, in manifest order.
    """

    def __init__(
        self,
        original: SelectPlaylist,
        state: SelectionState,
        variants: Callable[[], Sequence[Variant]],
    ) -> None:
        self.original: SelectPlaylist = original
        self.state: SelectionState = state
        self._variants = variants

    def __call__(self) -> Variant | None:
        forced = self.state.forced_index
        if forced != AUTO_INDEX:
            variants = self._variants()
            if 0 <= forced < len(variants):
                return variants[forced]
            logger.debug(
                "Forced level %d outside %d variants; using original selection",
                forced,
                len(variants),
            )
        return self.original()


def selection_state_of(tech: Any) -> SelectionState:
    """Return *tech*'s :class:`SelectionState`, creating it on first use."""
    state = getattr(tech, "selection_state", None)
    if not isinstance(state, SelectionState):
        state = SelectionState()
        tech.selection_state = state
    return state


def install_forced_selection(tech: Any) -> ForcedLevelSelector:
    """Wrap ``tech.select_playlist`` with a :class:`ForcedLevelSelector`.

    Idempotent: an already wrapped routine is returned as is, so the
    call chain never grows beyond one indirection.
    """
    current = tech.select_playlist
    if isinstance(current, ForcedLevelSelector):
        return current

    wrapper = ForcedLevelSelector(
        current,
        selection_state_of(tech),
        lambda: master_variants(tech),
    )
    tech.select_playlist = wrapper
    logger.debug("Installed forced level selection on %s", type(tech).__name__)
    return wrapper
