"""Protocols (interfaces) consumed by the core layer.

These define the contracts that level adapters and the backends they
wrap must satisfy.  Core code depends ONLY on these protocols — never
on concrete tech classes — so any object with the right shape works.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from stream_levels.core.models import Level, MasterPlaylist, Variant


class LevelAdapter(Protocol):
    """Uniform level capability of one backend."""

    def get_levels(self) -> list[Level]:
        """Return a fresh list of the backend's levels.

        Must never raise; an empty list means "no levels available".
        """
        ...  # pragma: no cover

    def set_level(self, index: int) -> None:
        """Request level *index*, ``-1`` meaning automatic selection.

        Fire-and-forget: the switch may happen later, or not at all.
        """
        ...  # pragma: no cover


class PropertyElement(Protocol):
    """Display element of a plugin-hosted backend.

    The plugin publishes its state through generic named properties.
    """

    def get_property(self, name: str) -> Any:
        ...  # pragma: no cover

    def set_property(self, name: str, value: Any) -> None:
        ...  # pragma: no cover


class LevelEngine(Protocol):
    """Streaming engine exposing a live level list and a next-level slot.

    ``next_level`` is read by the engine's own scheduler at its next
    decision point.
    """

    levels: list[Mapping[str, Any]]
    next_level: int


class PlaylistSource(Protocol):
    """Anything holding a parsed master playlist."""

    master: MasterPlaylist | None


SelectPlaylist = Callable[[], Variant | None]
"""A backend's variant selection routine."""


class ManifestProvider(Protocol):
    """Source of master playlist descriptions.

    Structural: anything with a matching :meth:`fetch_manifest` will do.
    """

    def fetch_manifest(self, url: str) -> dict[str, Any]:
        """Describe the stream behind *url*.

        The dict carries ``"id"``, ``"title"``, ``"duration"`` and
        ``"webpage_url"`` where known, plus a ``"formats"`` list with one
        dict per variant (``url``, ``tbr``, ``width``, ``height``,
        ``format_note``, ``vcodec``).

        Raises
        ------
        InvalidURLError
            When no extractor understands *url*.
        ManifestError
            When the master playlist cannot be read.
        MetadataExtractionError
            For any other extraction failure.
        VideoUnavailableError
            When the stream is confirmed unavailable.
        """
        ...  # pragma: no cover
