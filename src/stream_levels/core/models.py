"""Domain models for stream-levels.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  The one exception is :class:`SelectionState`, which is the
mutable forced-level slot a backend owns and the override wrapper
reads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


AUTO_INDEX: int = -1
"""Index reserved for the synthetic "Auto" level."""


def _number(value: object) -> float | int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _integer(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _text(value: object) -> str | None:
    return value if isinstance(value, str) else None


# ---------------------------------------------------------------------------
# Level
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Level:
    """One selectable quality variant of a stream.

    Everything except :attr:`index` is optional and backend-specific.
    A level lacking ``name``, ``height`` and ``bitrate`` is still valid;
    it only gets a poor label.
    """

    index: int
    """Position in the backend's own level list, or ``-1`` for Auto."""

    bitrate: float | int | None = None
    """Bits per second."""

    name: str | None = None
    width: int | None = None
    height: int | None = None
    url: str | None = None

    @property
    def is_auto(self) -> bool:
        return self.index == AUTO_INDEX

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        index: int | None = None,
        fallback_index: int = AUTO_INDEX,
    ) -> Level:
        """Normalise a backend level dict.

        Unknown keys are ignored and values of the wrong type become
        ``None``.  *index* overrides whatever index the mapping carries;
        *fallback_index* is used when neither provides one.
        """
        if index is None:
            index = _integer(data.get("index"))
            if index is None:
                index = fallback_index
        return cls(
            index=index,
            bitrate=_number(data.get("bitrate")),
            name=_text(data.get("name")),
            width=_integer(data.get("width")),
            height=_integer(data.get("height")),
            url=_text(data.get("url")),
        )


# ---------------------------------------------------------------------------
# Master playlist structure
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Resolution:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Variant:
    """One alternative stream of a master playlist.

    ``bandwidth``, ``name`` and ``resolution`` are ``None`` when the
    manifest entry omits them.
    """

    uri: str
    bandwidth: int | None = None
    name: str | None = None
    resolution: Resolution | None = None


@dataclass(frozen=True, slots=True)
class MasterPlaylist:
    """Ordered collection of :class:`Variant` entries."""

    playlists: tuple[Variant, ...]

    def __len__(self) -> int:
        return len(self.playlists)

    def __bool__(self) -> bool:
        return len(self.playlists) > 0


# ---------------------------------------------------------------------------
# Forced-level slot
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class SelectionState:
    """Forced level index held by a backend.

    Lives on the backend rather than on the control so that it survives
    control re-creation.  ``-1`` means the backend decides.
    """

    forced_index: int = AUTO_INDEX

    @property
    def is_forced(self) -> bool:
        return self.forced_index != AUTO_INDEX


# ---------------------------------------------------------------------------
# Extracted source
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StreamMetadata:
    """Top-level metadata of the source a master playlist came from."""

    id: str
    title: str
    duration: int | None
    """Duration in seconds, or ``None`` for live or unknown."""

    webpage_url: str


@dataclass(frozen=True, slots=True)
class StreamSource:
    """A resolved source: its metadata and its master playlist."""

    metadata: StreamMetadata
    master: MasterPlaylist
