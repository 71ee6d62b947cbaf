"""Playback techs — the backends a player can run on.

Each tech class carries a ``tech_name`` tag that the level adapter
registry keys on.  The techs model only the state the adapters read or
write; they do not play media.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from stream_levels.core.models import MasterPlaylist, SelectionState, Variant


# ---------------------------------------------------------------------------
# Display elements
# ---------------------------------------------------------------------------

class DisplayElement:
    """Root element a tech renders into."""

    def __init__(self, tag: str = "video", **attributes: Any) -> None:
        self.tag: str = tag
        self.attributes: dict[str, Any] = dict(attributes)

    def __repr__(self) -> str:
        return f"<{self.tag}>"


class PluginElement(DisplayElement):
    """Element hosting an external plugin object.

    The plugin's state is only reachable through named properties.
    """

    def __init__(self, properties: Mapping[str, Any] | None = None) -> None:
        super().__init__("object")
        self._properties: dict[str, Any] = dict(properties or {})

    def get_property(self, name: str) -> Any:
        return self._properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self._properties[name] = value


# ---------------------------------------------------------------------------
# Base tech
# ---------------------------------------------------------------------------

class Tech:
    tech_name: ClassVar[str] = ""

    def __init__(self, el: DisplayElement | None = None) -> None:
        self.el_: DisplayElement = el if el is not None else DisplayElement()

    def get_el(self) -> DisplayElement | None:
        from stream_levels.core.introspect import get_el

        return get_el(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tech_name={self.tech_name!r})"


class Html5(Tech):
    """Native media element; no level concept."""

    tech_name: ClassVar[str] = "html5"


class Youtube(Tech):
    """YouTube embed; it draws its own quality menu."""

    tech_name: ClassVar[str] = "youtube"

    def __init__(self, el: DisplayElement | None = None) -> None:
        super().__init__(el if el is not None else DisplayElement("iframe"))


class Flash(Tech):
    """Plugin-hosted tech, levels exposed as element properties."""

    tech_name: ClassVar[str] = "flash"

    def __init__(self, el: PluginElement | None = None) -> None:
        super().__init__(el if el is not None else PluginElement())


# ---------------------------------------------------------------------------
# Engine with a live level list
# ---------------------------------------------------------------------------

class HlsJsEngine:
    """Streaming engine state: live level dicts plus the next-level slot.

    ``next_level`` is picked up at the engine's next fragment boundary;
    ``-1`` hands the choice back to its own bandwidth estimator.
    """

    def __init__(self, levels: list[Mapping[str, Any]] | None = None) -> None:
        self.levels: list[Mapping[str, Any]] = list(levels or [])
        self.next_level: int = -1


class HlsJs(Tech):
    tech_name: ClassVar[str] = "hlsjs"

    def __init__(self, engine: HlsJsEngine | None = None, el: DisplayElement | None = None) -> None:
        super().__init__(el)
        self.hls: HlsJsEngine = engine if engine is not None else HlsJsEngine()


# ---------------------------------------------------------------------------
# Master playlist techs
# ---------------------------------------------------------------------------

class PlaylistLoader:
    """Holds the parsed master playlist of the current source."""

    def __init__(self, master: MasterPlaylist | None = None) -> None:
        self.master: MasterPlaylist | None = master


class NativeHls(Tech):
    """Platform HLS playback; the manifest is readable, the choice is not."""

    tech_name: ClassVar[str] = "manifest"

    def __init__(self, master: MasterPlaylist | None = None, el: DisplayElement | None = None) -> None:
        super().__init__(el)
        self.playlists: PlaylistLoader = PlaylistLoader(master)


class Hls(NativeHls):
    """Script-driven HLS playback with a replaceable ``select_playlist``.

    Parameters
    ----------
    master:
        Parsed master playlist of the current source.
    bandwidth:
        Last measured throughput in bits per second, ``None`` before the
        first segment has been fetched.
    """

    tech_name: ClassVar[str] = "hls"

    def __init__(
        self,
        master: MasterPlaylist | None = None,
        el: DisplayElement | None = None,
        *,
        bandwidth: float | None = None,
    ) -> None:
        super().__init__(master, el)
        self.bandwidth: float | None = bandwidth
        self.selection_state: SelectionState = SelectionState()

    def select_playlist(self) -> Variant | None:
        """Pick the richest variant that fits the measured bandwidth.

        Without a measurement, or when nothing fits, the leanest
        variant is used.
        """
        master = self.playlists.master
        if not master:
            return None
        ranked = sorted(master.playlists, key=lambda v: v.bandwidth or 0)
        if self.bandwidth is None:
            return ranked[0]
        fitting = [v for v in ranked if (v.bandwidth or 0) <= self.bandwidth]
        return fitting[-1] if fitting else ranked[0]
