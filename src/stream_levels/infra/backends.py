"""Build a tech of any supported kind around a master playlist.

The CLI has no real player, so it stands up the backend a browser would
have run: each builder puts the playlist where that kind of tech keeps
its levels (element properties, engine level list, or playlist loader).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from stream_levels.core.models import MasterPlaylist, Variant
from stream_levels.exceptions import ConfigurationError
from stream_levels.host.techs import (
    Flash,
    Hls,
    HlsJs,
    HlsJsEngine,
    Html5,
    NativeHls,
    PluginElement,
    Tech,
    Youtube,
)


def variant_level_dict(variant: Variant, index: int | None = None) -> dict[str, Any]:
    """Describe *variant* the way streaming engines publish their levels."""
    level: dict[str, Any] = {
        "bitrate": variant.bandwidth,
        "name": variant.name,
        "url": variant.uri,
    }
    if variant.resolution is not None:
        level["width"] = variant.resolution.width
        level["height"] = variant.resolution.height
    if index is not None:
        level["index"] = index
    return level


def _build_flash(master: MasterPlaylist, _bandwidth: float | None) -> Tech:
    levels = [variant_level_dict(v, i) for i, v in enumerate(master.playlists)]
    return Flash(PluginElement({"levels": levels, "level": -1}))


def _build_hlsjs(master: MasterPlaylist, _bandwidth: float | None) -> Tech:
    return HlsJs(HlsJsEngine([variant_level_dict(v) for v in master.playlists]))


def _build_manifest(master: MasterPlaylist, _bandwidth: float | None) -> Tech:
    return NativeHls(master)


def _build_hls(master: MasterPlaylist, bandwidth: float | None) -> Tech:
    return Hls(master, bandwidth=bandwidth)


def _build_html5(_master: MasterPlaylist, _bandwidth: float | None) -> Tech:
    return Html5()


def _build_youtube(_master: MasterPlaylist, _bandwidth: float | None) -> Tech:
    return Youtube()


_BUILDERS: dict[str, Callable[[MasterPlaylist, float | None], Tech]] = {
    "hls": _build_hls,
    "hlsjs": _build_hlsjs,
    "manifest": _build_manifest,
    "flash": _build_flash,
    "html5": _build_html5,
    "youtube": _build_youtube,
}

TECH_CHOICES: tuple[str, ...] = tuple(_BUILDERS)


def build_tech(tag: str, master: MasterPlaylist, *, bandwidth: float | None = None) -> Tech:
    """Return a new tech of kind *tag* loaded with *master*.

    Raises
    ------
    ConfigurationError
        If *tag* names no known tech.
    """
    builder = _BUILDERS.get(tag.lower())
    if builder is None:
        raise ConfigurationError(
            f"Unknown tech: {tag}",
            hint=f"Choose one of: {', '.join(TECH_CHOICES)}",
        )
    return builder(master, bandwidth)
