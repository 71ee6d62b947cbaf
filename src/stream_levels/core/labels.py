"""Pure label derivation for levels shown in the selector.

Manifests may omit both ``NAME`` and ``RESOLUTION``, so the label falls
back from name to height to bitrate.
"""

from __future__ import annotations

import math

from stream_levels.core.models import Level


def format_bitrate(bitrate: float | int) -> str:
    """Render bits per second as ``"1500 Kbps"``.

    Halves round up, so 2500 bps reads "3 Kbps".
    """
    return f"{math.floor(bitrate / 1000 + 0.5)} Kbps"


def format_height(height: int) -> str:
    """Render a vertical resolution as ``"720p"``."""
    return f"{height}p"


def level_label(level: Level, *, unknown: str = "Unknown") -> str:
    """Pick the most descriptive label *level* allows.

    ``name`` wins, then ``height``, then ``bitrate``; *unknown* is used
    when the level carries none of them.
    """
    if level.name:
        return level.name
    if level.height:
        return format_height(level.height)
    if level.bitrate is not None:
        return format_bitrate(level.bitrate)
    return unknown
