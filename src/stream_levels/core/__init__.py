"""Core layer — levels, adapters, and the forced-selection override.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Adapters never raise; missing capability is an empty level list.

Only the dependency-free modules are re-exported here; import adapters
and the registry from their own modules.
"""

from stream_levels.core.labels import level_label
from stream_levels.core.models import (
    AUTO_INDEX,
    Level,
    MasterPlaylist,
    Resolution,
    SelectionState,
    Variant,
)
from stream_levels.core.protocols import LevelAdapter

__all__: list[str] = [
    "AUTO_INDEX",
    "Level",
    "LevelAdapter",
    "MasterPlaylist",
    "Resolution",
    "SelectionState",
    "Variant",
    "level_label",
]
