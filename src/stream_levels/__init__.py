"""stream-levels — quality level selection across playback backends.

A uniform ``get_levels()`` / ``set_level()`` contract for every tech a
player may run on, plus the menu control and plugin that drive it.
"""

from stream_levels.version import __version__

__all__: list[str] = ["__version__"]
