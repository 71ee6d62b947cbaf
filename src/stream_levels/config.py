"""Configuration of the levels plugin.

:class:`LevelsConfig` is built once per plugin activation from the
options passed to ``player.plugin("levels", ...)``; there is no shared
mutable default to merge into.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from stream_levels.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class LevelsConfig:
    """Named, typed plugin options with their defaults."""

    class_name: str = "vjs-menu-button-levels"
    """Style class of the level selector control."""

    auto_label: str = "Auto"
    """Label of the synthetic Auto item."""

    unknown_label: str = "Unknown"
    """Label for a level with neither name, height nor bitrate."""

    attach_event: str = "loadedmetadata"
    """Player event on which the control is (re)built."""

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> LevelsConfig:
        """Build a config from plugin options.

        Raises
        ------
        ConfigurationError
            For an unknown option name or a non-string / empty value.
        """
        if not options:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown levels option(s): {', '.join(unknown)}",
                hint=f"Valid options: {', '.join(sorted(known))}",
            )

        for name, value in options.items():
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"Option {name!r} must be a non-empty string, got {value!r}",
                )

        return cls(**dict(options))
