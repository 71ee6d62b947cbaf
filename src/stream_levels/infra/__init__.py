"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp and stands up the techs
the CLI drives.  Every raw third-party exception must be caught here
and re-raised as a :class:`~stream_levels.exceptions.StreamLevelsError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from stream_levels.infra.backends import TECH_CHOICES, build_tech
from stream_levels.infra.ytdlp_manifest import YtDlpManifestProvider

__all__: list[str] = [
    "TECH_CHOICES",
    "YtDlpManifestProvider",
    "build_tech",
]
