"""Custom exception hierarchy for stream-levels.

The level adapter layer never raises: a backend without levels is an
empty list, not an error.  Everything around it (manifest extraction,
configuration, the CLI) reports failures through the classes below.
Raw third-party exceptions (e.g. from yt-dlp) must NEVER propagate
beyond the infrastructure layer.

Hierarchy
---------
StreamLevelsError
├── InvalidURLError
├── MetadataExtractionError
├── VideoUnavailableError
├── ManifestError
├── LevelSelectionError
├── ConfigurationError
└── EnvironmentError
    └── EnvironmentCheckError
"""

from __future__ import annotations


class StreamLevelsError(Exception):
    """Base exception for all stream-levels errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- URL validation --------------------------------------------------------

class InvalidURLError(StreamLevelsError):
    """Raised when the provided URL fails validation."""


# --- Metadata / manifest ---------------------------------------------------

class MetadataExtractionError(StreamLevelsError):
    """Raised when yt-dlp fails to extract stream metadata."""


class VideoUnavailableError(StreamLevelsError):
    """Raised when the target video is unavailable (private, removed, etc.)."""


class ManifestError(StreamLevelsError):
    """Raised when no master playlist can be built from the metadata."""


# --- Level selection -------------------------------------------------------

class LevelSelectionError(StreamLevelsError):
    """Raised when the user cannot or does not pick a level."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(StreamLevelsError):
    """Raised for unknown or mistyped plugin options."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(StreamLevelsError):
    """Raised when a required runtime dependency is not available."""


class EnvironmentCheckError(EnvironmentError):
    """Raised when a required environment precondition is not met."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
