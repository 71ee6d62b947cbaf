"""yt-dlp backed implementation of :class:`~stream_levels.core.protocols.ManifestProvider`.

yt-dlp resolves a page or ``.m3u8`` URL to the variant list of its
master playlist.  The provider asks for that single stream only and
hands the core a trimmed dict: the source fields the selector shows
plus, per variant, the keys the master playlist is built from.

This module is the **only** place in the codebase that imports
``yt_dlp``.  Extraction failures are classified by message into
:class:`~stream_levels.exceptions.StreamLevelsError` subclasses here;
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from stream_levels.exceptions import (
    EnvironmentError,
    InvalidURLError,
    ManifestError,
    MetadataExtractionError,
    StreamLevelsError,
    VideoUnavailableError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)

SOURCE_KEYS: tuple[str, ...] = ("id", "title", "duration", "webpage_url")
"""Top-level fields kept from the extraction result."""

VARIANT_KEYS: tuple[str, ...] = (
    "url",
    "protocol",
    "tbr",
    "vbr",
    "width",
    "height",
    "format_note",
    "vcodec",
)
"""Per-format fields the master playlist is built from."""


@dataclass(frozen=True, slots=True)
class _FailureRule:
    """Maps yt-dlp error messages containing any of *signals* to *error*."""

    signals: tuple[str, ...]
    error: type[StreamLevelsError]
    hint: str | None = None


# First match wins.
_FAILURE_RULES: tuple[_FailureRule, ...] = (
    _FailureRule(
        ("unsupported url",),
        InvalidURLError,
        "Point at an .m3u8 master playlist or a page yt-dlp can extract.",
    ),
    _FailureRule(
        ("no video formats found", "failed to download m3u8", "m3u8 information"),
        ManifestError,
        append_ytdlp_upgrade_suggestion("The master playlist could not be read."),
    ),
    _FailureRule(
        (
            "private video",
            "video unavailable",
            "has been removed",
            "not available from your location",
            "live event will begin",
        ),
        VideoUnavailableError,
        "The stream may be private, removed, geo-restricted or not live yet.",
    ),
)


def _import_ytdlp() -> Any:
    """Import yt-dlp lazily so the CLI bootstraps without it."""
    try:
        import yt_dlp
        import yt_dlp.utils
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "yt-dlp is not installed. Install with: pip install yt-dlp",
        ) from exc
    return yt_dlp


class YtDlpManifestProvider:
    """Concrete :class:`ManifestProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpManifestProvider()
        manifest = provider.fetch_manifest("https://example.com/live/master.m3u8")
        manifest["formats"]  # one trimmed dict per variant
    """

    @staticmethod
    def _build_opts() -> dict[str, Any]:
        """Options for listing the variants of one stream."""
        return {
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "skip_download": True,
            # yt-dlp's own diagnostics end up in the package log.
            "logger": logger,
        }

    def fetch_manifest(self, url: str) -> dict[str, Any]:
        """Return the source fields and trimmed variant list for *url*.

        Raises
        ------
        InvalidURLError
            When yt-dlp has no extractor for *url*.
        ManifestError
            When the master playlist cannot be read, or *url* resolves
            to a playlist of several streams.
        VideoUnavailableError
            When the stream is private, removed, geo-blocked or not live yet.
        MetadataExtractionError
            For any other extraction failure.
        EnvironmentError
            When yt-dlp is not installed.
        """
        yt_dlp = _import_ytdlp()

        logger.debug("Listing variants of %s", url)
        try:
            with yt_dlp.YoutubeDL(self._build_opts()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            raise self.classify_failure(str(exc)) from exc
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if not isinstance(info, dict):
            raise MetadataExtractionError(
                "yt-dlp returned no stream description for the given URL.",
                hint="The URL may not point to a playable stream.",
            )

        if info.get("_type") == "playlist":
            entries = info.get("entries") or ()
            raise ManifestError(
                f"URL resolves to a playlist of {len(list(entries))} entries, not a single stream.",
                hint="Pass the URL of one stream or its .m3u8 master playlist.",
            )

        return self.trim(info)

    # ------------------------------------------------------------------
    # Result shaping
    # ------------------------------------------------------------------

    @staticmethod
    def trim(info: dict[str, Any]) -> dict[str, Any]:
        """Reduce an extraction result to what the core consumes.

        A result without a ``formats`` list but with a top-level ``url``
        is a single-variant source and becomes a one-entry list.
        """
        manifest: dict[str, Any] = {key: info[key] for key in SOURCE_KEYS if key in info}

        raw_formats = info.get("formats")
        if not isinstance(raw_formats, list):
            raw_formats = [info] if info.get("url") else []

        manifest["formats"] = [
            {key: entry[key] for key in VARIANT_KEYS if key in entry}
            for entry in raw_formats
            if isinstance(entry, dict)
        ]
        logger.debug("yt-dlp listed %d variant(s)", len(manifest["formats"]))
        return manifest

    @staticmethod
    def classify_failure(message: str) -> StreamLevelsError:
        """Return the domain exception for a yt-dlp error *message*."""
        lowered = message.lower()
        for rule in _FAILURE_RULES:
            if any(signal in lowered for signal in rule.signals):
                return rule.error(message, hint=rule.hint)
        return MetadataExtractionError(
            message,
            hint=append_ytdlp_upgrade_suggestion("Check the URL and your network connection."),
        )
