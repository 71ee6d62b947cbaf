"""Core manifest service — turns extracted metadata into a master playlist.

This service depends on a :class:`~stream_levels.core.protocols.ManifestProvider`
injected at construction time (dependency inversion), keeping the core
free of any external-system imports.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no filesystem access.
* Only :class:`~stream_levels.exceptions.StreamLevelsError` subclasses escape.
* Malformed format entries become variants with ``None`` fields, or are
  skipped when they carry no URL at all.
"""

from __future__ import annotations

from typing import Any

from stream_levels.core.models import (
    MasterPlaylist,
    Resolution,
    StreamMetadata,
    StreamSource,
    Variant,
)
from stream_levels.core.protocols import ManifestProvider
from stream_levels.exceptions import (
    InvalidURLError,
    ManifestError,
    MetadataExtractionError,
    StreamLevelsError,
    append_ytdlp_upgrade_suggestion,
)


class ManifestService:
    """Stateless service that resolves a URL to a :class:`StreamSource`.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`ManifestProvider` protocol.
    """

    def __init__(self, provider: ManifestProvider) -> None:
        self._provider: ManifestProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, url: str) -> StreamSource:
        """Extract metadata and the master playlist for *url* in one fetch.

        Raises
        ------
        InvalidURLError
            If *url* is empty or malformed.
        MetadataExtractionError
            If the backend fails to return metadata.
        VideoUnavailableError
            If the video is confirmed unavailable.
        ManifestError
            If no video variant survives parsing.
        """
        self._validate_url(url)
        info = self._fetch(url)
        master = self.build_master_playlist(info)

        if not master:
            raise ManifestError(
                "No video variants found for this source.",
                hint=append_ytdlp_upgrade_suggestion(
                    "The source may be audio-only or use an unsupported protocol.",
                ),
            )

        return StreamSource(metadata=self._parse_metadata(info), master=master)

    def master_playlist(self, url: str) -> MasterPlaylist:
        """Shortcut for ``load(url).master``."""
        return self.load(url).master

    # ------------------------------------------------------------------
    # URL validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_url(url: str) -> None:
        """Raise :class:`InvalidURLError` for empty or non-HTTP URLs."""
        stripped = url.strip()
        if not stripped:
            raise InvalidURLError("URL must not be empty.")
        if not stripped.startswith(("http://", "https://")):
            raise InvalidURLError(
                f"Invalid URL: {stripped}",
                hint="URL must start with http:// or https://",
            )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, url: str) -> dict[str, Any]:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return self._provider.fetch_manifest(url)
        except StreamLevelsError:
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_metadata(info: dict[str, Any]) -> StreamMetadata:
        raw_duration = info.get("duration")
        duration: int | None = (
            int(raw_duration) if isinstance(raw_duration, (int, float)) else None
        )
        return StreamMetadata(
            id=str(info.get("id", "")),
            title=str(info.get("title", "Unknown")),
            duration=duration,
            webpage_url=str(info.get("webpage_url", "")),
        )

    @staticmethod
    def _parse_bandwidth(raw: dict[str, Any]) -> int | None:
        """``tbr`` (kbit/s, falling back to ``vbr``) as bits per second."""
        for key in ("tbr", "vbr"):
            value = raw.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                return int(round(value * 1000))
        return None

    @staticmethod
    def _parse_resolution(raw: dict[str, Any]) -> Resolution | None:
        width = raw.get("width")
        height = raw.get("height")
        if isinstance(width, int) and isinstance(height, int) and width > 0 and height > 0:
            return Resolution(width=width, height=height)
        return None

    @classmethod
    def _parse_variant(cls, raw: dict[str, Any]) -> Variant | None:
        """Convert one raw format dict, or ``None`` if it is not usable."""
        uri = raw.get("url")
        if not isinstance(uri, str) or not uri:
            return None
        # yt-dlp leaves vcodec unset for HLS variants it did not probe.
        if raw.get("vcodec") == "none":
            return None
        note = raw.get("format_note")
        return Variant(
            uri=uri,
            bandwidth=cls._parse_bandwidth(raw),
            name=note if isinstance(note, str) and note else None,
            resolution=cls._parse_resolution(raw),
        )

    @classmethod
    def build_master_playlist(cls, info: dict[str, Any]) -> MasterPlaylist:
        """Build a :class:`MasterPlaylist` from a raw info dict.

        Formats keep their extraction order; repeated URIs are dropped.
        """
        raw_formats: object = info.get("formats")
        if not isinstance(raw_formats, list):
            return MasterPlaylist(playlists=())

        seen: set[str] = set()
        variants: list[Variant] = []
        for entry in raw_formats:
            if not isinstance(entry, dict):
                continue
            variant = cls._parse_variant(entry)
            if variant is None or variant.uri in seen:
                continue
            seen.add(variant.uri)
            variants.append(variant)
        return MasterPlaylist(playlists=tuple(variants))
