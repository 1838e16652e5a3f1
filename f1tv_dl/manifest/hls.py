"""
Parsing and rendition selection for HLS master playlists.
"""

import logging
from dataclasses import dataclass, field

import m3u8
from m3u8.parser import ParseError as M3U8ParseError

from f1tv_dl.exceptions import ParseError, RenditionNotFoundError
from f1tv_dl.models.content import RenditionSelection, TransportFamily

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioTrack:
    language: str | None
    name: str | None = None
    group_id: str | None = None


@dataclass(frozen=True)
class Variant:
    bandwidth: int
    resolution: tuple[int, int] | None = None
    audio: list[AudioTrack] = field(default_factory=list)


@dataclass(frozen=True)
class HLSManifest:
    """The non-I-frame variants of a master playlist, in document order."""

    variants: list[Variant]
    family: TransportFamily = TransportFamily.SEGMENTED_HTTP


def parse_hls(text: str, uri: str | None = None) -> HLSManifest:
    """
    Parses an HLS master playlist.

    I-frame-only variants (EXT-X-I-FRAME-STREAM-INF) are dropped, so variant
    indices line up with the programs ffmpeg exposes for the playlist.
    """
    text = text.lstrip("\ufeff")
    if not text.lstrip().startswith("#EXTM3U"):
        raise ParseError("Manifest is not an HLS playlist (missing #EXTM3U header).")

    try:
        playlist = m3u8.loads(text, uri=uri)
    except (ValueError, AttributeError, M3U8ParseError) as e:
        raise ParseError(f"Could not parse HLS playlist: {e}") from e

    variants = []
    for pl in playlist.playlists:
        info = pl.stream_info
        audio = [
            AudioTrack(language=m.language, name=m.name, group_id=m.group_id)
            for m in pl.media
            if (m.type or "").upper() == "AUDIO"
        ]
        variants.append(
            Variant(
                bandwidth=int(info.bandwidth or 0),
                resolution=tuple(info.resolution) if info.resolution else None,
                audio=audio,
            )
        )

    log.debug(
        f"Parsed HLS playlist: {len(variants)} variants, "
        f"{len(playlist.iframe_playlists)} I-frame variants skipped."
    )
    return HLSManifest(variants=variants)


def select_hls_rendition(
    manifest: HLSManifest, language: str, resolution: tuple[int, int] | None
) -> RenditionSelection:
    """
    Selects a variant and an audio rendition from a parsed HLS playlist.

    With no resolution the highest bandwidth wins (first one on ties);
    otherwise the last variant with exactly that resolution wins.
    """
    video_id = -1
    chosen: Variant | None = None
    bandwidth = 0

    for i, variant in enumerate(manifest.variants):
        if resolution is None:
            if variant.bandwidth > bandwidth:
                bandwidth = variant.bandwidth
                chosen = variant
                video_id = i
        elif variant.resolution == resolution:
            bandwidth = variant.bandwidth
            chosen = variant
            video_id = i

    if chosen is None:
        wanted = "x".join(map(str, resolution)) if resolution else "best"
        raise RenditionNotFoundError(
            f"No HLS variant matches video size '{wanted}' "
            f"({len(manifest.variants)} variants available)."
        )

    for j, track in enumerate(chosen.audio):
        if track.language == language:
            return RenditionSelection(video_id, j, bandwidth)

    available = ", ".join(sorted({t.language or "?" for t in chosen.audio})) or "none"
    raise RenditionNotFoundError(
        f"No '{language}' audio track in HLS variant {video_id} "
        f"(available: {available})."
    )
