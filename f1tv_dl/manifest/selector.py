"""
Family-agnostic entry points: parse a manifest body according to its family
and select the renditions to hand to ffmpeg.
"""

import logging

from f1tv_dl.models.content import (
    ManifestRef,
    RenditionSelection,
    TransportFamily,
)
from f1tv_dl.utils.formatting import format_bandwidth, parse_resolution

from .dash import DashManifest, parse_dash, select_dash_rendition
from .hls import HLSManifest, parse_hls, select_hls_rendition

log = logging.getLogger(__name__)

ParsedManifest = HLSManifest | DashManifest


def parse_manifest(manifest: ManifestRef, body: str) -> ParsedManifest:
    """Parses a manifest body with the parser for the manifest's family."""
    if manifest.transport_family is TransportFamily.MANIFEST_DESCRIPTION:
        return parse_dash(body)
    return parse_hls(body, uri=manifest.url)


def select_rendition(
    parsed: ParsedManifest, language: str, video_size: str = "best"
) -> RenditionSelection:
    """
    Selects one video rendition and one audio track from a parsed manifest.

    Args:
        parsed: The result of parse_manifest.
        language: Audio language tag, e.g. 'eng'.
        video_size: 'best' or '<width>x<height>'.

    Raises:
        InvalidSelectorError: If video_size is malformed.
        RenditionNotFoundError: If no video or audio rendition matches.
    """
    resolution = parse_resolution(video_size)
    if parsed.family is TransportFamily.MANIFEST_DESCRIPTION:
        selection = select_dash_rendition(parsed, language, resolution)
    else:
        selection = select_hls_rendition(parsed, language, resolution)

    log.debug(
        f"Selected {parsed.family.value} video {selection.video_track_id} "
        f"({format_bandwidth(selection.bandwidth)}), "
        f"audio {selection.audio_track_id} ({language})"
    )
    return selection
