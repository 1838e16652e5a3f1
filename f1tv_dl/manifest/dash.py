"""
Parsing and rendition selection for MPEG-DASH manifests.

A DASH manifest is parsed twice. The structured mpegdash parse gives the video
representations with their bandwidth and resolution; a plain lxml tree of the
same document is walked to find the audio AdaptationSet for a language, since
audio languages are matched on raw AdaptationSet attributes.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from xml.parsers.expat import ExpatError

from lxml import etree
from mpegdash.parser import MPEGDASHParser

from f1tv_dl.exceptions import ParseError, RenditionNotFoundError
from f1tv_dl.models.content import RenditionSelection, TransportFamily

log = logging.getLogger(__name__)

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


@dataclass(frozen=True)
class DashPlaylist:
    """A video representation, keyed the way ffmpeg's '0:v:m:id:' expects."""

    name: str
    bandwidth: int
    resolution: tuple[int, int] | None = None


@dataclass(frozen=True)
class DashManifest:
    playlists: list[DashPlaylist]
    tree: etree._Element
    family: TransportFamily = TransportFamily.MANIFEST_DESCRIPTION


def _is_video(adaptation_set, representation) -> bool:
    mime_type = (
        getattr(representation, "mime_type", None)
        or getattr(adaptation_set, "mime_type", None)
        or ""
    )
    content_type = getattr(adaptation_set, "content_type", None) or ""
    return mime_type.startswith("video/") or content_type == "video"


def _localname(node: etree._Element) -> str:
    if not isinstance(node.tag, str):
        return ""
    return etree.QName(node).localname


def _without_prefixes(root: etree._Element) -> str:
    """Serializes a copy of the tree with every element moved out of its namespace."""
    copy = deepcopy(root)
    for node in copy.iter():
        if isinstance(node.tag, str):
            node.tag = etree.QName(node).localname
    etree.cleanup_namespaces(copy)
    return etree.tostring(copy, encoding="unicode")


def _parse_playlists(text: str) -> list[DashPlaylist]:
    try:
        mpd = MPEGDASHParser.parse(text)
    except (ExpatError, ValueError, TypeError, AttributeError) as e:
        raise ParseError(f"Could not parse DASH manifest: {e}") from e

    playlists = []
    for period in mpd.periods or []:
        for aset in period.adaptation_sets or []:
            for rep in aset.representations or []:
                if not _is_video(aset, rep):
                    continue
                width = rep.width or aset.width
                height = rep.height or aset.height
                playlists.append(
                    DashPlaylist(
                        name=str(rep.id),
                        bandwidth=int(rep.bandwidth or 0),
                        resolution=(int(width), int(height))
                        if width and height
                        else None,
                    )
                )
    return playlists


def parse_dash(text: str) -> DashManifest:
    """Parses a DASH manifest into its video playlists and its raw XML tree."""
    try:
        tree = etree.fromstring(text.encode("utf-8"), parser=_XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Could not parse DASH manifest XML: {e}") from e
    if tree is None or _localname(tree) != "MPD":
        raise ParseError("Manifest is not a DASH document (no MPD element).")

    # mpegdash only recognises an unprefixed <MPD> root
    structured = text if tree.prefix is None else _without_prefixes(tree)
    playlists = _parse_playlists(structured)

    log.debug(f"Parsed DASH manifest: {len(playlists)} video representations.")
    return DashManifest(playlists=playlists, tree=tree)


def _is_audio_set(node: etree._Element) -> bool:
    mime_type = node.get("mimeType") or ""
    return mime_type.startswith("audio/") or node.get("contentType") == "audio"


def find_audio_representation_id(tree: etree._Element, language: str) -> int:
    """
    Returns the id of the first Representation in the first audio
    AdaptationSet tagged with the language.
    """
    for node in tree.iter():
        if _localname(node) != "AdaptationSet":
            continue
        if not _is_audio_set(node) or node.get("lang") != language:
            continue
        for child in node:
            if _localname(child) != "Representation":
                continue
            rep_id = child.get("id")
            try:
                return int(rep_id)
            except (TypeError, ValueError) as e:
                raise ParseError(
                    f"Audio representation id '{rep_id}' is not numeric."
                ) from e
        break

    raise RenditionNotFoundError(f"No '{language}' audio track in DASH manifest.")


def select_dash_rendition(
    manifest: DashManifest, language: str, resolution: tuple[int, int] | None
) -> RenditionSelection:
    """
    Selects a video representation and an audio representation id.

    Video selection follows the HLS policy: highest bandwidth with the first
    one winning ties, or the last representation with the exact resolution.
    """
    chosen: DashPlaylist | None = None
    bandwidth = 0

    for playlist in manifest.playlists:
        if resolution is None:
            if playlist.bandwidth > bandwidth:
                bandwidth = playlist.bandwidth
                chosen = playlist
        elif playlist.resolution == resolution:
            bandwidth = playlist.bandwidth
            chosen = playlist

    if chosen is None:
        wanted = "x".join(map(str, resolution)) if resolution else "best"
        raise RenditionNotFoundError(
            f"No DASH representation matches video size '{wanted}' "
            f"({len(manifest.playlists)} video representations available)."
        )

    try:
        video_id = int(chosen.name)
    except ValueError as e:
        raise ParseError(
            f"Video representation id '{chosen.name}' is not numeric."
        ) from e

    audio_id = find_audio_representation_id(manifest.tree, language)
    return RenditionSelection(video_id, audio_id, bandwidth)
