import pytest

from f1tv_dl.exceptions import ParseError, RenditionNotFoundError
from f1tv_dl.manifest.dash import (
    find_audio_representation_id,
    parse_dash,
    select_dash_rendition,
)

SINGLE_AUDIO_MPD = """<?xml version="1.0"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011" type="static">
  <Period>
    <AdaptationSet mimeType="video/mp4" width="1280" height="720">
      <Representation id="3" bandwidth="2500000"/>
    </AdaptationSet>
    <AdaptationSet mimeType="audio/mp4" lang="eng">
      <Representation id="7" bandwidth="128000"/>
    </AdaptationSet>
  </Period>
</MPD>
"""


def test_parse_dash_lists_video_representations(dash_mpd):
    manifest = parse_dash(dash_mpd)
    assert [p.name for p in manifest.playlists] == ["1", "2", "3"]
    assert manifest.playlists[1].bandwidth == 6000000
    assert manifest.playlists[1].resolution == (1920, 1080)


def test_resolution_inherited_from_adaptation_set():
    manifest = parse_dash(SINGLE_AUDIO_MPD)
    assert manifest.playlists[0].resolution == (1280, 720)


def test_audio_representation_id():
    manifest = parse_dash(SINGLE_AUDIO_MPD)
    assert find_audio_representation_id(manifest.tree, "eng") == 7


def test_first_representation_of_language_set(dash_mpd):
    manifest = parse_dash(dash_mpd)
    assert find_audio_representation_id(manifest.tree, "eng") == 7
    assert find_audio_representation_id(manifest.tree, "deu") == 5


def test_missing_audio_language_raises(dash_mpd):
    manifest = parse_dash(dash_mpd)
    with pytest.raises(RenditionNotFoundError):
        find_audio_representation_id(manifest.tree, "fra")


def test_best_uses_representation_id(dash_mpd):
    selection = select_dash_rendition(parse_dash(dash_mpd), "eng", None)
    assert selection.video_track_id == 2
    assert selection.audio_track_id == 7
    assert selection.bandwidth == 6000000


def test_exact_resolution(dash_mpd):
    selection = select_dash_rendition(parse_dash(dash_mpd), "eng", (1280, 720))
    assert selection.video_track_id == 3


def test_unknown_resolution_raises(dash_mpd):
    with pytest.raises(RenditionNotFoundError):
        select_dash_rendition(parse_dash(dash_mpd), "eng", (3840, 2160))


def test_non_numeric_video_id_raises():
    text = SINGLE_AUDIO_MPD.replace('id="3"', 'id="video-hd"')
    with pytest.raises(ParseError):
        select_dash_rendition(parse_dash(text), "eng", None)


def test_rejects_non_dash_body():
    with pytest.raises(ParseError):
        parse_dash("#EXTM3U\n")


def test_rejects_malformed_xml():
    with pytest.raises(ParseError):
        parse_dash("<MPD><Period></MPD>")


def test_namespace_prefixed_manifest():
    text = """<?xml version="1.0"?>
<mpd:MPD xmlns:mpd="urn:mpeg:dash:schema:mpd:2011" type="static">
  <mpd:Period>
    <mpd:AdaptationSet mimeType="video/mp4">
      <mpd:Representation id="4" bandwidth="4000000" width="1920" height="1080"/>
    </mpd:AdaptationSet>
    <mpd:AdaptationSet mimeType="audio/mp4" lang="eng">
      <mpd:Representation id="9" bandwidth="128000"/>
    </mpd:AdaptationSet>
  </mpd:Period>
</mpd:MPD>
"""
    selection = select_dash_rendition(parse_dash(text), "eng", None)
    assert selection.video_track_id == 4
    assert selection.audio_track_id == 9


def test_rejects_xml_that_is_not_a_manifest():
    with pytest.raises(ParseError, match="no MPD element"):
        parse_dash("<html><body>Access denied</body></html>")
