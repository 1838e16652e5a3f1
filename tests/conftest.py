import pytest

from f1tv_dl.models.content import ChannelDescriptor

HLS_MASTER = """#EXTM3U
#EXT-X-VERSION:4
#EXT-X-INDEPENDENT-SEGMENTS
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aac",LANGUAGE="eng",NAME="English",DEFAULT=YES,AUTOSELECT=YES,URI="audio/eng.m3u8"
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aac",LANGUAGE="deu",NAME="Deutsch",DEFAULT=NO,AUTOSELECT=YES,URI="audio/deu.m3u8"
#EXT-X-STREAM-INF:BANDWIDTH=1000,RESOLUTION=640x360,CODECS="avc1.4d401e,mp4a.40.2",AUDIO="aac"
video/360.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=5000,RESOLUTION=1280x720,CODECS="avc1.4d401f,mp4a.40.2",AUDIO="aac"
video/720.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=3000,RESOLUTION=1920x1080,CODECS="avc1.640028,mp4a.40.2",AUDIO="aac"
video/1080.m3u8
#EXT-X-I-FRAME-STREAM-INF:BANDWIDTH=9000,RESOLUTION=1920x1080,URI="video/1080_iframes.m3u8"
"""

DASH_MPD = """<?xml version="1.0" encoding="UTF-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011" type="static" mediaPresentationDuration="PT1H0M0S" minBufferTime="PT2S" profiles="urn:mpeg:dash:profile:isoff-live:2011">
  <Period id="0" start="PT0S">
    <AdaptationSet id="1" mimeType="video/mp4" segmentAlignment="true">
      <Representation id="1" bandwidth="1500000" width="960" height="540" codecs="avc1.4d401f"/>
      <Representation id="2" bandwidth="6000000" width="1920" height="1080" codecs="avc1.640028"/>
      <Representation id="3" bandwidth="3000000" width="1280" height="720" codecs="avc1.4d401f"/>
    </AdaptationSet>
    <AdaptationSet id="2" mimeType="audio/mp4" lang="deu">
      <Representation id="5" bandwidth="128000" codecs="mp4a.40.2"/>
    </AdaptationSet>
    <AdaptationSet id="3" mimeType="audio/mp4" lang="eng">
      <Representation id="7" bandwidth="128000" codecs="mp4a.40.2"/>
      <Representation id="8" bandwidth="64000" codecs="mp4a.40.2"/>
    </AdaptationSet>
  </Period>
</MPD>
"""


def make_channel(**kwargs) -> ChannelDescriptor:
    defaults = {"type": "additional", "reporting_name": "", "title": ""}
    defaults.update(kwargs)
    return ChannelDescriptor(**defaults)


@pytest.fixture
def race_channels() -> list[ChannelDescriptor]:
    return [
        make_channel(
            type="main",
            reporting_name="INTERNATIONAL",
            title="INTERNATIONAL",
            channel_id=1011,
            playback_url="CONTENT/PLAY?contentId=1000005104",
        ),
        make_channel(
            type="additional",
            reporting_name="F1 LIVE",
            title="F1 LIVE",
            channel_id=1012,
            playback_url="CONTENT/PLAY?channelId=1012&contentId=1000005104",
        ),
        make_channel(
            type="obc",
            reporting_name="HAM",
            title="HAM",
            channel_id=1033,
            playback_url="CONTENT/PLAY?channelId=1033&contentId=1000005104",
            driver_first_name="Lewis",
            driver_last_name="Hamilton",
            racing_number=44,
        ),
        make_channel(
            type="obc",
            reporting_name="VER",
            title="VER",
            channel_id=1034,
            playback_url="CONTENT/PLAY?channelId=1034&contentId=1000005104",
            driver_first_name="Max",
            driver_last_name="Verstappen",
            racing_number=1,
        ),
    ]


@pytest.fixture
def race_container() -> dict:
    return {
        "id": "1000005104",
        "metadata": {
            "title": "Bahrain GP - Race",
            "contentType": "VIDEO",
            "additionalStreams": [
                {
                    "type": "main",
                    "reportingName": "INTERNATIONAL",
                    "title": "INTERNATIONAL",
                    "channelId": 1011,
                    "playbackUrl": "CONTENT/PLAY?contentId=1000005104",
                },
                {
                    "type": "additional",
                    "reportingName": "F1 LIVE",
                    "title": "F1 LIVE",
                    "channelId": 1012,
                    "playbackUrl": "CONTENT/PLAY?channelId=1012&contentId=1000005104",
                },
                {
                    "type": "obc",
                    "reportingName": "HAM",
                    "title": "HAM",
                    "channelId": 1033,
                    "playbackUrl": "CONTENT/PLAY?channelId=1033&contentId=1000005104",
                    "driverFirstName": "Lewis",
                    "driverLastName": "Hamilton",
                    "racingNumber": 44,
                },
            ],
        },
    }


@pytest.fixture
def hls_master() -> str:
    return HLS_MASTER


@pytest.fixture
def dash_mpd() -> str:
    return DASH_MPD
