"""
Data classes describing catalog content, alternate channels, manifests and the
rendition selection handed to ffmpeg.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlparse


class ContentKind(str, Enum):
    """Whether a piece of content is a race with alternate channels."""

    RACE = "race"
    NON_RACE = "non_race"


class TransportFamily(str, Enum):
    """The manifest grammar a playback URL points to."""

    SEGMENTED_HTTP = "hls"
    MANIFEST_DESCRIPTION = "dash"

    @classmethod
    def from_url(cls, url: str) -> "TransportFamily":
        """A '.mpd' path marks a DASH manifest; everything else is treated as HLS."""
        path = urlparse(url).path
        if path.lower().endswith(".mpd"):
            return cls.MANIFEST_DESCRIPTION
        return cls.SEGMENTED_HTTP


@dataclass(frozen=True)
class ContentRef:
    """The content id and display slug taken from a video page URL."""

    id: str
    name: str


@dataclass(frozen=True)
class ChannelDescriptor:
    """One alternate feed of a race (main feed, data channel, onboard camera...)."""

    type: str
    reporting_name: str = ""
    title: str = ""
    channel_id: int | str | None = None
    playback_url: str | None = None
    driver_first_name: str | None = None
    driver_last_name: str | None = None
    racing_number: int | None = None

    @property
    def is_onboard(self) -> bool:
        return self.type == "obc"

    @property
    def driver_full_name(self) -> str:
        return f"{self.driver_first_name or ''} {self.driver_last_name or ''}".strip()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ChannelDescriptor":
        return cls(
            type=data.get("type", ""),
            reporting_name=data.get("reportingName") or "",
            title=data.get("title") or "",
            channel_id=data.get("channelId"),
            playback_url=data.get("playbackUrl"),
            driver_first_name=data.get("driverFirstName"),
            driver_last_name=data.get("driverLastName"),
            racing_number=data.get("racingNumber"),
        )


@dataclass
class ContentInfo:
    """Catalog metadata for one video, fetched once per run."""

    id: str
    kind: ContentKind
    title: str = ""
    metadata: dict[str, Any] = field(default_factory=dict, repr=False)
    channels: list[ChannelDescriptor] = field(default_factory=list)

    @property
    def is_race(self) -> bool:
        return self.kind is ContentKind.RACE

    @classmethod
    def from_api(cls, container: dict[str, Any]) -> "ContentInfo":
        """
        Builds a ContentInfo from one catalog container.

        Content is a race exactly when its metadata carries 'additionalStreams'.
        """
        metadata = container.get("metadata") or {}
        streams = metadata.get("additionalStreams")
        kind = ContentKind.RACE if streams is not None else ContentKind.NON_RACE
        return cls(
            id=str(container.get("id", "")),
            kind=kind,
            title=metadata.get("title", ""),
            metadata=metadata,
            channels=[ChannelDescriptor.from_api(s) for s in streams or []],
        )


@dataclass(frozen=True)
class ManifestRef:
    """A tokenized, time-limited manifest URL returned by the playback API."""

    url: str
    transport_family: TransportFamily
    stream_type: str = ""

    @classmethod
    def from_url(cls, url: str, stream_type: str = "") -> "ManifestRef":
        return cls(url, TransportFamily.from_url(url), stream_type)

    @property
    def is_dash(self) -> bool:
        return self.transport_family is TransportFamily.MANIFEST_DESCRIPTION


@dataclass(frozen=True)
class RenditionSelection:
    """
    The chosen video and audio tracks of a manifest.

    Track ids are family specific: variant/rendition indices for HLS, the
    manifest's own representation ids for DASH.
    """

    video_track_id: int
    audio_track_id: int
    bandwidth: int
