"""
Finds alternate race channels (onboard cameras, data channel, international
feed...) by a free-text query.
"""

from f1tv_dl.models.content import ChannelDescriptor

DEFAULT_CHANNEL = "F1 LIVE"
INTERNATIONAL_CHANNEL = "INTERNATIONAL"


def _candidate_fields(channel: ChannelDescriptor) -> list[str]:
    fields = [channel.reporting_name, channel.title]
    if channel.is_onboard:
        fields += [channel.driver_full_name, str(channel.racing_number)]
    return fields


def find_channel(
    channels: list[ChannelDescriptor], query: str
) -> ChannelDescriptor | None:
    """
    Returns the first channel with a field containing the query, or None.

    Matching is a case-sensitive substring test against the reporting name and
    title, plus driver name and racing number for onboard cameras.
    """
    for channel in channels:
        if any(query in field for field in _candidate_fields(channel)):
            return channel
    return None


def playback_channel_id(channel: ChannelDescriptor) -> int | str | None:
    """
    Returns the channel id to send to the playback API.

    A channel whose playback URL carries no channelId parameter is the main
    feed and is requested by content id alone.
    """
    if channel.playback_url is not None and "channelId" not in channel.playback_url:
        return None
    return channel.channel_id
