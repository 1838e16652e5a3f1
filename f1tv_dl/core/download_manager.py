"""
The main orchestrator: resolves a video page URL to a manifest, selects the
renditions and hands them to ffmpeg.
"""

import logging
from pathlib import Path

from f1tv_dl.api.client import F1TVAPIClient
from f1tv_dl.exceptions import NotFoundError
from f1tv_dl.manifest import parse_manifest, select_rendition
from f1tv_dl.media.ffmpeg import (
    FFmpegRunner,
    SecondaryAudio,
    build_audio_only_args,
    build_download_args,
    build_vocal_removal_args,
)
from f1tv_dl.models.config import AppConfig
from f1tv_dl.models.content import ContentInfo, ManifestRef, RenditionSelection
from f1tv_dl.utils.path import build_output_path, create_dir, no_vocals_path
from f1tv_dl.utils.url import extract_content_ref

from .channels import (
    DEFAULT_CHANNEL,
    INTERNATIONAL_CHANNEL,
    find_channel,
    playback_channel_id,
)

log = logging.getLogger(__name__)


class DownloadManager:
    """Orchestrates one download run. Every step runs sequentially."""

    def __init__(
        self,
        config: AppConfig,
        api_client: F1TVAPIClient,
        runner: FFmpegRunner | None = None,
    ):
        self.config = config
        self.api_client = api_client
        self.runner = runner or FFmpegRunner(config.ffmpeg_path)

    async def resolve_manifest(
        self, content: ContentInfo, channel: str | None = None
    ) -> ManifestRef:
        """
        Resolves the tokenized manifest for a content item and optional channel.

        Races without a channel query play the 'F1 LIVE' channel. The channel
        query is ignored for content without alternate channels.
        """
        if not content.is_race:
            if channel:
                log.warning(
                    f"[yellow]'{content.title or content.id}' has no alternate "
                    f"channels; ignoring channel '{channel}'.[/yellow]"
                )
            return await self.api_client.resolve_playback_url(content.id)

        query = channel or DEFAULT_CHANNEL
        descriptor = find_channel(content.channels, query)
        if descriptor is None:
            raise NotFoundError(
                f"No channel matching '{query}'. Use the 'channels' command to list "
                "the available channels."
            )
        log.debug(f"Using channel '{descriptor.title}' for query '{query}'.")
        return await self.api_client.resolve_playback_url(
            content.id, playback_channel_id(descriptor)
        )

    async def select(
        self, manifest: ManifestRef, language: str, video_size: str
    ) -> RenditionSelection:
        """Fetches a manifest and selects its video and audio renditions."""
        body = await self.api_client.fetch_manifest(manifest)
        parsed = parse_manifest(manifest, body)
        return select_rendition(parsed, language, video_size)

    def output_path_for(self, url: str, content: ContentInfo) -> Path:
        channel = self.config.channel if content.is_race else None
        return build_output_path(
            extract_content_ref(url).name,
            self.config.output_extension,
            self.config.output_directory,
            channel,
        )

    async def build_args(
        self, url: str, content: ContentInfo, manifest: ManifestRef, output_path: Path
    ) -> list[str]:
        """Builds the ffmpeg arguments for the configured kind of download."""
        config = self.config
        if config.audio_only:
            return build_audio_only_args(manifest, output_path, config.audio_stream)

        selection = await self.select(manifest, config.audio_stream, config.video_size)

        secondary = None
        if config.international_audio and content.is_race:
            log.info(
                f"Adding {config.international_audio} commentary as a second "
                "audio track."
            )
            intl_manifest = await self.resolve_manifest(content, INTERNATIONAL_CHANNEL)
            intl_selection = await self.select(
                intl_manifest, config.international_audio, "best"
            )
            secondary = SecondaryAudio(
                intl_manifest,
                intl_selection,
                config.international_audio,
                config.itsoffset,
            )

        return build_download_args(
            manifest,
            selection,
            output_path,
            config.audio_stream,
            config.format,
            secondary,
        )

    async def download(self, url: str) -> Path:
        """
        Runs a full download for a video page URL and returns the output path.
        """
        content = await self.api_client.fetch_content_info(url)
        manifest = await self.resolve_manifest(content, self.config.channel)

        output_path = self.output_path_for(url, content)
        if output_path.parent != Path("."):
            create_dir(output_path.parent)

        args = await self.build_args(url, content, manifest, output_path)

        log.info(f"Output file: [green]{output_path}[/green]")
        kind = "audio-only" if self.config.audio_only else "video"
        log.info(f"Starting {kind} download...")
        await self.runner.run(args)
        log.info("[green]Download complete.[/green]")

        if self.config.remove_vocals:
            stripped_path = no_vocals_path(output_path)
            log.info("Starting vocal removal process...")
            log.info(f"Output file: [green]{stripped_path}[/green]")
            await self.runner.run(build_vocal_removal_args(output_path, stripped_path))
            log.info("[green]Vocal removal complete.[/green]")

        return output_path
