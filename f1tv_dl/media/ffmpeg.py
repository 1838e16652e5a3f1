"""
Builds ffmpeg argument lists from a rendition selection and runs ffmpeg,
rendering its progress line on the console.
"""

import asyncio
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from f1tv_dl.exceptions import FFmpegError
from f1tv_dl.models.content import ManifestRef, RenditionSelection

log = logging.getLogger(__name__)

VOCAL_REMOVAL_FILTER = "pan=stereo|c0=c0|c1=-1*c1,aformat=channel_layouts=mono"


@dataclass(frozen=True)
class SecondaryAudio:
    """The INTERNATIONAL feed commentary added as a second audio track."""

    manifest: ManifestRef
    selection: RenditionSelection
    language: str
    itsoffset: str

    @property
    def metadata_language(self) -> str:
        # English commentary on the international feed is the Sky broadcast
        return "Sky" if self.language == "eng" else self.language


def video_map(manifest: ManifestRef, selection: RenditionSelection) -> str:
    if manifest.is_dash:
        return f"0:v:m:id:{selection.video_track_id}"
    return f"0:p:{selection.video_track_id}:v"


def audio_map(
    manifest: ManifestRef, selection: RenditionSelection, language: str, index: int = 0
) -> str:
    if manifest.is_dash:
        return f"{index}:a:m:language:{language}"
    return f"{index}:p:{selection.video_track_id}:a:{selection.audio_track_id}"


def build_download_args(
    manifest: ManifestRef,
    selection: RenditionSelection,
    output_path: Path,
    audio_language: str,
    output_format: str = "mp4",
    secondary: SecondaryAudio | None = None,
) -> list[str]:
    """Builds the ffmpeg arguments for a video download."""
    args = ["-loglevel", "error", "-stats", "-i", manifest.url]
    stream_mapping = [
        "-map",
        video_map(manifest, selection),
        "-map",
        audio_map(manifest, selection, audio_language),
    ]
    codec_params = ["-c:v", "copy", "-c:a", "copy"]

    if secondary is not None:
        args += ["-itsoffset", secondary.itsoffset, "-i", secondary.manifest.url]
        stream_mapping += [
            "-map",
            audio_map(secondary.manifest, secondary.selection, secondary.language, 1),
        ]
        codec_params += [
            "-metadata:s:a:0",
            f"language={audio_language}",
            "-disposition:a:0",
            "default",
            "-metadata:s:a:1",
            f"language={secondary.metadata_language}",
            "-disposition:a:1",
            "0",
        ]

    args += stream_mapping + codec_params
    if output_format == "mp4":
        args += ["-bsf:a", "aac_adtstoasc", "-movflags", "faststart"]
    args += ["-y", str(output_path)]
    return args


def build_audio_only_args(
    manifest: ManifestRef, output_path: Path, audio_language: str
) -> list[str]:
    """Builds the ffmpeg arguments for an audio-only download."""
    return [
        "-loglevel",
        "error",
        "-stats",
        "-i",
        manifest.url,
        "-map",
        f"0:a:m:language:{audio_language}",
        "-vn",
        "-c:a",
        "copy",
        "-y",
        str(output_path),
    ]


def build_vocal_removal_args(input_path: Path, output_path: Path) -> list[str]:
    """Builds the ffmpeg arguments that cancel centre-panned commentary."""
    return [
        "-loglevel",
        "error",
        "-stats",
        "-i",
        str(input_path),
        "-af",
        VOCAL_REMOVAL_FILTER,
        "-c:a",
        "aac",
        "-b:a",
        "256k",
        "-y",
        str(output_path),
    ]


class FFmpegRunner:
    """Runs ffmpeg and mirrors its latest progress line to the console."""

    def __init__(self, ffmpeg_path: str = "ffmpeg", console: Console | None = None):
        self.ffmpeg_path = ffmpeg_path
        self.console = console or Console()

    def resolve_binary(self) -> str:
        binary = shutil.which(self.ffmpeg_path)
        if binary is None:
            raise FFmpegError(
                f"ffmpeg not found at '{self.ffmpeg_path}'. Install ffmpeg or set "
                "'ffmpeg_path' in the configuration."
            )
        return binary

    async def run(self, args: list[str]) -> None:
        """
        Runs ffmpeg to completion.

        Raises:
            FFmpegError: If ffmpeg cannot be started or exits with a non-zero code.
        """
        binary = self.resolve_binary()
        log.debug(f"Executing command: {binary} {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(
                binary,
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FFmpegError(f"Failed to start ffmpeg: {e}") from e

        last_line = ""
        with self.console.status("[cyan]Starting ffmpeg...[/cyan]") as status:
            # ffmpeg rewrites its stats line with carriage returns
            while chunk := await process.stderr.read(4096):
                lines = chunk.decode("utf-8", errors="replace").replace("\r", "\n")
                for line in lines.split("\n"):
                    if line.strip():
                        last_line = line.strip()
                        status.update(f"[dim]{escape(last_line)}[/dim]")
            return_code = await process.wait()

        if return_code != 0:
            raise FFmpegError(
                f"ffmpeg exited with code {return_code}: {last_line or 'no output'}"
            )
