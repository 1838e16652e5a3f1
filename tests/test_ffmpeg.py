from pathlib import Path
from unittest.mock import patch

import pytest

from f1tv_dl.exceptions import FFmpegError
from f1tv_dl.media.ffmpeg import (
    FFmpegRunner,
    SecondaryAudio,
    build_audio_only_args,
    build_download_args,
    build_vocal_removal_args,
)
from f1tv_dl.models.content import ManifestRef, RenditionSelection

HLS = ManifestRef.from_url("https://cdn.example/live/index.m3u8?token=abc", "HLS")
DASH = ManifestRef.from_url("https://cdn.example/live/manifest.mpd?token=abc", "DASH")
OUT = Path("race.mp4")


def _maps(args: list[str]) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == "-map"]


def test_hls_download_maps_program_streams():
    args = build_download_args(HLS, RenditionSelection(3, 1, 6000), OUT, "eng")
    assert _maps(args) == ["0:p:3:v", "0:p:3:a:1"]
    assert args[-2:] == ["-y", "race.mp4"]
    assert "aac_adtstoasc" in args


def test_dash_download_maps_by_id_and_language():
    args = build_download_args(DASH, RenditionSelection(2, 7, 6000), OUT, "eng")
    assert _maps(args) == ["0:v:m:id:2", "0:a:m:language:eng"]


def test_ts_output_skips_mp4_flags():
    args = build_download_args(HLS, RenditionSelection(0, 0, 1), Path("race.ts"), "eng", "ts")
    assert "-movflags" not in args


def test_secondary_audio_input_and_metadata():
    secondary = SecondaryAudio(HLS, RenditionSelection(1, 2, 5000), "eng", "-00:00:04.750")
    args = build_download_args(HLS, RenditionSelection(3, 0, 6000), OUT, "eng", secondary=secondary)

    assert args.count("-i") == 2
    offset_at = args.index("-itsoffset")
    assert args[offset_at + 1] == "-00:00:04.750"
    assert args[offset_at + 2 : offset_at + 4] == ["-i", HLS.url]
    assert _maps(args)[-1] == "1:p:1:a:2"
    assert "language=Sky" in args


def test_secondary_dash_audio_maps_language():
    secondary = SecondaryAudio(DASH, RenditionSelection(1, 9, 5000), "deu", "00:00:01.000")
    args = build_download_args(DASH, RenditionSelection(2, 7, 6000), OUT, "eng", secondary=secondary)
    assert _maps(args)[-1] == "1:a:m:language:deu"
    assert "language=deu" in args


def test_audio_only_args():
    args = build_audio_only_args(HLS, Path("race.m4a"), "eng")
    assert _maps(args) == ["0:a:m:language:eng"]
    assert "-vn" in args


def test_vocal_removal_args():
    args = build_vocal_removal_args(Path("race.m4a"), Path("race-no-vocals.m4a"))
    assert args[args.index("-af") + 1].startswith("pan=stereo")
    assert args[-1] == "race-no-vocals.m4a"


def test_missing_ffmpeg_binary():
    runner = FFmpegRunner("definitely-not-ffmpeg")
    with patch("f1tv_dl.media.ffmpeg.shutil.which", return_value=None):
        with pytest.raises(FFmpegError):
            runner.resolve_binary()
