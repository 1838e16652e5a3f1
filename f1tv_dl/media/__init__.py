"""
Media Processing Layer.

This package builds ffmpeg invocations from rendition selections and runs them.
"""

from .ffmpeg import FFmpegRunner, SecondaryAudio

__all__ = ["FFmpegRunner", "SecondaryAudio"]
