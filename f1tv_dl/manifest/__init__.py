"""
Manifest Layer.

This package parses HLS and DASH manifests and selects the video and audio
renditions to download. The two families keep their own parsed shapes and
share only the RenditionSelection result.
"""

from .dash import DashManifest, parse_dash
from .hls import HLSManifest, parse_hls
from .selector import parse_manifest, select_rendition

__all__ = [
    "DashManifest",
    "HLSManifest",
    "parse_dash",
    "parse_hls",
    "parse_manifest",
    "select_rendition",
]
