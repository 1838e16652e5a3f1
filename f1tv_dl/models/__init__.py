"""
Data Models Layer.

This package contains the configuration model and the data classes that
describe content, channels, manifests and rendition selections.
"""

from .config import AppConfig
from .content import (
    ChannelDescriptor,
    ContentInfo,
    ContentKind,
    ContentRef,
    ManifestRef,
    RenditionSelection,
    TransportFamily,
)

__all__ = [
    "AppConfig",
    "ChannelDescriptor",
    "ContentInfo",
    "ContentKind",
    "ContentRef",
    "ManifestRef",
    "RenditionSelection",
    "TransportFamily",
]
