"""
F1 TV API Layer.

This package handles all communication with the F1 TV catalog and playback APIs.
"""

from .client import F1TVAPIClient

__all__ = ["F1TVAPIClient"]
