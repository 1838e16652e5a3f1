"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class F1TVError(Exception):
    """Base exception for all application-specific errors."""


class InvalidUrlError(F1TVError):
    """Raised when a URL is malformed or is not an F1 TV video detail page."""


class AuthError(F1TVError):
    """Raised when the entitlement token is missing or rejected."""


class UpstreamError(F1TVError):
    """
    Raised when the catalog or playback API fails or returns an unexpected body.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotFoundError(F1TVError):
    """Raised when the catalog returns no content or a channel cannot be found."""


class RenditionNotFoundError(F1TVError):
    """Raised when no video or audio rendition matches the selection policy."""


class ParseError(F1TVError):
    """Raised when a manifest body does not conform to its family's grammar."""


class InvalidSelectorError(F1TVError, ValueError):
    """Raised when a resolution selector is neither 'best' nor '<width>x<height>'."""


class ConfigurationError(F1TVError):
    """Raised for issues related to configuration loading or validation."""


class FFmpegError(F1TVError):
    """Raised when ffmpeg cannot be started or exits with a non-zero code."""
