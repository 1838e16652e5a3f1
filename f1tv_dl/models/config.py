"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from f1tv_dl.exceptions import InvalidSelectorError
from f1tv_dl.utils.formatting import is_valid_offset, parse_resolution

OUTPUT_FORMATS = ("mp4", "ts")
INTERNATIONAL_LANGUAGES = ("eng", "nld", "deu", "fra", "por", "spa", "fx")


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    # API
    base_url: str = "https://f1tv.formula1.com"
    entitlement: str = "F1_TV_Pro_Annual"
    home_country: str = "USA"
    user_agent: str = "AppleTV6,2/11.1"
    request_timeout: float = 30.0

    # Download Settings
    ffmpeg_path: str = "ffmpeg"
    output_directory: str = ""
    audio_stream: str = "eng"
    video_size: str = "best"
    format: str = "mp4"
    itsoffset: str = "-00:00:04.750"

    # Per-run options, never written to the INI file
    token: str = Field(default="", repr=False)
    audio_only: bool = False
    remove_vocals: bool = False
    channel: str | None = None
    international_audio: str | None = None

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be an http(s) URL, got: {v}")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensures a reasonable request timeout."""
        if v < 1 or v > 300:
            raise ValueError("Request timeout must be between 1 and 300 seconds.")
        return v

    @field_validator("video_size")
    @classmethod
    def validate_video_size(cls, v: str) -> str:
        try:
            parse_resolution(v)
        except InvalidSelectorError as e:
            raise ValueError(str(e)) from e
        return v.lower()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Format must be one of {', '.join(OUTPUT_FORMATS)}.")
        return v

    @field_validator("itsoffset")
    @classmethod
    def validate_itsoffset(cls, v: str) -> str:
        if not is_valid_offset(v):
            raise ValueError("Offset must look like '(-)hh:mm:ss.SSS'.")
        return v

    @field_validator("international_audio")
    @classmethod
    def validate_international_audio(cls, v: str | None) -> str | None:
        if v is not None and v not in INTERNATIONAL_LANGUAGES:
            raise ValueError(
                f"International audio must be one of {', '.join(INTERNATIONAL_LANGUAGES)}."
            )
        return v

    @model_validator(mode="after")
    def validate_option_conflicts(self) -> "AppConfig":
        """Checks for conflicting download options."""
        if self.remove_vocals and not self.audio_only:
            raise ValueError("--remove-vocals can only be used with --audio-only.")
        return self

    @property
    def output_extension(self) -> str:
        return "m4a" if self.audio_only else self.format

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        per_run_fields = {
            "token",
            "audio_only",
            "remove_vocals",
            "channel",
            "international_audio",
        }
        return {key for key in cls.model_fields if key not in per_run_fields}
