"""
Utilities for building output file paths.
"""

from pathlib import Path

from pathvalidate import sanitize_filename


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def build_output_path(
    slug: str,
    extension: str,
    output_directory: str = "",
    channel: str | None = None,
) -> Path:
    """
    Generates the output file path for a download.

    Alternate channel downloads get the first word of the channel query
    appended, so 'Lewis Hamilton' on the race slug yields '<slug>-Lewis.mp4'.
    """
    stem = slug
    if channel and channel.split():
        stem = f"{slug}-{channel.split()[0]}"

    filename = sanitize_filename(f"{stem}.{extension}", platform="auto")
    if output_directory:
        return Path(output_directory).expanduser() / filename
    return Path(filename)


def no_vocals_path(path: Path) -> Path:
    """Returns the sibling path used for the vocal-removed copy of a file."""
    return path.with_name(f"{path.stem}-no-vocals{path.suffix}")
