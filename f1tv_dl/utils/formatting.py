"""
Helper functions for parsing and formatting user-facing values.
"""

import re

from f1tv_dl.exceptions import InvalidSelectorError

BEST = "best"

_RESOLUTION_REGEX = re.compile(r"^\s*(?P<width>\d+)\s*[xX]\s*(?P<height>\d+)\s*$")
_OFFSET_REGEX = re.compile(r"^-?\d{2}:\d{2}:\d{2}(\.\d{1,3})?$")


def parse_resolution(selector: str) -> tuple[int, int] | None:
    """
    Parses a resolution selector.

    Returns None for 'best', or a (width, height) tuple for '<width>x<height>'.

    Raises:
        InvalidSelectorError: If the selector is neither form.
    """
    if selector.strip().lower() == BEST:
        return None
    match = _RESOLUTION_REGEX.match(selector)
    if not match:
        raise InvalidSelectorError(
            f"Invalid video size '{selector}'. Use 'best' or '<width>x<height>'."
        )
    return int(match.group("width")), int(match.group("height"))


def is_valid_offset(offset: str) -> bool:
    """Checks an ffmpeg '-itsoffset' value in the form '(-)hh:mm:ss.SSS'."""
    return bool(_OFFSET_REGEX.match(offset))


def format_bandwidth(bits_per_second: int) -> str:
    """Formats a bandwidth into a human-readable string (e.g., '6.2 Mbps')."""
    if bits_per_second <= 0:
        return "0 bps"
    units = ["bps", "kbps", "Mbps", "Gbps"]
    value = float(bits_per_second)
    i = 0
    while value >= 1000 and i < len(units) - 1:
        value /= 1000
        i += 1
    if i == 0:
        return f"{int(value)} {units[i]}"
    return f"{value:.1f} {units[i]}"
