"""
Utilities for recognising F1 TV video page URLs and extracting content ids.
"""

from urllib.parse import urlparse

from f1tv_dl.exceptions import InvalidUrlError
from f1tv_dl.models.content import ContentRef

SERVICE_HOST_TOKEN = "f1tv"
DETAIL_PATH_MARKERS = ("detail",)


def is_service_url(value: str) -> bool:
    """
    Checks whether a string is an absolute F1 TV video detail page URL.

    The host must contain 'f1tv' and the path 'detail', both case-insensitive.
    Never raises; anything unparseable is simply not a service URL.
    """
    if not isinstance(value, str):
        return False

    try:
        parsed = urlparse(value)
        host = (parsed.hostname or "").lower()
    except ValueError:
        return False

    if not parsed.scheme or not host:
        return False

    path = parsed.path.lower()
    return SERVICE_HOST_TOKEN in host and any(m in path for m in DETAIL_PATH_MARKERS)


def extract_content_ref(url: str) -> ContentRef:
    """
    Extracts the content id and slug from a video page URL.

    e.g. https://f1tv.formula1.com/detail/1000005104/2022-bahrain-gp-race
    -> ContentRef(id='1000005104', name='2022-bahrain-gp-race')
    """
    if not is_service_url(url):
        raise InvalidUrlError(f"Not a valid F1 TV video page URL: {url}")

    segments = [s for s in urlparse(url).path.split("/") if s]
    if len(segments) < 2:
        raise InvalidUrlError(f"URL does not contain a content id and name: {url}")

    name = segments.pop()
    content_id = segments.pop()
    return ContentRef(id=content_id, name=name)
