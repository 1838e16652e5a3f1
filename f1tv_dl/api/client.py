"""
Async client for the F1 TV catalog and playback APIs.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp

from f1tv_dl.exceptions import AuthError, NotFoundError, ParseError, UpstreamError
from f1tv_dl.models.config import AppConfig
from f1tv_dl.models.content import ContentInfo, ManifestRef
from f1tv_dl.utils.url import extract_content_ref

log = logging.getLogger(__name__)

KNOWN_STREAM_TYPES = ("HLS", "DASH")


class F1TVAPIClient:
    """
    Async client for the F1 TV JSON API.

    Every call is a single request: failures are raised to the caller,
    never retried.
    """

    CONTENT_PATH = "/3.0/R/ENG/BIG_SCREEN_HLS/ALL/CONTENT/VIDEO/{content_id}/{entitlement}/2"
    PLAY_PATH = "/2.0/R/ENG/BIG_SCREEN_HLS/ALL/CONTENT/PLAY"

    def __init__(self, config: AppConfig):
        """
        Initializes the API client.

        Args:
            config: Validated application configuration. The entitlement token
                is read from it on each playback request.
        """
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "F1TVAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept-Encoding": "gzip, deflate",
                },
                timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        as_json: bool = True,
    ) -> Any:
        """
        Performs one GET request and returns the decoded JSON or text body.

        Raises:
            UpstreamError: On connection failures, timeouts, non-2xx statuses or
                undecodable JSON. The HTTP status is kept on the exception.
        """
        await self._initialize_session()
        start_time = time.monotonic()

        try:
            async with self._session.get(url, params=params, headers=headers) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"GET {r.url.path} -> {r.status} ({duration_ms:.0f} ms)")
                if r.status >= 400:
                    raise UpstreamError(
                        f"Request to {r.url.path} failed with status {r.status} "
                        f"{r.reason or ''}".strip(),
                        status=r.status,
                    )
                if not as_json:
                    return await r.text()
                try:
                    return await r.json(content_type=None)
                except ValueError as e:
                    raise UpstreamError(
                        f"Response from {url} was not valid JSON."
                    ) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Request to {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"Request to {url} timed out after {self.config.request_timeout}s."
            ) from e

    async def _get_json(
        self,
        path: str,
        params: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        data = await self._get(self.config.base_url + path, params, headers)
        if not isinstance(data, dict):
            raise UpstreamError(f"Unexpected response body from {path}.")
        return data

    async def _get_text(self, url: str) -> str:
        return await self._get(url, as_json=False)

    async def fetch_content_info(self, url: str) -> ContentInfo:
        """
        Fetches catalog metadata for the content behind a video page URL.

        Raises:
            InvalidUrlError: If the URL is not an F1 TV video page.
            UpstreamError: If the catalog request fails.
            NotFoundError: If the catalog returns no container for the id.
        """
        content = extract_content_ref(url)
        path = self.CONTENT_PATH.format(
            content_id=content.id, entitlement=self.config.entitlement
        )
        params = {
            "contentId": content.id,
            "entitlement": self.config.entitlement,
            "homeCountry": self.config.home_country,
        }
        data = await self._get_json(path, params)

        containers = (data.get("resultObj") or {}).get("containers") or []
        if not containers:
            raise NotFoundError(f"No content found for id {content.id}.")

        info = ContentInfo.from_api(containers[0])
        log.debug(
            f"Resolved content {info.id} ({info.kind.value}) "
            f"with {len(info.channels)} alternate channels."
        )
        return info

    async def resolve_playback_url(
        self, content_id: str, channel_id: int | str | None = None
    ) -> ManifestRef:
        """
        Obtains the tokenized manifest URL for a content id and optional channel.

        Raises:
            AuthError: If no token is configured, or the API rejects it.
            UpstreamError: If the playback request fails or returns no URL.
        """
        token = self.config.token
        if not token or not token.strip():
            raise AuthError(
                "Authentication token is missing. Provide it with --token or the "
                "F1TV_TOKEN environment variable."
            )

        if channel_id is None:
            params = {"contentId": content_id}
        else:
            params = {"channelId": channel_id, "contentId": content_id}

        try:
            data = await self._get_json(
                self.PLAY_PATH, params, headers={"entitlementToken": token}
            )
        except UpstreamError as e:
            if e.status in (401, 403):
                raise AuthError(
                    f"The entitlement token was rejected ({e.status})."
                ) from e
            raise

        result = data.get("resultObj") or {}
        manifest_url = result.get("url")
        if not manifest_url:
            raise UpstreamError("Playback API response did not include a stream URL.")

        stream_type = result.get("streamType") or ""
        if stream_type not in KNOWN_STREAM_TYPES:
            log.warning(
                f"[yellow]Stream type may not work. Found {stream_type or 'none'}."
                "[/yellow]"
            )

        manifest = ManifestRef.from_url(manifest_url, stream_type)
        log.debug(f"Manifest family: {manifest.transport_family.value}")
        return manifest

    async def fetch_manifest(self, manifest: ManifestRef) -> str:
        """
        Downloads the raw manifest body.

        Raises:
            UpstreamError: If the request fails.
            ParseError: If the body cannot be decoded as text.
        """
        try:
            return await self._get_text(manifest.url)
        except UnicodeDecodeError as e:
            raise ParseError(f"Manifest body is not valid text: {e}") from e
