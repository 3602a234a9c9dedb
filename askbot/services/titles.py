"""Thread titles for forum webhooks.

A forum post needs a name. For YouTube links the video title is looked up
(YouTube Data API when a key is configured, oEmbed otherwise); everything
else uses the message text. Titles are capped at 80 characters.
"""

from __future__ import annotations

import logging
import re

import aiohttp
from cachetools import TTLCache

LOGGER = logging.getLogger("Titles")

MAX_TITLE_LENGTH = 80

YOUTUBE_HOSTS = ("youtube", "youtu.be")

OEMBED_URL = "https://www.youtube.com/oembed"
DATA_API_URL = "https://www.googleapis.com/youtube/v3/videos"

_YT_RE = re.compile(
    r"(?:https?://)?(?:www\.|m\.)?(?:"
    r"youtube\.com/(?:watch\?(?:.*&)?v=|shorts/|v/|embed/)|"
    r"youtu\.be/"
    r")([A-Za-z0-9_-]{11})"
)


class TitleLookupError(Exception):
    """The page title could not be resolved."""


def strip_title(title: str) -> str:
    """Cap `title` at 80 characters, cutting at the last space where possible."""
    if len(title) <= MAX_TITLE_LENGTH:
        return title
    pos = title.rfind(" ", 0, MAX_TITLE_LENGTH)
    if pos >= 0:
        return title[:pos] + "..."
    return title[:MAX_TITLE_LENGTH] + "..."


def find_url(text: str) -> str | None:
    """First substring starting with 'http', up to the next space."""
    pos = text.find("http")
    if pos < 0:
        return None
    return text[pos:].split(" ", 1)[0]


def is_youtube(url: str) -> bool:
    return any(host in url for host in YOUTUBE_HOSTS)


def extract_youtube_id(text: str) -> str | None:
    """Extract 11-char YouTube video ID from a URL string. Returns None if not found."""
    m = _YT_RE.search(text)
    return m.group(1) if m else None


async def thread_title(text: str, resolver: TitleResolver | None) -> str:
    url = find_url(text)
    if url and is_youtube(url) and resolver is not None:
        try:
            title = await resolver.resolve_title(url.replace("embed", "v"))
            return strip_title(f"[Youtube] {title}")
        except TitleLookupError as e:
            LOGGER.debug(f"Title lookup failed for {url}: {e}")
    return strip_title(text)


class TitleResolver:
    def __init__(
        self,
        api_key: str = "",
        session: aiohttp.ClientSession | None = None,
        cache_ttl: float = 3600,
    ) -> None:
        self.api_key = api_key
        self._session = session
        self._cache: TTLCache = TTLCache(maxsize=256, ttl=cache_ttl)

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def resolve_title(self, url: str) -> str:
        cached = self._cache.get(url)
        if cached is not None:
            return cached

        if self.api_key:
            video_id = extract_youtube_id(url)
            if not video_id:
                raise TitleLookupError(f"no video id in {url}")
            title = await self._fetch_data_api(video_id)
        else:
            title = await self._fetch_oembed(url)

        self._cache[url] = title
        return title

    async def _get_json(self, url: str, params: dict[str, str]) -> dict:
        session = self._get_session()
        try:
            async with session.get(
                url, params=params, timeout=aiohttp.ClientTimeout(total=5)
            ) as resp:
                if resp.status != 200:
                    raise TitleLookupError(f"unexpected status {resp.status}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise TitleLookupError(f"{type(e).__name__}: {e}") from e

        if not isinstance(data, dict):
            raise TitleLookupError(f"unexpected body from {url}")
        return data

    async def _fetch_oembed(self, url: str) -> str:
        data = await self._get_json(OEMBED_URL, {"url": url, "format": "json"})
        title = data.get("title")
        if not title:
            raise TitleLookupError(f"no title for {url}")
        return title

    async def _fetch_data_api(self, video_id: str) -> str:
        data = await self._get_json(
            DATA_API_URL, {"part": "snippet", "id": video_id, "key": self.api_key}
        )
        items = data.get("items")
        if not items or not isinstance(items, list):
            raise TitleLookupError(f"video {video_id} not found")  # private / removed
        snippet = items[0].get("snippet") if isinstance(items[0], dict) else None
        title = snippet.get("title") if isinstance(snippet, dict) else None
        if not title:
            raise TitleLookupError(f"no title for video {video_id}")
        return title
