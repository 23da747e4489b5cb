import logging
import math
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from errors import ExtractionError
from settings import settings

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    return (url or "").strip().rstrip('/')

def is_youtube_url(url: str | None) -> bool:
    return bool(url) and "youtube.com" in url

def is_wikipedia_url(url: str | None) -> bool:
    return bool(url) and "en.wikipedia.org" in url

def with_start_time(url: str, start: float) -> str:
    """Return the video URL with its `t` parameter set to the floored start second."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "t"]
    query.append(("t", str(math.floor(start))))
    return urlunsplit(parts._replace(query=urlencode(query)))

def fetch_headers() -> dict:
    return {"User-Agent": settings.user_agent, "Accept-Language": settings.accept_language}

async def fetch_text(client: httpx.AsyncClient, url: str) -> str:
    """GET a page as text; transport errors and non-2xx answers become ExtractionError."""
    try:
        resp = await client.get(url, headers=fetch_headers(), follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise ExtractionError(f"Could not fetch {url}: {exc}") from exc
    logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text
