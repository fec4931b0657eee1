"""Page title lookup for linked security.txt fields."""

import asyncio
import html
import logging
import re

import aiohttp

from securitytxt.config import LINKS_SIZE_LIMIT, request_timeout
from securitytxt.errors import SizeExceededError

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"<title>([^<]*)</title>", re.IGNORECASE)


def parse_title(body: str) -> str:
    match = _TITLE_RE.search(body)
    if not match:
        return ""
    return html.unescape(match.group(1)).strip()


async def _read_limited(resp: aiohttp.ClientResponse, limit: int) -> bytes:
    body = bytearray()
    async for chunk in resp.content.iter_any():
        body.extend(chunk)
        if len(body) > limit:
            resp.close()
            raise SizeExceededError(str(resp.url), limit)
    return bytes(body)


async def fetch_title(session: aiohttp.ClientSession, url: str, limit: int = LINKS_SIZE_LIMIT) -> str:
    """GET ``url`` and return the text of its first <title>, or "" on any failure."""
    try:
        async with session.get(url, allow_redirects=True, timeout=request_timeout()) as resp:
            raw = await _read_limited(resp, limit)
            charset = resp.charset or "utf-8"
    except (aiohttp.ClientError, asyncio.TimeoutError, SizeExceededError, ValueError) as e:
        logger.warning("[fetch_title] could not fetch %s: %s", url, e)
        return ""

    try:
        body = raw.decode(charset, errors="replace")
    except LookupError:
        body = raw.decode("utf-8", errors="replace")
    return parse_title(body)
