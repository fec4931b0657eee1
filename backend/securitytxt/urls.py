"""URL syntax validation and existence probing."""

import asyncio
import logging
import re
from urllib.parse import urlparse

import aiohttp

from securitytxt.config import request_timeout

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
# Schemes that cannot be used without an authority.
_HOST_SCHEMES = {"http", "https", "ws", "wss", "ftp"}
PROBE_SCHEMES = ("http", "https")


def _check_url(s: str) -> None:
    parsed = urlparse(s)
    if not parsed.scheme or not _SCHEME_RE.match(parsed.scheme):
        raise ValueError(f"missing or malformed scheme in {s!r}")
    if parsed.scheme.lower() in _HOST_SCHEMES:
        if not parsed.hostname:
            raise ValueError(f"missing host in {s!r}")
        # Accessing .port validates it.
        parsed.port
    elif not (parsed.netloc or parsed.path):
        raise ValueError(f"nothing after scheme in {s!r}")


def is_valid_url(s: str) -> bool:
    """Return True if ``s`` parses as an absolute URL. Never raises."""
    try:
        _check_url(s)
    except ValueError as e:
        logger.warning("[is_valid_url] invalid url: %s", e)
        return False
    return True


async def url_exists(session: aiohttp.ClientSession, url: str) -> bool:
    """HEAD the url and report whether it answered 200.

    Network errors and timeouts are logged and reported as ``False``.
    Non-HTTP schemes (mailto:, tel:) are never probed.
    """
    try:
        scheme = urlparse(url).scheme.lower()
    except ValueError as e:
        logger.warning("[url_exists] invalid url %s: %s", url, e)
        return False
    if scheme not in PROBE_SCHEMES:
        logger.debug("[url_exists] not probing %s url %s", scheme, url)
        return False

    try:
        async with session.head(url, allow_redirects=True, timeout=request_timeout()) as resp:
            status = resp.status
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning("[url_exists] url does not exist: %s (%s: %s)", url, type(e).__name__, e)
        return False

    if status != 200:
        logger.warning("[url_exists] %s answered HTTP %s", url, status)
        return False
    return True
