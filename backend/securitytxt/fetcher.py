"""Bounded, abortable retrieval of a security.txt body."""

import asyncio
import codecs
import enum
import logging
from typing import List, Optional

import aiohttp

from securitytxt.config import SECURITY_TXT_SIZE_LIMIT, request_timeout
from securitytxt.errors import SizeExceededError
from securitytxt.urls import is_valid_url, url_exists

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"


class FetchState(enum.Enum):
    INIT = "init"
    VALIDATING = "validating"
    FETCHING_HEADERS = "fetching_headers"
    STREAMING_BODY = "streaming_body"
    DECODING = "decoding"
    DONE = "done"
    ABORTED = "aborted"
    FAILED = "failed"


class StreamDecoder:
    """UTF-8 decoder that keeps partial multi-byte sequences between chunks."""

    def __init__(self, encoding: str = "utf-8-sig"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def feed(self, chunk: bytes) -> str:
        return self._decoder.decode(chunk)

    def flush(self) -> str:
        return self._decoder.decode(b"", final=True)


class SecurityTxtFetcher:
    """Fetches one security.txt document.

    ``fetch`` returns the decoded text, or None when the url is invalid,
    unreachable or not served as text/plain (each of those is logged).
    A body larger than ``size_limit`` aborts the transfer and raises
    SizeExceededError.
    """

    def __init__(self, session: aiohttp.ClientSession, size_limit: int = SECURITY_TXT_SIZE_LIMIT):
        self.session = session
        self.size_limit = size_limit
        self.state = FetchState.INIT

    def _transition(self, state: FetchState) -> None:
        logger.debug("fetch state %s -> %s", self.state.value, state.value)
        self.state = state

    async def fetch(self, url: str) -> Optional[str]:
        self._transition(FetchState.VALIDATING)
        if not is_valid_url(url):
            logger.error("ERROR invalid url %r", url)
            self._transition(FetchState.FAILED)
            return None
        if not await url_exists(self.session, url):
            logger.error("ERROR url does not exist: %s", url)
            self._transition(FetchState.FAILED)
            return None

        self._transition(FetchState.FETCHING_HEADERS)
        try:
            async with self.session.get(url, allow_redirects=True, timeout=request_timeout()) as resp:
                content_type = resp.headers.get("content-type", "")
                if TEXT_PLAIN not in content_type.lower():
                    logger.info("skipping %s: content-type %r is not %s", url, content_type, TEXT_PLAIN)
                    self._transition(FetchState.FAILED)
                    return None
                return await self._read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("ERROR fetching %s: %s: %s", url, type(e).__name__, e)
            self._transition(FetchState.FAILED)
            return None

    async def _read_body(self, resp: aiohttp.ClientResponse) -> str:
        self._transition(FetchState.STREAMING_BODY)
        decoder = StreamDecoder()
        parts: List[str] = []
        received = 0

        async for chunk in resp.content.iter_any():
            received += len(chunk)
            if received > self.size_limit:
                self._transition(FetchState.ABORTED)
                resp.close()
                raise SizeExceededError(str(resp.url), self.size_limit)
            parts.append(decoder.feed(chunk))

        self._transition(FetchState.DECODING)
        parts.append(decoder.flush())
        self._transition(FetchState.DONE)
        return "".join(parts)
