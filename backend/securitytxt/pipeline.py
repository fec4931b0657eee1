"""Entry points: fetch, parse and enrich a security.txt url."""

import logging
from typing import List, Optional

import aiohttp

from securitytxt.config import USER_AGENT
from securitytxt.enricher import enrich_document
from securitytxt.fetcher import SecurityTxtFetcher
from securitytxt.models import ParsedEntry, SecurityTxtDocument
from securitytxt.parser import fold_lines, split_lines

logger = logging.getLogger(__name__)


def new_session() -> aiohttp.ClientSession:
    return aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})


async def load_document(session: aiohttp.ClientSession, url: str) -> Optional[SecurityTxtDocument]:
    """Fetch and parse ``url``; None when nothing could be retrieved.

    Raises SizeExceededError or DuplicateFieldError for documents that were
    retrieved but cannot be accepted.
    """
    text = await SecurityTxtFetcher(session).fetch(url)
    if text is None:
        return None
    document = fold_lines(split_lines(text))
    logger.info("parsed security.txt at %s (%d contacts)", url, len(document.contact))
    return document


async def parse_security_txt(url: str, session: Optional[aiohttp.ClientSession] = None) -> Optional[List[ParsedEntry]]:
    if session is None:
        async with new_session() as own_session:
            return await parse_security_txt(url, own_session)

    document = await load_document(session, url)
    if document is None:
        return None
    return await enrich_document(session, document)
