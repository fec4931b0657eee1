"""Turns a parsed security.txt document into presentable entries."""

import logging
from typing import List, Optional

import aiohttp

from securitytxt.languages import get_language_names
from securitytxt.links import is_mail_link, is_phone_link
from securitytxt.models import ParsedEntry, SecurityTxtDocument
from securitytxt.titles import fetch_title
from securitytxt.urls import is_valid_url, url_exists

logger = logging.getLogger(__name__)


async def resolve_link(session: aiohttp.ClientSession, link: str) -> Optional[ParsedEntry]:
    """Link entry labelled with the page title, or None if the link is unusable."""
    if not is_valid_url(link) or not await url_exists(session, link):
        logger.debug("dropping unreachable link %s", link)
        return None
    return ParsedEntry(label=await fetch_title(session, link), link=link)


async def _resolve_links(session: aiohttp.ClientSession, links: Optional[List[str]]) -> List[ParsedEntry]:
    entries: List[ParsedEntry] = []
    if links is None:
        return entries
    for link in links:
        entry = await resolve_link(session, link)
        if entry is not None:
            entries.append(entry)
    return entries


async def enrich_document(session: aiohttp.ClientSession, document: SecurityTxtDocument) -> List[ParsedEntry]:
    """Build the entry list for ``document``.

    Lookups run one after another so the output order always follows the
    document. Failed probes and title fetches only drop or blank the
    affected entry.
    """
    result: List[ParsedEntry] = []

    # A contact may be both a plain value and a resolvable link.
    for contact in document.contact:
        if is_mail_link(contact) or is_phone_link(contact):
            result.append(ParsedEntry(label="contact", value=contact))
        entry = await resolve_link(session, contact)
        if entry is not None:
            result.append(entry)

    result.append(ParsedEntry(label="expires", value=document.expires))

    if document.encryption is not None:
        for encryption in document.encryption:
            result.append(ParsedEntry(label="encryption", value=encryption))

    result.extend(await _resolve_links(session, document.acknowledgments))

    if document.preferred_languages is not None:
        languages = get_language_names().join(document.preferred_languages)
        result.append(ParsedEntry(label="preferredLanguages", value=languages))

    if document.canonical is not None:
        result.append(ParsedEntry(label="canonical", link=document.canonical))

    result.extend(await _resolve_links(session, document.policy))
    result.extend(await _resolve_links(session, document.hiring))

    return result
