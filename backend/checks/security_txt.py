"""Security.txt check."""

from datetime import datetime, timezone
from typing import List, Dict, Any, Optional
from urllib.parse import urlparse

from securitytxt.enricher import enrich_document
from securitytxt.errors import DuplicateFieldError, SizeExceededError
from securitytxt.pipeline import load_document, new_session


def _result(status: str, description: str, details: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    result = {
        "id": "security_txt",
        "name": "Security.txt",
        "category": "Best Practices",
        "status": status,
        "description": description,
    }
    if details is not None:
        result["details"] = details
    return [result]


def _is_expired(expires: Any) -> bool:
    if not isinstance(expires, datetime):
        return False
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires < datetime.now(timezone.utc)


async def run_all(url: str) -> List[Dict[str, Any]]:
    """Check /.well-known/security.txt and report its enriched contents."""
    parsed = urlparse(url)
    target = f"https://{parsed.hostname}/.well-known/security.txt"

    async with new_session() as session:
        try:
            document = await load_document(session, target)
        except SizeExceededError as e:
            return _result(
                "fail",
                f"security.txt is larger than {e.limit} bytes and was not parsed.",
                {"url": target},
            )
        except DuplicateFieldError as e:
            return _result("fail", f"security.txt is malformed: {e}.", {"url": target})

        if document is None:
            return _result(
                "warn",
                "No security.txt found at /.well-known/security.txt. Add one to help security researchers report vulnerabilities.",
            )

        entries = await enrich_document(session, document)

    details = {"url": target, "entries": [e.model_dump(mode="json", exclude_none=True) for e in entries]}
    if not document.contact:
        return _result("warn", "security.txt exists but is missing the required 'Contact' field.", details)
    if _is_expired(document.expires):
        return _result("warn", "security.txt has expired. Update its 'Expires' field.", details)
    return _result("pass", "security.txt is present with contact information.", details)
