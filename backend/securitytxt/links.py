"""Contact link classification."""

import re

_MAILTO_RE = re.compile(r"^mailto:", re.IGNORECASE)
_TEL_RE = re.compile(r"^tel:", re.IGNORECASE)


def is_mail_link(link: str) -> bool:
    return bool(_MAILTO_RE.match(link))


def is_phone_link(link: str) -> bool:
    return bool(_TEL_RE.match(link))
