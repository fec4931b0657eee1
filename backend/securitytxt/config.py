"""Runtime knobs for security.txt retrieval, overridable through the environment."""

import os

import aiohttp

# The document itself is bounded tightly; title pages are arbitrary web pages.
SECURITY_TXT_SIZE_LIMIT = int(os.environ.get("SECURITY_TXT_SIZE_LIMIT", "1024"))
LINKS_SIZE_LIMIT = int(os.environ.get("SECURITY_TXT_LINKS_SIZE_LIMIT", str(1024 * 1024)))

# Milliseconds, applied to every request.
TIMEOUT_LIMIT = int(os.environ.get("SECURITY_TXT_TIMEOUT_MS", "10000"))

DISPLAY_LOCALE = os.environ.get("SECURITY_TXT_DISPLAY_LOCALE", "en")
USER_AGENT = os.environ.get("SECURITY_TXT_USER_AGENT", "WebSecCheck-SecurityTxt/1.0")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def request_timeout() -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=TIMEOUT_LIMIT / 1000)
