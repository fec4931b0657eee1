"""Language tag to display name lookup.

Built once per process on first use and read-only afterwards, so it can be
shared freely between concurrent documents.
"""

import functools
import logging
from typing import Iterable, List

from babel import Locale, UnknownLocaleError

from securitytxt.config import DISPLAY_LOCALE

logger = logging.getLogger(__name__)


class LanguageNames:
    def __init__(self, display_locale: str):
        self.display_locale = Locale.parse(display_locale, sep="-")

    def of(self, tag: str) -> str:
        """Display name for ``tag``, or the tag itself when it cannot be resolved."""
        try:
            name = Locale.parse(tag, sep="-").get_display_name(self.display_locale)
        except (ValueError, TypeError, UnknownLocaleError) as e:
            logger.debug("no display name for language tag %r: %s", tag, e)
            return tag
        return name or tag

    def join(self, tags: Iterable[str]) -> str:
        names: List[str] = [self.of(tag) for tag in tags]
        return ", ".join(names)


@functools.lru_cache(maxsize=None)
def get_language_names(display_locale: str = DISPLAY_LOCALE) -> LanguageNames:
    return LanguageNames(display_locale)
