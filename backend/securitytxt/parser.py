"""Line parsing for security.txt documents.

Fields are folded in order through ``FIELD_RULES``, which records for every
recognised key whether it may repeat and how its value is coerced.
"""

import enum
import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Union

from dateutil import parser as dtparser

from securitytxt.errors import DuplicateFieldError
from securitytxt.models import SecurityTxtDocument

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"[^\r\n]+")
SEPARATOR = ": "


class Cardinality(enum.Enum):
    MULTI = "multi"
    SINGLE = "single"


class FieldRule(NamedTuple):
    attribute: str
    cardinality: Cardinality
    coerce: Callable[[str], Any]


# Missing date parts are filled from here, never from the clock.
_EXPIRES_DEFAULT = datetime(1970, 1, 1)


def parse_expires(value: str) -> Union[datetime, str]:
    """Parsed timestamp, or the raw value when it is not a usable date."""
    try:
        try:
            parsed = dtparser.isoparse(value)
        except ValueError:
            parsed = dtparser.parse(value, default=_EXPIRES_DEFAULT)
        # Out-of-range offsets only fail once the offset is read.
        parsed.utcoffset()
    except (ValueError, OverflowError):
        logger.debug("keeping unparseable Expires value %r", value)
        return value
    return parsed


def split_languages(value: str) -> List[str]:
    return [lang.strip() for lang in value.split(",")]


FIELD_RULES: Dict[str, FieldRule] = {
    "contact": FieldRule("contact", Cardinality.MULTI, str),
    "encryption": FieldRule("encryption", Cardinality.MULTI, str),
    "acknowledgments": FieldRule("acknowledgments", Cardinality.MULTI, str),
    "hiring": FieldRule("hiring", Cardinality.MULTI, str),
    "policy": FieldRule("policy", Cardinality.MULTI, str),
    "canonical": FieldRule("canonical", Cardinality.SINGLE, str),
    "expires": FieldRule("expires", Cardinality.SINGLE, parse_expires),
    "preferred-languages": FieldRule("preferred_languages", Cardinality.SINGLE, split_languages),
}


def split_lines(text: str) -> List[str]:
    """Split on runs of CR/LF, dropping empty segments."""
    return _LINE_RE.findall(text)


def fold_lines(lines: Iterable[str]) -> SecurityTxtDocument:
    """Build a document from ``lines``.

    Comments, lines without a ``key: value`` shape, empty values and unknown
    keys are skipped. A repeated single-occurrence field raises
    DuplicateFieldError.
    """
    values: Dict[str, Any] = {}

    for line in lines:
        if line.startswith("#"):
            continue
        key, sep, value = line.partition(SEPARATOR)
        if not sep or not value:
            continue

        key = key.lower()
        rule = FIELD_RULES.get(key)
        if rule is None:
            logger.debug("ignoring unknown field %r", key)
            continue

        if rule.cardinality is Cardinality.MULTI:
            values.setdefault(rule.attribute, []).append(rule.coerce(value))
        else:
            if rule.attribute in values:
                raise DuplicateFieldError(key.title())
            values[rule.attribute] = rule.coerce(value)

    return SecurityTxtDocument(**values)
