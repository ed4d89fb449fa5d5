from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from .rules import validate_email, validate_phone, validate_url

LOGGER = logging.getLogger(__name__)

EMAIL = "email"
PHONE = "phone"
URL = "website"
NAME = "name"
COMPANY = "company"
CITY = "city"

# Loose on purpose: domain dots are checked by validate_email so that
# "bob@localhost" is seen and rejected rather than never matched.
EMAIL_RE = re.compile(r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+", re.IGNORECASE)

# Separators never include line breaks, so digits on adjacent lines stay apart.
_SEP = r"[-. \t]?"
PHONE_RE = re.compile(
    r"(?<![\d+])(?:"
    # Mainland China mobile, optionally with the +86 country code.
    r"(?:\+?86" + _SEP + r")?1[3-9]\d{9}"
    r"|"
    r"\+?\(?\d{1,4}\)?" + _SEP + r"\(?\d{1,4}\)?" + _SEP + r"\d{3,4}" + _SEP + r"\d{3,4}"
    r"|"
    # Seven-digit local number such as 555-0188.
    r"\d{3}[-. ]\d{4}"
    r")(?!\d)"
)


@dataclass(frozen=True)
class FieldCandidate:
    kind: str
    value: str
    # None means the match came from a whole-text scan.
    line_index: Optional[int] = None


@lru_cache(maxsize=16)
def url_pattern(tlds: Tuple[str, ...]) -> re.Pattern:
    tld_alt = "|".join(re.escape(t) for t in sorted(set(tlds), key=lambda t: (-len(t), t)))
    return re.compile(
        r"(?:https?://[^\s,;]+)"
        # Hosts never touch "@" on either side: those belong to an email.
        r"|(?<![A-Za-z0-9_@.-])www\.[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}(?![A-Za-z0-9@-])(?:[/:?#][^\s,;]*)?"
        r"|(?<![A-Za-z0-9_@.-])(?:[A-Za-z0-9-]+\.)+(?:" + tld_alt + r")(?![A-Za-z0-9@-])(?:[/:?#][^\s,;]*)?",
        re.IGNORECASE,
    )


def find_emails(text: str) -> List[FieldCandidate]:
    return [FieldCandidate(EMAIL, m.group(0)) for m in EMAIL_RE.finditer(text)]


def find_phones(text: str) -> List[FieldCandidate]:
    return [FieldCandidate(PHONE, m.group(0)) for m in PHONE_RE.finditer(text)]


def find_urls(text: str, tlds: Iterable[str]) -> List[FieldCandidate]:
    pattern = url_pattern(tuple(tlds))
    return [FieldCandidate(URL, m.group(0)) for m in pattern.finditer(text)]


def first_email(text: str) -> Optional[FieldCandidate]:
    """Return the first email candidate whose domain has a dot, lowercased."""
    for candidate in find_emails(text):
        result = validate_email(candidate.value)
        if result.is_valid:
            return FieldCandidate(EMAIL, result.normalized, candidate.line_index)
        LOGGER.debug("Rejected email candidate %r: %s", candidate.value, result.reasons)
    return None


def first_phone(text: str) -> Optional[FieldCandidate]:
    for candidate in find_phones(text):
        result = validate_phone(candidate.value)
        if result.is_valid:
            return FieldCandidate(PHONE, result.normalized, candidate.line_index)
        LOGGER.debug("Rejected phone candidate %r: %s", candidate.value, result.reasons)
    return None


def first_url(text: str, tlds: Iterable[str]) -> Optional[FieldCandidate]:
    """Only the first URL match is considered; a malformed one leaves the website absent."""
    candidates = find_urls(text, tlds)
    if not candidates:
        return None
    candidate = candidates[0]
    result = validate_url(candidate.value)
    if not result.is_valid:
        LOGGER.debug("Rejected url candidate %r: %s", candidate.value, result.reasons)
        return None
    return FieldCandidate(URL, result.normalized, candidate.line_index)


def line_has_contact_pattern(line: str, tlds: Iterable[str]) -> bool:
    if EMAIL_RE.search(line) or PHONE_RE.search(line):
        return True
    return bool(url_pattern(tuple(tlds)).search(line))
