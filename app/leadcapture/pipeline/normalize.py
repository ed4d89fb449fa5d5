from __future__ import annotations

import re
from typing import Iterable, Optional

TRAILING_URL_JUNK_RE = re.compile(r"[\s,;.:!?)\]]+$")
EDGE_PUNCT = " \t,;:-|/·"


def keyword_pattern(keywords: Iterable[str]) -> re.Pattern:
    """Build a case-insensitive alternation that only matches whole keywords.

    ASCII keywords get alphanumeric boundaries; CJK keywords match anywhere,
    since they attach directly to the preceding place name (e.g. 上海市).
    """
    parts = []
    # Longest first so "corporation" wins over "corp" in substitutions.
    for keyword in sorted({k.strip().lower() for k in keywords if k and k.strip()}, key=lambda k: (-len(k), k)):
        escaped = re.escape(keyword)
        if keyword[0].isascii() and keyword[0].isalnum():
            escaped = r"(?<![A-Za-z0-9])" + escaped
        if keyword[-1].isascii() and keyword[-1].isalnum():
            escaped = escaped + r"(?![A-Za-z0-9])"
        parts.append(escaped)
    if not parts:
        # Matches nothing.
        return re.compile(r"(?!x)x")
    return re.compile("|".join(parts), re.IGNORECASE)


def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def normalize_email(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    cleaned = value.strip().rstrip(".").lower()
    return cleaned or None


def normalize_phone(value: Optional[str]) -> Optional[str]:
    # Separators are kept as printed on the card.
    if not value:
        return None
    cleaned = value.strip()
    return cleaned or None


def normalize_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    cleaned = TRAILING_URL_JUNK_RE.sub("", value.strip())
    if not cleaned:
        return None
    lowered = cleaned.lower()
    if not lowered.startswith(("http://", "https://")):
        lowered = "https://" + lowered
    return lowered


def strip_location_tokens(value: str, pattern: re.Pattern) -> str:
    stripped = pattern.sub("", value)
    stripped = re.sub(r"\s+([,;])", r"\1", collapse_whitespace(stripped))
    return stripped.strip(EDGE_PUNCT)


def digit_count(value: str) -> int:
    return sum(1 for ch in value if ch.isdigit())
