from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Collection, Iterable, List, Optional, Tuple

from .candidates import line_has_contact_pattern
from .normalize import keyword_pattern, strip_location_tokens
from .rules import validate_name_line

LOGGER = logging.getLogger(__name__)

CITY_SHAPE_RE = re.compile(r"[A-Z][a-z]+")
CITY_SHAPE_MIN_EXCLUSIVE = 2
CITY_SHAPE_MAX_EXCLUSIVE = 40
CITY_MIN_STRIPPED = 3


@dataclass(frozen=True)
class LineMatch:
    index: int
    line: str
    value: str


@dataclass(frozen=True)
class LineAssignment:
    name: Optional[LineMatch] = None
    company: Optional[LineMatch] = None
    city: Optional[LineMatch] = None

    def claimed(self) -> List[int]:
        return [m.index for m in (self.name, self.company, self.city) if m is not None]


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def classify_name(lines: List[str], tlds: Iterable[str]) -> Optional[LineMatch]:
    """First line of plausible length that carries no email, phone or url and is not just digits."""
    tlds = tuple(tlds)
    for idx, line in enumerate(lines):
        if not validate_name_line(line).is_valid:
            continue
        if line_has_contact_pattern(line, tlds):
            continue
        return LineMatch(idx, line, line)
    return None


def classify_company(
    lines: List[str],
    keywords: Iterable[str],
    tlds: Iterable[str],
    exclude: Collection[int] = (),
) -> Optional[LineMatch]:
    pattern = keyword_pattern(keywords)
    tlds = tuple(tlds)
    for idx, line in enumerate(lines):
        if idx in exclude:
            continue
        if not pattern.search(line):
            continue
        # Domains like acme-tech.com would otherwise read as a company line.
        if line_has_contact_pattern(line, tlds):
            continue
        return LineMatch(idx, line, line)
    return None


def _looks_like_place(line: str) -> bool:
    if not (CITY_SHAPE_MIN_EXCLUSIVE < len(line) < CITY_SHAPE_MAX_EXCLUSIVE):
        return False
    return bool(CITY_SHAPE_RE.search(line))


def classify_city(
    lines: List[str],
    keywords: Iterable[str],
    tlds: Iterable[str],
    exclude: Collection[int] = (),
) -> Optional[LineMatch]:
    pattern = keyword_pattern(keywords)
    tlds = tuple(tlds)
    for idx, line in enumerate(lines):
        if idx in exclude:
            continue
        if not (pattern.search(line) or _looks_like_place(line)):
            continue
        if line_has_contact_pattern(line, tlds):
            continue
        value = strip_location_tokens(line, pattern)
        if len(value) < CITY_MIN_STRIPPED:
            LOGGER.debug("City candidate %r too short after stripping", line)
            continue
        return LineMatch(idx, line, value)
    return None


def classify_lines(
    lines: List[str],
    company_keywords: Iterable[str],
    location_keywords: Iterable[str],
    tlds: Iterable[str],
) -> LineAssignment:
    tlds = tuple(tlds)
    name = classify_name(lines, tlds)
    claimed: Tuple[int, ...] = (name.index,) if name else ()
    company = classify_company(lines, company_keywords, tlds, exclude=claimed)
    if company:
        claimed = claimed + (company.index,)
    city = classify_city(lines, location_keywords, tlds, exclude=claimed)
    return LineAssignment(name=name, company=company, city=city)
