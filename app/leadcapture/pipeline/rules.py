from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlsplit

from .normalize import digit_count, normalize_email, normalize_phone, normalize_url

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

RE_HOST = re.compile(r"^[a-z0-9\u00a1-\uffff-]+(\.[a-z0-9\u00a1-\uffff-]+)+$", re.IGNORECASE)


@dataclass
class RuleResult:
    is_valid: bool
    reasons: List[str]
    normalized: Optional[str] = None


def validate_email(value: str) -> RuleResult:
    normalized = normalize_email(value)
    if not normalized or normalized.count("@") != 1:
        return RuleResult(False, ["email_format"])
    local, domain = normalized.split("@", 1)
    if not local:
        return RuleResult(False, ["email_local_missing"])
    if "." not in domain or domain.startswith(".") or ".." in domain:
        return RuleResult(False, ["email_domain"])
    return RuleResult(True, ["email_ok"], normalized)


def validate_phone(value: str) -> RuleResult:
    normalized = normalize_phone(value)
    if not normalized:
        return RuleResult(False, ["phone_empty"])
    digits = digit_count(normalized)
    if digits < PHONE_MIN_DIGITS or digits > PHONE_MAX_DIGITS:
        return RuleResult(False, ["phone_digit_count"])
    return RuleResult(True, ["phone_ok"], normalized)


def is_well_formed_url(value: str) -> bool:
    if not value or re.search(r"\s", value):
        return False
    try:
        parts = urlsplit(value)
        # Accessing .port validates the port component.
        parts.port
    except ValueError:
        return False
    if parts.scheme not in {"http", "https"}:
        return False
    host = parts.hostname or ""
    return bool(RE_HOST.match(host))


def validate_url(value: str) -> RuleResult:
    normalized = normalize_url(value)
    if not normalized:
        return RuleResult(False, ["url_empty"])
    if not is_well_formed_url(normalized):
        return RuleResult(False, ["url_format"])
    return RuleResult(True, ["url_ok"], normalized)


def validate_name_line(value: str) -> RuleResult:
    length = len(value)
    if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
        return RuleResult(False, ["name_length"])
    if value.isdigit():
        return RuleResult(False, ["name_numeric"])
    return RuleResult(True, ["name_ok"], value)
