from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..config import CONFIG, ExtractionConfig
from ..field_registry import field_keys
from ..schemas import ExtractedCard
from .candidates import first_email, first_phone, first_url
from .lines import LineAssignment, classify_lines, split_lines

LOGGER = logging.getLogger(__name__)


@dataclass
class CardExtraction:
    card: ExtractedCard
    populated_fields: List[str]
    assignment: LineAssignment = field(default_factory=LineAssignment)
    evidence: Dict[str, str] = field(default_factory=dict)

    @property
    def populated_count(self) -> int:
        return len(self.populated_fields)

    def populated(self) -> Dict[str, str]:
        """Only the detected values, keyed by card field."""
        return {key: getattr(self.card, key) for key in self.populated_fields}


def extract_card(text: str, config: Optional[ExtractionConfig] = None) -> CardExtraction:
    """Turn raw OCR text from one business card into structured contact fields.

    Missing or malformed data never raises: the field is simply left as None.
    Passing anything other than a string is a caller bug and raises TypeError.
    """
    if not isinstance(text, str):
        raise TypeError(f"OCR text must be a string, got {type(text).__name__}")
    cfg = config or CONFIG.extraction

    lines = split_lines(text)
    if not lines:
        LOGGER.debug("No text lines in OCR output")
        return CardExtraction(card=ExtractedCard(), populated_fields=[])

    email = first_email(text)
    phone = first_phone(text)
    website = first_url(text, cfg.url_tlds)
    assignment = classify_lines(lines, cfg.company_keywords, cfg.location_keywords, cfg.url_tlds)

    values = {
        "name": assignment.name.value if assignment.name else None,
        "company": assignment.company.value if assignment.company else None,
        "city": assignment.city.value if assignment.city else None,
        "phone": phone.value if phone else None,
        "email": email.value if email else None,
        "website": website.value if website else None,
    }
    card = ExtractedCard(**{key: value or None for key, value in values.items()})

    evidence: Dict[str, str] = {}
    for key, match in (("name", assignment.name), ("company", assignment.company), ("city", assignment.city)):
        if match is not None:
            evidence[key] = match.line

    populated = [key for key in field_keys() if getattr(card, key) is not None]
    LOGGER.debug("Card extraction: %d lines, populated %s", len(lines), populated)
    return CardExtraction(card=card, populated_fields=populated, assignment=assignment, evidence=evidence)


def parse_business_card(text: str, config: Optional[ExtractionConfig] = None) -> Tuple[ExtractedCard, int]:
    extraction = extract_card(text, config)
    return extraction.card, extraction.populated_count
