from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..field_registry import iter_fields
from ..schemas import CaptureContact, CardOcrJson, ExtractedCard

LOGGER = logging.getLogger(__name__)

SUCCESS = "success"
WARNING = "warning"


def _is_empty(value: Optional[object]) -> bool:
    if value is None:
        return True
    return str(value).strip() == ""


def merge_card(
    capture: CaptureContact,
    card: ExtractedCard,
    overwrite: bool = False,
) -> Tuple[CaptureContact, List[str]]:
    """Copy detected card fields onto the capture's contact fields.

    Absent card fields are never written. Unless ``overwrite`` is set, a
    capture field that already holds a value is left alone so user edits
    survive a re-scan. Returns the merged copy and the capture attributes
    that changed.
    """
    updates = {}
    for spec in iter_fields():
        value = getattr(card, spec.key)
        if _is_empty(value):
            continue
        current = getattr(capture, spec.capture_attr)
        if not overwrite and not _is_empty(current):
            continue
        if current == value:
            continue
        updates[spec.capture_attr] = value

    ocr_json = card_to_ocr_json(card)
    if capture.card_ocr_json is not None:
        ocr_json = merge_ocr_json(capture.card_ocr_json, ocr_json, overwrite=overwrite)
    if ocr_json != capture.card_ocr_json and ocr_json.model_dump(exclude_none=True):
        updates["card_ocr_json"] = ocr_json

    LOGGER.debug("Merging card into capture: %s", sorted(updates))
    return capture.model_copy(update=updates), [key for key in updates if key != "card_ocr_json"]


def card_to_ocr_json(card: ExtractedCard) -> CardOcrJson:
    values = {}
    for spec in iter_fields():
        if spec.ocr_json_attr is None:
            continue
        value = getattr(card, spec.key)
        if not _is_empty(value):
            values[spec.ocr_json_attr] = value
    return CardOcrJson(**values)


def merge_ocr_json(existing: CardOcrJson, incoming: CardOcrJson, overwrite: bool = False) -> CardOcrJson:
    updates = {}
    for key, value in incoming.model_dump().items():
        if _is_empty(value):
            continue
        if not overwrite and not _is_empty(getattr(existing, key)):
            continue
        updates[key] = value
    return existing.model_copy(update=updates)


def extraction_status(populated_count: int) -> str:
    return SUCCESS if populated_count > 0 else WARNING


def extraction_message(populated_count: int) -> str:
    if populated_count <= 0:
        return "Could not detect details clearly. Please fill manually."
    plural = "s" if populated_count > 1 else ""
    return f"Extracted {populated_count} field{plural}! Please review and edit as needed."
