from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    capture_attr: str
    ocr_json_attr: Optional[str] = None
    order: int = 0


# Order matches the order fields are reported back to the user.
FIELDS: List[FieldSpec] = [
    FieldSpec(key="name", label="Contact name", capture_attr="poc_name", ocr_json_attr="contact_name", order=0),
    FieldSpec(key="company", label="Company", capture_attr="poc_company", ocr_json_attr="company_name", order=1),
    FieldSpec(key="city", label="City", capture_attr="poc_city", ocr_json_attr="address", order=2),
    FieldSpec(key="phone", label="Phone", capture_attr="poc_phone", ocr_json_attr="phone", order=3),
    FieldSpec(key="email", label="Email", capture_attr="poc_email", ocr_json_attr="email", order=4),
    FieldSpec(key="website", label="Website", capture_attr="poc_link", order=5),
]


def iter_fields() -> Iterable[FieldSpec]:
    return sorted(FIELDS, key=lambda spec: spec.order)


def field_keys() -> List[str]:
    return [spec.key for spec in iter_fields()]
