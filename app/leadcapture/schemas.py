from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractedCard(BaseModel):
    name: Optional[str] = None
    company: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class CardOcrJson(BaseModel):
    """Snapshot of what OCR read off the visiting card, stored with the capture."""

    model_config = ConfigDict(populate_by_name=True)

    company_name: Optional[str] = Field(default=None, alias="companyName")
    contact_name: Optional[str] = Field(default=None, alias="contactName")
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CaptureContact(BaseModel):
    poc_name: Optional[str] = None
    poc_company: Optional[str] = None
    poc_city: Optional[str] = None
    poc_phone: Optional[str] = None
    poc_email: Optional[str] = None
    poc_link: Optional[str] = None
    card_ocr_json: Optional[CardOcrJson] = None


class ParseCardRequest(BaseModel):
    text: str


class ApplyCardRequest(BaseModel):
    text: str
    capture: CaptureContact = Field(default_factory=CaptureContact)
    overwrite: bool = False


class CardSummary(BaseModel):
    card: ExtractedCard
    populated_fields: List[str] = Field(default_factory=list)
    populated_count: int = 0
    status: str = "warning"
    message: str
    card_ocr_json: CardOcrJson = Field(default_factory=CardOcrJson)
    evidence: Dict[str, str] = Field(default_factory=dict)


class ApplyCardResponse(CardSummary):
    capture: CaptureContact
    updated_fields: List[str] = Field(default_factory=list)


class OcrCardResponse(CardSummary):
    raw_text: str = ""
    capture: Optional[CaptureContact] = None
    updated_fields: List[str] = Field(default_factory=list)
