from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

import anyio
from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import CONFIG
from .field_registry import iter_fields
from .pipeline.card import CardExtraction, extract_card
from .pipeline.merge import card_to_ocr_json, extraction_message, extraction_status, merge_card
from .pipeline.ocr import OcrError, close_ocr_service, get_ocr_service
from .schemas import (
    ApplyCardRequest,
    ApplyCardResponse,
    CaptureContact,
    CardSummary,
    OcrCardResponse,
    ParseCardRequest,
)

logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
LOGGER = logging.getLogger("leadcapture")

MANUAL_ENTRY_MESSAGE = "Could not extract details. Please fill manually."


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    close_ocr_service()


app = FastAPI(title="Lead Capture", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _summary_fields(extraction: CardExtraction) -> Dict[str, object]:
    count = extraction.populated_count
    return {
        "card": extraction.card,
        "populated_fields": extraction.populated_fields,
        "populated_count": count,
        "status": extraction_status(count),
        "message": extraction_message(count),
        "card_ocr_json": card_to_ocr_json(extraction.card),
        "evidence": extraction.evidence,
    }


def _parse_capture_form(raw: Optional[str]) -> Optional[CaptureContact]:
    if not raw:
        return None
    return CaptureContact.model_validate(json.loads(raw))


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/extraction_config")
async def extraction_config() -> Dict[str, object]:
    cfg = CONFIG.extraction
    return {
        "company_keywords": list(cfg.company_keywords),
        "location_keywords": list(cfg.location_keywords),
        "url_tlds": list(cfg.url_tlds),
        "fields": [{"key": spec.key, "label": spec.label} for spec in iter_fields()],
    }


@app.post("/parse_card")
async def parse_card(payload: ParseCardRequest):
    extraction = extract_card(payload.text)
    LOGGER.info("parse_card: populated %d fields", extraction.populated_count)
    return JSONResponse(CardSummary(**_summary_fields(extraction)).model_dump(mode="json", by_alias=True))


@app.post("/apply_card")
async def apply_card(payload: ApplyCardRequest):
    extraction = extract_card(payload.text)
    merged, updated = merge_card(payload.capture, extraction.card, overwrite=payload.overwrite)
    LOGGER.info("apply_card: populated %d fields, updated %s", extraction.populated_count, updated)
    response = ApplyCardResponse(**_summary_fields(extraction), capture=merged, updated_fields=updated)
    return JSONResponse(response.model_dump(mode="json", by_alias=True))


@app.post("/ocr_card")
async def ocr_card(
    card: UploadFile = File(None),
    capture: Optional[str] = Form(None),
):
    if card is None:
        return JSONResponse({"error": "Missing card image"}, status_code=400)
    try:
        existing = _parse_capture_form(capture)
    except (ValueError, ValidationError):
        return JSONResponse({"error": "Invalid capture payload"}, status_code=400)

    data = await card.read()
    if not data:
        return JSONResponse({"error": "Empty card image"}, status_code=400)

    service = get_ocr_service()
    try:
        text = await anyio.to_thread.run_sync(service.recognize, data)
    except OcrError as exc:
        LOGGER.error("OCR processing error: %s", exc)
        return JSONResponse({"error": str(exc), "message": MANUAL_ENTRY_MESSAGE}, status_code=502)

    extraction = extract_card(text)
    merged = None
    updated = []
    if existing is not None:
        merged, updated = merge_card(existing, extraction.card)
    LOGGER.info(
        "ocr_card: %s -> %d characters, populated %d fields",
        card.filename,
        len(text),
        extraction.populated_count,
    )
    response = OcrCardResponse(
        **_summary_fields(extraction),
        raw_text=text,
        capture=merged,
        updated_fields=updated,
    )
    return JSONResponse(response.model_dump(mode="json", by_alias=True))
