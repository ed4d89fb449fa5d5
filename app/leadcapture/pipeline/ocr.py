from __future__ import annotations

import base64
import logging
from typing import Optional, Protocol

import pytesseract
import requests

from ..config import CONFIG, OcrConfig
from .ingest import compress_for_ocr, image_mime_type, load_image, preprocess_image

LOGGER = logging.getLogger(__name__)


class OcrError(RuntimeError):
    """OCR could not produce text for an image."""


class OcrService(Protocol):
    def recognize(self, image: bytes) -> str:
        ...

    def close(self) -> None:
        ...


class TesseractOcrService:
    """Local OCR through the tesseract binary."""

    def __init__(self, config: Optional[OcrConfig] = None) -> None:
        self.config = config or CONFIG.ocr

    def recognize(self, image: bytes) -> str:
        try:
            pil_image = preprocess_image(load_image(image))
        except ValueError as exc:
            raise OcrError(str(exc)) from exc
        lang = self.config.tesseract_lang
        try:
            text = pytesseract.image_to_string(pil_image, lang=lang)
        except pytesseract.TesseractError:
            if not lang:
                raise
            LOGGER.warning("OCR language %s failed; retrying default OCR.", lang)
            text = pytesseract.image_to_string(pil_image)
        LOGGER.debug("Tesseract extracted %d characters", len(text))
        return text

    def close(self) -> None:
        return None


class OcrSpaceService:
    """Remote OCR through an OCR.space compatible HTTP API."""

    def __init__(self, config: Optional[OcrConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or CONFIG.ocr
        self.session = session or requests.Session()

    def _payload(self, image: bytes) -> dict:
        data, compressed = compress_for_ocr(image, self.config)
        LOGGER.info("Sending to OCR: %d KB (compressed: %s)", len(data) // 1024, compressed)
        encoded = base64.b64encode(data).decode("ascii")
        return {
            "base64Image": f"data:{image_mime_type(data)};base64,{encoded}",
            "apikey": self.config.api_key,
            "language": self.config.language,
            "isOverlayRequired": "false",
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": self.config.engine,
        }

    def recognize(self, image: bytes) -> str:
        if not self.config.api_key:
            raise OcrError("OCR API key not configured")
        try:
            payload = self._payload(image)
        except ValueError as exc:
            raise OcrError(str(exc)) from exc
        try:
            resp = self.session.post(self.config.endpoint, data=payload, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise OcrError(f"OCR request failed: {exc}") from exc
        if not resp.ok:
            raise OcrError(f"OCR API error: {resp.status_code}")
        try:
            result = resp.json()
        except ValueError as exc:
            raise OcrError("OCR API returned invalid JSON") from exc

        if result.get("IsErroredOnProcessing"):
            message = result.get("ErrorMessage") or "OCR processing failed"
            if isinstance(message, list):
                message = message[0] if message else "OCR processing failed"
            raise OcrError(str(message))

        parsed = result.get("ParsedResults") or [{}]
        text = (parsed[0] or {}).get("ParsedText") or ""
        if not text.strip():
            raise OcrError("No text found in image")
        return text

    def close(self) -> None:
        self.session.close()


_SERVICE: Optional[OcrService] = None


def build_ocr_service(config: Optional[OcrConfig] = None) -> OcrService:
    cfg = config or CONFIG.ocr
    if cfg.provider == "tesseract":
        return TesseractOcrService(cfg)
    if cfg.provider == "ocrspace":
        return OcrSpaceService(cfg)
    raise ValueError(f"Unknown OCR provider: {cfg.provider}")


def get_ocr_service() -> OcrService:
    """Shared OCR service, created on first use."""
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = build_ocr_service()
        LOGGER.info("Initialized %s OCR service", type(_SERVICE).__name__)
    return _SERVICE


def close_ocr_service() -> None:
    global _SERVICE
    if _SERVICE is not None:
        _SERVICE.close()
        _SERVICE = None
