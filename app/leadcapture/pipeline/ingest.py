from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import CONFIG, OcrConfig

LOGGER = logging.getLogger(__name__)

SUPPORTED_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".webp"}


def load_image(source: Union[bytes, Path]) -> Image.Image:
    """Decode an image file or uploaded bytes into an upright RGB/L PIL image."""
    if isinstance(source, Path):
        suffix = source.suffix.lower()
        if suffix not in SUPPORTED_IMAGE_EXTS:
            raise ValueError(f"Unsupported file type: {suffix}")
        LOGGER.info("Loading image %s", source)
        image = Image.open(source)
        image.load()
    else:
        try:
            image = Image.open(BytesIO(source))
            image.load()
        except UnidentifiedImageError as exc:
            raise ValueError("Unsupported image data") from exc
    # Normalize orientation/mode so OCR sees consistent pixels.
    image = ImageOps.exif_transpose(image)
    if image.mode not in {"RGB", "L"}:
        image = image.convert("RGB")
    return image


def _fit_within(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    if width <= max_dimension and height <= max_dimension:
        return width, height
    if width > height:
        return max_dimension, round(height * max_dimension / width)
    return round(width * max_dimension / height), max_dimension


def compress_for_ocr(data: bytes, config: Optional[OcrConfig] = None) -> Tuple[bytes, bool]:
    """Shrink large card photos before they are sent to a remote OCR service.

    Small payloads pass through untouched. Larger ones are scaled so the
    longest side fits ``max_dimension`` and re-encoded as JPEG.
    """
    cfg = config or CONFIG.ocr
    if len(data) <= cfg.max_payload_bytes:
        return data, False
    image = load_image(data)
    size = _fit_within(image.width, image.height, cfg.max_dimension)
    if size != (image.width, image.height):
        image = image.resize(size)
    if image.mode != "RGB":
        image = image.convert("RGB")
    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=cfg.jpeg_quality)
    compressed = buffer.getvalue()
    LOGGER.info("Compressed card image %d KB -> %d KB", len(data) // 1024, len(compressed) // 1024)
    return compressed, True


def image_mime_type(data: bytes) -> str:
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data[:4] in {b"II*\x00", b"MM\x00*"}:
        return "image/tiff"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def preprocess_image(image: Image.Image) -> Image.Image:
    """Grayscale + gentle thresholding for local tesseract runs."""
    gray = ImageOps.grayscale(image)
    gray = ImageOps.autocontrast(gray)
    # Cards photographed from a distance come out small.
    if gray.width < 1000:
        scale = 1000 / gray.width
        gray = gray.resize((int(gray.width * scale), int(gray.height * scale)))
    np_img = np.array(gray)
    thresh = (np_img > np.mean(np_img)).astype(np.uint8) * 255
    # If thresholding wipes most of the text, keep the grayscale image instead.
    black_ratio = float((thresh == 0).sum()) / float(thresh.size) if thresh.size else 0.0
    if black_ratio < 0.01 or black_ratio > 0.99:
        return gray
    return Image.fromarray(thresh)
