from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from leadcapture.config import OcrConfig
from leadcapture.pipeline.ingest import compress_for_ocr, image_mime_type, load_image, preprocess_image


def _png_bytes(width: int, height: int, mode: str = "RGB") -> bytes:
    img = Image.new(mode, (width, height), "white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def test_small_payload_passes_through() -> None:
    data = _png_bytes(200, 100)
    out, compressed = compress_for_ocr(data, OcrConfig())
    assert out == data
    assert not compressed


def test_large_payload_is_resized_to_jpeg() -> None:
    data = _png_bytes(3000, 1000)
    out, compressed = compress_for_ocr(data, OcrConfig(max_payload_bytes=100))
    assert compressed
    assert image_mime_type(out) == "image/jpeg"
    assert load_image(out).size == (1280, 427)


def test_load_image_converts_mode() -> None:
    image = load_image(_png_bytes(10, 10, mode="RGBA"))
    assert image.mode == "RGB"


def test_load_image_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        load_image(b"not an image")


def test_load_image_from_path(tmp_path) -> None:
    path = tmp_path / "card.PNG"
    path.write_bytes(_png_bytes(40, 20, mode="RGBA"))
    image = load_image(path)
    assert image.size == (40, 20)
    assert image.mode == "RGB"


def test_load_image_rejects_unsupported_suffix(tmp_path) -> None:
    path = tmp_path / "card.pdf"
    path.write_bytes(_png_bytes(10, 10))
    with pytest.raises(ValueError, match="Unsupported file type: .pdf"):
        load_image(path)


def test_preprocess_image_upscales_small_cards() -> None:
    out = preprocess_image(Image.new("RGB", (500, 300), "white"))
    assert out.width == 1000
    assert out.mode in {"L", "1"}
