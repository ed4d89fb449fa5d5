from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

BASE_DIR = Path(__file__).parent

DEFAULT_COMPANY_KEYWORDS: Tuple[str, ...] = (
    "ltd",
    "limited",
    "inc",
    "corp",
    "corporation",
    "company",
    "co.",
    "group",
    "enterprise",
    "trading",
    "international",
    "holdings",
    "tech",
    "technology",
    "solutions",
    "services",
    "industries",
)

DEFAULT_LOCATION_KEYWORDS: Tuple[str, ...] = (
    "city",
    "province",
    "state",
    "district",
    "county",
    "区",
    "市",
    "州",
    "省",
)

DEFAULT_URL_TLDS: Tuple[str, ...] = (
    "com",
    "net",
    "org",
    "io",
    "co",
    "cn",
    "edu",
    "gov",
    "biz",
    "info",
    "ai",
)


def _load_dotenv() -> None:
    repo_root = Path(__file__).resolve().parents[2]
    candidates = [repo_root / ".env", Path.cwd() / ".env"]
    for env_path in candidates:
        if not env_path.exists():
            continue
        try:
            for line in env_path.read_text().splitlines():
                stripped = line.strip()
                if not stripped or stripped.startswith("#") or "=" not in stripped:
                    continue
                key, value = stripped.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value
        except OSError:
            continue
        break


_load_dotenv()


def _env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


def _with_extra(defaults: Tuple[str, ...], env_name: str) -> Tuple[str, ...]:
    extra = [item for item in _env_list(env_name) if item not in defaults]
    return defaults + tuple(extra)


@dataclass(frozen=True)
class OcrConfig:
    provider: str = os.getenv("LEADCAPTURE_OCR_PROVIDER", "ocrspace").strip().lower()
    endpoint: str = os.getenv("LEADCAPTURE_OCR_ENDPOINT", "https://api.ocr.space/parse/image")
    api_key: str = os.getenv("OCR_SPACE_API_KEY", "")
    language: str = os.getenv("LEADCAPTURE_OCR_LANGUAGE", "eng")
    tesseract_lang: str = os.getenv("LEADCAPTURE_TESSERACT_LANG", "eng+chi_sim")
    # OCR.space engine 1 is the faster of the two.
    engine: str = os.getenv("LEADCAPTURE_OCR_ENGINE", "1")
    timeout: float = float(os.getenv("LEADCAPTURE_OCR_TIMEOUT", "30"))
    max_payload_bytes: int = 1_500_000
    max_dimension: int = 1280
    jpeg_quality: int = 80


@dataclass(frozen=True)
class ExtractionConfig:
    company_keywords: Tuple[str, ...] = _with_extra(
        DEFAULT_COMPANY_KEYWORDS, "LEADCAPTURE_EXTRA_COMPANY_KEYWORDS"
    )
    location_keywords: Tuple[str, ...] = _with_extra(
        DEFAULT_LOCATION_KEYWORDS, "LEADCAPTURE_EXTRA_LOCATION_KEYWORDS"
    )
    url_tlds: Tuple[str, ...] = _with_extra(DEFAULT_URL_TLDS, "LEADCAPTURE_EXTRA_URL_TLDS")


@dataclass(frozen=True)
class AppConfig:
    log_level: str = os.getenv("LEADCAPTURE_LOG_LEVEL", "INFO").upper()
    ocr: OcrConfig = field(default_factory=OcrConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)


CONFIG = AppConfig()
