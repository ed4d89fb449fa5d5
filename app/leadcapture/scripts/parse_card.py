from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from leadcapture.pipeline.card import extract_card
from leadcapture.pipeline.merge import card_to_ocr_json, extraction_message
from leadcapture.pipeline.ocr import build_ocr_service


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract contact fields from business card OCR text.")
    parser.add_argument("path", nargs="?", help="Text file with OCR output (stdin when omitted).")
    parser.add_argument("--image", action="store_true", help="Treat PATH as a card image and run OCR first.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.image:
        if not args.path:
            print("--image requires a path", file=sys.stderr)
            return 2
        service = build_ocr_service()
        try:
            text = service.recognize(Path(args.path).read_bytes())
        finally:
            service.close()
    elif args.path:
        text = Path(args.path).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    extraction = extract_card(text)
    payload = {
        "card": extraction.card.model_dump(),
        "populated_fields": extraction.populated_fields,
        "populated_count": extraction.populated_count,
        "message": extraction_message(extraction.populated_count),
        "card_ocr_json": card_to_ocr_json(extraction.card).model_dump(by_alias=True, exclude_none=True),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
