from __future__ import annotations

import io
import threading
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import ExtractionError
from ..logging_config import get_logger

logger = get_logger("extract.image")


IMAGE_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/tiff",
        "image/webp",
    }
)


class OcrEngineLike(Protocol):
    def recognize(self, image: np.ndarray) -> list[str]: ...


def _lines_from_result(result: Any) -> list[str]:
    """Flatten PaddleOCR output into text lines.

    2.x returns per-page lists of ``[box, (text, score)]``; 3.x returns
    per-page mappings carrying ``rec_texts``.
    """
    lines: list[str] = []
    for page in result or []:
        if not page:
            continue
        if hasattr(page, "get") and page.get("rec_texts") is not None:
            lines.extend(str(t) for t in page["rec_texts"])
            continue
        for item in page:
            if isinstance(item, (list, tuple)) and len(item) >= 2:
                rec = item[1]
                lines.append(str(rec[0] if isinstance(rec, (list, tuple)) else rec))
    return lines


@dataclass
class PaddleOcrEngine:
    lang: str = "en"

    def __post_init__(self):
        # Lazy import: paddle is heavy and only needed for images.
        from paddleocr import PaddleOCR

        self.model = PaddleOCR(use_angle_cls=True, lang=self.lang)

    def recognize(self, image: np.ndarray) -> list[str]:
        return _lines_from_result(self.model.ocr(image))


_engine: OcrEngineLike | None = None
_engine_lock = threading.Lock()


def get_ocr_engine() -> OcrEngineLike:
    """Process-wide OCR engine, built on first use.

    Models are read-only after loading, so the engine is shared by every
    worker and never torn down.
    """
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                logger.info("Loading OCR models")
                _engine = PaddleOcrEngine()
    return _engine


def set_ocr_engine(engine: OcrEngineLike | None) -> None:
    """Install a specific engine (or None to reload lazily on next use)."""
    global _engine
    with _engine_lock:
        _engine = engine


class ImageHandler:
    """Raster images via OCR."""

    def can_handle(self, mime_type: str) -> bool:
        return mime_type in IMAGE_MIME_TYPES

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        try:
            with Image.open(io.BytesIO(content)) as img:
                rgb = np.asarray(img.convert("RGB"))
        except (UnidentifiedImageError, OSError) as e:
            raise ExtractionError(f"Failed to decode image: {e}") from e

        try:
            engine = get_ocr_engine()
        except ImportError as e:
            raise ExtractionError(f"OCR engine unavailable: {e}") from e

        try:
            raw_lines = engine.recognize(rgb)
        except Exception as e:
            raise ExtractionError(f"OCR recognition failed: {e}") from e

        lines = [ln.strip() for ln in raw_lines if ln and ln.strip()]
        text = "\n".join(lines).strip()
        if not text:
            raise ExtractionError("No text found in image")
        return text
