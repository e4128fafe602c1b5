"""Text extraction from uploaded documents."""

from tts_convert.extraction.extractor import (
    SUPPORTED_MEDIA_TYPES,
    DocumentTextExtractor,
    extract_pdf_text,
    normalize_media_type,
)

__all__ = [
    "SUPPORTED_MEDIA_TYPES",
    "DocumentTextExtractor",
    "extract_pdf_text",
    "normalize_media_type",
]
