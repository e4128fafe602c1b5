"""Text extraction from uploaded documents.

PDF parsing is CPU-bound and runs in a thread pool so the event loop keeps
serving other requests.
"""

import asyncio
import io
from concurrent.futures import ThreadPoolExecutor

from pypdf import PdfReader

from tts_convert.api.exceptions import ExtractionFailedError, UnsupportedMediaTypeError
from tts_convert.core.interfaces import TextExtractor
from tts_convert.core.models import PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE
from tts_convert.utils.logging import get_logger

logger = get_logger("conversion")

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="pdf_extract_")

SUPPORTED_MEDIA_TYPES = [PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE]


def normalize_media_type(media_type: str | None) -> str:
    """Strip parameters and case from a media type ("Text/Plain; charset=utf-8")."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text of every page of a PDF document."""
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


class DocumentTextExtractor(TextExtractor):
    """Extracts text from PDF and UTF-8 plain text uploads."""

    def __init__(self, executor: ThreadPoolExecutor | None = None) -> None:
        self._executor = executor or _executor

    async def extract(self, data: bytes, media_type: str) -> str:
        media_type = normalize_media_type(media_type)

        if media_type == TEXT_MEDIA_TYPE:
            # Invalid byte sequences become U+FFFD instead of failing the upload
            return data.decode("utf-8", errors="replace")

        if media_type != PDF_MEDIA_TYPE:
            raise UnsupportedMediaTypeError(media_type, SUPPORTED_MEDIA_TYPES)

        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(self._executor, extract_pdf_text, data)
        except Exception as e:
            logger.error("PDF extraction failed", size_bytes=len(data), error=str(e))
            raise ExtractionFailedError(media_type, str(e)) from e

        logger.debug("Extracted PDF text", size_bytes=len(data), text_length=len(text))
        return text
