"""Text extraction for PDF and DOCX byte buffers."""
import asyncio
import functools
import io
import logging
from typing import List

import fitz  # PyMuPDF
import mammoth

from models.document import FileType, TextSegment
from services.format_detector import require_supported

logger = logging.getLogger(__name__)

# PyMuPDF block type for text blocks (1 is image)
TEXT_BLOCK = 0


class ExtractionError(Exception):
    """Raised when a document cannot be decoded. No partial results are kept."""

    def __init__(self, file_type: FileType, reason: str):
        self.file_type = file_type
        self.reason = reason
        self.message = f"Failed to extract text from {file_type.value.upper()}. Please try another file."
        super().__init__(f"{self.message} ({reason})")


class DocumentExtractor:
    """Extracts ordered text segments from raw document bytes."""

    def extract(self, data: bytes, file_type: FileType) -> List[TextSegment]:
        """
        Extract text segments using the extractor for file_type.

        Args:
            data: Raw document bytes
            file_type: Declared or detected format

        Returns:
            List of TextSegment in document order

        Raises:
            UnsupportedFormatError: If file_type is UNSUPPORTED
            ExtractionError: If the decoder fails
        """
        require_supported(file_type)
        if file_type == FileType.PDF:
            return self.extract_pdf(data)
        return self.extract_docx(data)

    async def extract_async(self, data: bytes, file_type: FileType) -> List[TextSegment]:
        """Awaitable extract(); the decoder runs in the loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.extract, data, file_type)
        )

    def extract_pdf(self, data: bytes) -> List[TextSegment]:
        """
        Extract text page-by-page from a PDF.

        Each page's text spans are joined with a single space, in the order
        PyMuPDF reports them. Spacing inside and between spans is kept as is.

        Args:
            data: PDF file bytes

        Returns:
            One TextSegment per page, page_number 1..N

        Raises:
            ExtractionError: If the PDF is corrupt, encrypted or unreadable
        """
        try:
            with fitz.open(stream=data, filetype="pdf") as pdf_document:
                if pdf_document.needs_pass:
                    raise ExtractionError(FileType.PDF, "document is encrypted")

                segments = []
                for page_index in range(pdf_document.page_count):
                    page = pdf_document.load_page(page_index)
                    segments.append(TextSegment(
                        text=self._join_page_spans(page),
                        page_number=page_index + 1  # 1-indexed
                    ))
        except ExtractionError:
            raise
        except Exception as e:
            logger.error(f"Failed to extract PDF text: {e}")
            raise ExtractionError(FileType.PDF, str(e)) from e

        logger.info(f"Extracted {len(segments)} pages from PDF")
        return segments

    def extract_docx(self, data: bytes) -> List[TextSegment]:
        """
        Extract raw text from a DOCX package as a single segment.

        Args:
            data: DOCX file bytes

        Returns:
            Single-element list with no page number

        Raises:
            ExtractionError: If the package cannot be read
        """
        try:
            result = mammoth.extract_raw_text(io.BytesIO(data))
        except Exception as e:
            logger.error(f"Failed to extract DOCX text: {e}")
            raise ExtractionError(FileType.DOCX, str(e)) from e

        for message in result.messages:
            logger.debug(f"mammoth: {message}")

        logger.info(f"Extracted {len(result.value)} characters from DOCX")
        return [TextSegment(text=result.value)]

    @staticmethod
    def _join_page_spans(page) -> str:
        content = page.get_text("dict")
        spans = [
            span["text"]
            for block in content["blocks"]
            if block.get("type") == TEXT_BLOCK
            for line in block["lines"]
            for span in line["spans"]
        ]
        return " ".join(spans)
