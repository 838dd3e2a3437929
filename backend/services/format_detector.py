"""Format detection from content types and upload hints."""
import logging
from typing import Optional

from models.document import FileType

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"
DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MSWORD_MIMETYPE = "application/msword"

# Declared types that carry no format information
GENERIC_MIMETYPES = {"", "application/octet-stream", "binary/octet-stream"}

EXTENSION_TYPES = {
    ".pdf": FileType.PDF,
    ".docx": FileType.DOCX,
    ".doc": FileType.DOCX,
}

UNSUPPORTED_MESSAGE = "Unsupported file format. Please upload PDF or DOCX files."


class UnsupportedFormatError(Exception):
    """Raised when a document is neither PDF nor Word family."""

    def __init__(self, content_type: str = "", message: str = UNSUPPORTED_MESSAGE):
        self.content_type = content_type
        self.message = message
        super().__init__(message)


def classify(content_type: str) -> FileType:
    """
    Classify a transport content type.

    Substring matching tolerates parameter suffixes such as "; charset=binary"
    and vendor variants such as "application/x-pdf".

    Args:
        content_type: Content-Type header value, as received

    Returns:
        FileType.PDF, FileType.DOCX or FileType.UNSUPPORTED
    """
    content_type = content_type or ""
    if "pdf" in content_type:
        return FileType.PDF
    if "officedocument.wordprocessingml.document" in content_type or "msword" in content_type:
        return FileType.DOCX
    return FileType.UNSUPPORTED


def classify_upload(mime_type: Optional[str], filename: Optional[str] = None) -> FileType:
    """
    Classify a locally selected file.

    The declared MIME type must match exactly. Browsers and CLI tools often
    send an empty or generic type, in which case the file extension decides.

    Args:
        mime_type: MIME type declared for the upload
        filename: Original file name, used as a fallback hint

    Returns:
        FileType for the upload
    """
    mime_type = (mime_type or "").split(";")[0].strip().lower()

    if mime_type == PDF_MIMETYPE:
        return FileType.PDF
    if mime_type in (DOCX_MIMETYPE, MSWORD_MIMETYPE):
        return FileType.DOCX

    if mime_type in GENERIC_MIMETYPES and filename:
        lower = filename.lower()
        for extension, file_type in EXTENSION_TYPES.items():
            if lower.endswith(extension):
                logger.debug(f"Classified {filename} by extension as {file_type.value}")
                return file_type

    return FileType.UNSUPPORTED


def require_supported(file_type: FileType, content_type: str = "") -> FileType:
    """Return file_type unchanged, or raise UnsupportedFormatError."""
    if file_type == FileType.UNSUPPORTED:
        logger.warning(f"Unsupported content type: {content_type!r}")
        raise UnsupportedFormatError(content_type)
    return file_type
