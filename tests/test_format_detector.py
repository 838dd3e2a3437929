"""Unit tests for format detection."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from models.document import FileType
from services.format_detector import (
    classify,
    classify_upload,
    require_supported,
    UnsupportedFormatError,
    DOCX_MIMETYPE,
)


class TestClassify:
    """Test suite for classify()."""

    @pytest.mark.parametrize("content_type", [
        "application/pdf",
        "application/pdf; charset=binary",
        "application/x-pdf",
    ])
    def test_pdf(self, content_type):
        """Test any content type containing "pdf" is a PDF."""
        assert classify(content_type) == FileType.PDF

    @pytest.mark.parametrize("content_type", [
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/msword",
        "application/msword; charset=binary",
    ])
    def test_docx(self, content_type):
        """Test OOXML word and legacy msword types route to DOCX."""
        assert classify(content_type) == FileType.DOCX

    @pytest.mark.parametrize("content_type", [
        "text/plain",
        "",
        "text/html; charset=utf-8",
        "APPLICATION/PDF",
    ])
    def test_unsupported(self, content_type):
        """Test other types, including differently cased ones, are unsupported."""
        assert classify(content_type) == FileType.UNSUPPORTED

    def test_none_is_unsupported(self):
        """Test a missing header never raises."""
        assert classify(None) == FileType.UNSUPPORTED


class TestClassifyUpload:
    """Test suite for classify_upload()."""

    def test_exact_mime_types(self):
        """Test the three declared MIME types of the file picker."""
        assert classify_upload("application/pdf", "a.pdf") == FileType.PDF
        assert classify_upload(DOCX_MIMETYPE, "a.docx") == FileType.DOCX
        assert classify_upload("application/msword", "a.doc") == FileType.DOCX

    def test_declared_type_wins_over_extension(self):
        """Test a specific non-document MIME type is not overridden by the name."""
        assert classify_upload("text/plain", "notes.pdf") == FileType.UNSUPPORTED

    def test_vendor_pdf_type_not_exact(self):
        """Test uploads need the exact MIME type, unlike URL content types."""
        assert classify_upload("application/x-pdf", "a.bin") == FileType.UNSUPPORTED

    @pytest.mark.parametrize("filename,expected", [
        ("Report.PDF", FileType.PDF),
        ("minutes.docx", FileType.DOCX),
        ("legacy.doc", FileType.DOCX),
        ("image.png", FileType.UNSUPPORTED),
    ])
    def test_generic_type_falls_back_to_extension(self, filename, expected):
        """Test empty or octet-stream types use the file extension."""
        assert classify_upload("application/octet-stream", filename) == expected
        assert classify_upload(None, filename) == expected

    def test_no_hint_at_all(self):
        """Test nothing to go on is unsupported."""
        assert classify_upload(None) == FileType.UNSUPPORTED


class TestRequireSupported:
    """Test suite for require_supported()."""

    def test_supported_passes_through(self):
        assert require_supported(FileType.PDF) == FileType.PDF

    def test_unsupported_raises(self):
        """Test UNSUPPORTED raises with the user-facing message."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            require_supported(FileType.UNSUPPORTED, "text/plain")

        assert exc_info.value.content_type == "text/plain"
        assert exc_info.value.message == "Unsupported file format. Please upload PDF or DOCX files."
