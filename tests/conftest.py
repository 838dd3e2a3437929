"""Shared fixtures: small PDF and DOCX documents built in memory."""
import io
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import docx
import fitz  # PyMuPDF
import pytest


def build_pdf(pages, encrypt=False) -> bytes:
    """Create a PDF with one page per entry; each entry is a list of lines."""
    pdf_document = fitz.open()
    for lines in pages:
        page = pdf_document.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line)
            y += 100
    if encrypt:
        data = pdf_document.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            owner_pw="owner",
            user_pw="secret"
        )
    else:
        data = pdf_document.tobytes()
    pdf_document.close()
    return data


def build_docx(paragraphs) -> bytes:
    """Create a DOCX with the given paragraphs."""
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def three_page_pdf():
    return build_pdf([
        ["There was a breach of covenant."],
        ["No litigation is pending."],
        ["The auditor issued a disclaimer of opinion."],
    ])


@pytest.fixture
def audit_docx():
    return build_docx([
        "The receivables were impaired.",
        "Management will write off the bad debts.",
    ])
