"""Unit tests for DocumentStore."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from datetime import datetime
from models.document import FileType, LoadedDocument, TextSegment
from services.document_store import DocumentStore, DocumentNotFoundError


class TestDocumentStore:
    """Test suite for DocumentStore."""

    @pytest.fixture
    def store(self):
        return DocumentStore()

    def test_add_document(self, store):
        """Test adding a document assigns an id and keeps segments."""
        segments = [TextSegment(text="one", page_number=1), TextSegment(text="two", page_number=2)]
        document = store.add("report.pdf", FileType.PDF, segments)

        assert document.document_id.startswith("doc_")
        assert document.filename == "report.pdf"
        assert document.segments == segments
        assert isinstance(document.loaded_at, datetime)
        assert len(store) == 1

    def test_document_id_uniqueness(self, store):
        """Test documents get unique ids."""
        doc1 = store.add("a.docx", FileType.DOCX, [TextSegment(text="a")])
        doc2 = store.add("a.docx", FileType.DOCX, [TextSegment(text="a")])

        assert doc1.document_id != doc2.document_id

    def test_get_document(self, store):
        document = store.add("a.docx", FileType.DOCX, [TextSegment(text="a")])
        assert store.get(document.document_id) is document

    def test_get_unknown_document(self, store):
        with pytest.raises(DocumentNotFoundError, match="doc_missing"):
            store.get("doc_missing")

    def test_remove_document(self, store):
        """Test reset discards the document."""
        document = store.add("a.docx", FileType.DOCX, [TextSegment(text="a")])
        store.remove(document.document_id)

        with pytest.raises(DocumentNotFoundError):
            store.get(document.document_id)

    def test_remove_unknown_document(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.remove("doc_missing")

    def test_clear(self, store):
        store.add("a.pdf", FileType.PDF, [TextSegment(text="a", page_number=1)])
        store.clear()
        assert len(store) == 0


class TestLoadedDocument:
    """Test suite for the page label."""

    def _document(self, segments):
        return LoadedDocument(document_id="doc_x", filename="x", file_type=FileType.PDF, segments=segments)

    def test_page_label_plural(self):
        segments = [TextSegment(text="", page_number=i) for i in (1, 2, 3)]
        assert self._document(segments).page_label == "3 pages"

    def test_page_label_single(self):
        assert self._document([TextSegment(text="")]).page_label == "1 page"

    def test_segments_are_immutable(self):
        segment = TextSegment(text="breach", page_number=1)
        with pytest.raises(AttributeError):
            segment.text = "changed"


class TestDocumentStoreCapacity:
    """Test suite for bounded storage."""

    def test_oldest_document_evicted(self):
        """Test loading past capacity discards the oldest documents first."""
        store = DocumentStore(max_documents=2)
        first = store.add("1.pdf", FileType.PDF, [TextSegment(text="a", page_number=1)])
        second = store.add("2.pdf", FileType.PDF, [TextSegment(text="b", page_number=1)])
        third = store.add("3.pdf", FileType.PDF, [TextSegment(text="c", page_number=1)])

        assert len(store) == 2
        with pytest.raises(DocumentNotFoundError):
            store.get(first.document_id)
        assert store.get(second.document_id) is second
        assert store.get(third.document_id) is third

    def test_single_slot_replaces_previous(self):
        """Test a capacity of one keeps only the latest document."""
        store = DocumentStore(max_documents=1)
        old = store.add("old.docx", FileType.DOCX, [TextSegment(text="old")])
        new = store.add("new.docx", FileType.DOCX, [TextSegment(text="new")])

        assert len(store) == 1
        assert store.get(new.document_id) is new
        with pytest.raises(DocumentNotFoundError):
            store.get(old.document_id)

    def test_many_loads_stay_bounded(self):
        store = DocumentStore(max_documents=5)
        for i in range(50):
            store.add(f"{i}.pdf", FileType.PDF, [TextSegment(text="", page_number=1)])
        assert len(store) == 5

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="at least 1"):
            DocumentStore(max_documents=0)
