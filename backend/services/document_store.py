"""In-memory store for documents loaded into the viewer."""
import logging
import threading
import uuid
from collections import OrderedDict
from typing import List

from config import MAX_LOADED_DOCUMENTS
from models.document import FileType, LoadedDocument, TextSegment

logger = logging.getLogger(__name__)


class DocumentNotFoundError(KeyError):
    """Raised when a document id is unknown or was reset."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        self.message = f"Document {document_id} not found"
        super().__init__(self.message)


class DocumentStore:
    """Holds the most recently loaded documents in memory. Nothing is persisted."""

    def __init__(self, max_documents: int = MAX_LOADED_DOCUMENTS):
        """
        Initialize the store.

        Args:
            max_documents: Capacity; adding beyond it evicts the oldest document
        """
        if max_documents < 1:
            raise ValueError("max_documents must be at least 1")

        self.max_documents = max_documents
        self._documents: "OrderedDict[str, LoadedDocument]" = OrderedDict()
        self._lock = threading.Lock()
        logger.info("DocumentStore initialized")

    def add(self, filename: str, file_type: FileType, segments: List[TextSegment]) -> LoadedDocument:
        """
        Store a freshly extracted document, evicting the oldest ones past capacity.

        Args:
            filename: Display name of the document
            file_type: Format the segments were extracted from
            segments: Extracted text segments

        Returns:
            LoadedDocument with a new id
        """
        document = LoadedDocument(
            document_id=self._generate_document_id(),
            filename=filename,
            file_type=file_type,
            segments=list(segments)
        )
        with self._lock:
            self._documents[document.document_id] = document
            evicted = []
            while len(self._documents) > self.max_documents:
                evicted_id, _ = self._documents.popitem(last=False)
                evicted.append(evicted_id)

        for evicted_id in evicted:
            logger.info(f"Evicted document {evicted_id} (capacity {self.max_documents})")

        logger.info(f"Stored document {document.document_id}: {filename} ({document.page_label})")
        return document

    def get(self, document_id: str) -> LoadedDocument:
        """Return a stored document or raise DocumentNotFoundError."""
        with self._lock:
            document = self._documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    def remove(self, document_id: str) -> None:
        """Discard a document (viewer reset)."""
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is None:
            raise DocumentNotFoundError(document_id)
        logger.info(f"Removed document {document_id}")

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def _generate_document_id(self) -> str:
        return f"doc_{uuid.uuid4().hex[:12]}"
