"""Document data models."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

class FileType(str, Enum):
    """Document format as detected from a content type or file hint."""
    PDF = "pdf"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"

@dataclass(frozen=True)
class TextSegment:
    """One unit of extracted text: a PDF page, or a whole DOCX document."""
    text: str
    page_number: Optional[int] = None  # set only for paginated sources

@dataclass(frozen=True)
class HighlightedSegment:
    """A segment rendered with inline highlight markers."""
    html: str
    page_number: Optional[int] = None

@dataclass
class LoadedDocument:
    """Represents a document held by the viewer."""
    document_id: str
    filename: str
    file_type: FileType
    segments: List[TextSegment]
    loaded_at: datetime = field(default_factory=datetime.now)

    @property
    def page_label(self) -> str:
        """Human readable page count, e.g. "3 pages" or "1 page"."""
        if len(self.segments) > 1:
            return f"{len(self.segments)} pages"
        return "1 page"
