"""Request and response models for the HTTP API."""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class UrlLoadRequest(BaseModel):
    """Load a document from an HTTP(S) URL."""
    url: str = ""


class HighlightRequest(BaseModel):
    """Search term and key-term toggle, re-sent on every change of the search box."""
    search_term: str = ""
    highlight_key_terms: bool = True


class TextHighlightRequest(HighlightRequest):
    """Highlight arbitrary text without loading a document."""
    text: str = ""


class SegmentOut(BaseModel):
    text: str
    page_number: Optional[int] = None


class DocumentResponse(BaseModel):
    """Summary of a loaded document."""
    document_id: str
    filename: str
    file_type: str
    page_label: str
    segments: List[SegmentOut]
    key_term_counts: Dict[str, int] = Field(default_factory=dict)


class HighlightedSegmentOut(BaseModel):
    html: str
    page_number: Optional[int] = None


class HighlightResponse(BaseModel):
    document_id: str
    search_term: str
    highlight_key_terms: bool
    segments: List[HighlightedSegmentOut]


class TextHighlightResponse(BaseModel):
    html: str
