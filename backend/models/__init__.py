"""Data models for the Document Key-Term Viewer."""
from .document import FileType, TextSegment, HighlightedSegment, LoadedDocument
from .api import (
    UrlLoadRequest,
    HighlightRequest,
    TextHighlightRequest,
    SegmentOut,
    DocumentResponse,
    HighlightedSegmentOut,
    HighlightResponse,
    TextHighlightResponse,
)

__all__ = [
    "FileType",
    "TextSegment",
    "HighlightedSegment",
    "LoadedDocument",
    "UrlLoadRequest",
    "HighlightRequest",
    "TextHighlightRequest",
    "SegmentOut",
    "DocumentResponse",
    "HighlightedSegmentOut",
    "HighlightResponse",
    "TextHighlightResponse",
]
