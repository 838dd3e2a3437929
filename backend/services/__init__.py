"""Services for the Document Key-Term Viewer."""
from .format_detector import classify, classify_upload, require_supported, UnsupportedFormatError
from .document_extractor import DocumentExtractor, ExtractionError
from .document_fetcher import DocumentFetcher, DocumentTooLargeError, FetchedDocument, TransportError
from .document_store import DocumentStore, DocumentNotFoundError
from .highlighter import KEY_TERMS, highlight, highlight_segments, count_key_terms, InvalidSearchTermError

__all__ = ['classify', 'classify_upload', 'require_supported', 'UnsupportedFormatError', 'DocumentExtractor', 'ExtractionError', 'DocumentFetcher', 'FetchedDocument', 'TransportError', 'DocumentTooLargeError', 'DocumentStore', 'DocumentNotFoundError', 'KEY_TERMS', 'highlight', 'highlight_segments', 'count_key_terms', 'InvalidSearchTermError']
