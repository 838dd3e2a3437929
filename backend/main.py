"""Main entry point for the Document Key-Term Viewer API."""
import logging
import time
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from config import PORT, CORS_ORIGINS, LOG_LEVEL, LOG_FORMAT, MAX_DOCUMENT_BYTES, UPLOAD_CHUNK_SIZE, SEARCH_TERM_AS_REGEX
from logger import setup_logging
from models.api import (
    UrlLoadRequest,
    HighlightRequest,
    TextHighlightRequest,
    SegmentOut,
    DocumentResponse,
    HighlightedSegmentOut,
    HighlightResponse,
    TextHighlightResponse,
)
from models.document import FileType, LoadedDocument
from services.format_detector import classify, classify_upload, require_supported, UnsupportedFormatError
from services.document_extractor import DocumentExtractor, ExtractionError
from services.document_fetcher import DocumentFetcher, DocumentTooLargeError, TransportError
from services.document_store import DocumentStore, DocumentNotFoundError
from services.highlighter import KEY_TERMS, highlight, highlight_segments, count_key_terms, InvalidSearchTermError

if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL, LOG_FORMAT)

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Document Key-Term Viewer",
    description="Extract text from PDF and DOCX documents and highlight key terms",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
document_extractor: DocumentExtractor = None
document_fetcher: DocumentFetcher = None
document_store: DocumentStore = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global document_extractor, document_fetcher, document_store

    logger.info("Initializing Document Key-Term Viewer services...")

    document_extractor = DocumentExtractor()
    document_fetcher = DocumentFetcher()
    document_store = DocumentStore()

    logger.info("All services initialized successfully")


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": {"code": code, "message": message}}
    )


def _document_response(document: LoadedDocument) -> DocumentResponse:
    return DocumentResponse(
        document_id=document.document_id,
        filename=document.filename,
        file_type=document.file_type.value,
        page_label=document.page_label,
        segments=[
            SegmentOut(text=segment.text, page_number=segment.page_number)
            for segment in document.segments
        ],
        key_term_counts=count_key_terms(document.segments)
    )


def _check_supported(file_type: FileType, content_type: str) -> None:
    try:
        require_supported(file_type, content_type)
    except UnsupportedFormatError as e:
        raise _error(415, "UNSUPPORTED_FORMAT", e.message)


async def _read_upload(file: UploadFile) -> bytes:
    """Read an upload in chunks, rejecting it as soon as it passes MAX_DOCUMENT_BYTES."""
    chunks = []
    received = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        received += len(chunk)
        if received > MAX_DOCUMENT_BYTES:
            logger.warning(f"Upload {file.filename} passed limit of {MAX_DOCUMENT_BYTES} bytes")
            raise _error(413, "DOCUMENT_TOO_LARGE", DocumentTooLargeError(MAX_DOCUMENT_BYTES).message)
        chunks.append(chunk)
    return b"".join(chunks)


async def _load(data: bytes, file_type: FileType, filename: str) -> DocumentResponse:
    """Extract and store a supported document. Every failure is terminal."""
    start_time = time.time()
    try:
        segments = await document_extractor.extract_async(data, file_type)
    except ExtractionError as e:
        logger.error(f"Extraction failed for {filename}: {e.reason}")
        raise _error(422, "EXTRACTION_FAILED", e.message)

    document = document_store.add(filename, file_type, segments)
    latency_ms = int((time.time() - start_time) * 1000)
    logger.info(
        f"Loaded {filename} in {latency_ms}ms",
        extra={"document": {
            "document_id": document.document_id,
            "file_type": file_type.value,
            "segments": len(segments),
            "latency_ms": latency_ms
        }}
    )
    return _document_response(document)


def _get_document(document_id: str) -> LoadedDocument:
    try:
        return document_store.get(document_id)
    except DocumentNotFoundError as e:
        raise _error(404, "DOCUMENT_NOT_FOUND", e.message)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Document Key-Term Viewer API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "document-key-term-viewer",
        "version": "1.0.0"
    }


@app.get("/key-terms")
async def key_terms():
    """List the key terms highlighted when the toggle is on."""
    return {"key_terms": list(KEY_TERMS)}


@app.post("/documents/upload", response_model=DocumentResponse)
async def upload_document(file: UploadFile = File(...)) -> DocumentResponse:
    """
    Load a locally selected PDF or DOCX file.

    The declared MIME type decides the extractor; an empty or generic type
    falls back to the file extension.
    """
    filename = file.filename or "document"
    file_type = classify_upload(file.content_type, filename)
    logger.info(f"Upload {filename} ({file.content_type}) classified as {file_type.value}")

    _check_supported(file_type, file.content_type or "")
    data = await _read_upload(file)
    return await _load(data, file_type, filename)


@app.post("/documents/url", response_model=DocumentResponse)
async def load_document_from_url(request: UrlLoadRequest) -> DocumentResponse:
    """
    Fetch a document from a URL and load it.

    The response Content-Type decides the extractor. Transport failures
    (502) are reported separately from extraction failures (422).
    """
    try:
        fetched = await document_fetcher.fetch(request.url, max_bytes=MAX_DOCUMENT_BYTES)
    except ValueError as e:
        raise _error(400, "URL_REQUIRED", str(e))
    except TransportError as e:
        raise _error(502, "FETCH_FAILED", e.message)
    except DocumentTooLargeError as e:
        raise _error(413, "DOCUMENT_TOO_LARGE", e.message)

    file_type = classify(fetched.content_type)
    _check_supported(file_type, fetched.content_type)
    return await _load(fetched.content, file_type, fetched.filename)


@app.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str) -> DocumentResponse:
    """Return the extracted segments of a loaded document."""
    return _document_response(_get_document(document_id))


@app.post("/documents/{document_id}/highlight", response_model=HighlightResponse)
def highlight_loaded_document(document_id: str, request: HighlightRequest) -> HighlightResponse:
    """Highlight every segment of a loaded document."""
    document = _get_document(document_id)
    try:
        segments = highlight_segments(
            document.segments,
            request.search_term,
            request.highlight_key_terms,
            search_as_regex=SEARCH_TERM_AS_REGEX
        )
    except InvalidSearchTermError as e:
        raise _error(400, "INVALID_SEARCH_TERM", e.message)

    return HighlightResponse(
        document_id=document.document_id,
        search_term=request.search_term,
        highlight_key_terms=request.highlight_key_terms,
        segments=[
            HighlightedSegmentOut(html=segment.html, page_number=segment.page_number)
            for segment in segments
        ]
    )


@app.delete("/documents/{document_id}")
async def reset_document(document_id: str):
    """Discard a loaded document."""
    try:
        document_store.remove(document_id)
    except DocumentNotFoundError as e:
        raise _error(404, "DOCUMENT_NOT_FOUND", e.message)
    return {"status": "reset", "document_id": document_id}


@app.post("/highlight", response_model=TextHighlightResponse)
def highlight_text(request: TextHighlightRequest) -> TextHighlightResponse:
    """Highlight a piece of text without loading a document."""
    try:
        html = highlight(
            request.text,
            request.search_term,
            request.highlight_key_terms,
            search_as_regex=SEARCH_TERM_AS_REGEX
        )
    except InvalidSearchTermError as e:
        raise _error(400, "INVALID_SEARCH_TERM", e.message)
    return TextHighlightResponse(html=html)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Document Key-Term Viewer API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
