"""
Command-line document highlighter.

This script:
1. Reads a local PDF/DOCX file or fetches one from a URL
2. Extracts its text (one segment per PDF page, one for DOCX)
3. Prints each segment with search-term and key-term markers

Usage:
    python highlight_document.py report.pdf --search "going concern"
    python highlight_document.py https://example.com/audit.docx --no-key-terms
"""
import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional, Tuple

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from config import MAX_DOCUMENT_BYTES, SEARCH_TERM_AS_REGEX
from models.document import TextSegment
from services.format_detector import classify, classify_upload, UnsupportedFormatError
from services.document_extractor import DocumentExtractor, ExtractionError
from services.document_fetcher import DocumentFetcher, DocumentTooLargeError, TransportError
from services.highlighter import highlight_segments, InvalidSearchTermError

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def load_segments(source: str, extractor: DocumentExtractor, fetcher: DocumentFetcher) -> Tuple[str, List[TextSegment]]:
    """
    Load and extract a document from a path or URL.

    Returns:
        (display filename, extracted segments)
    """
    if is_url(source):
        fetched = await fetcher.fetch(source)
        file_type = classify(fetched.content_type)
        filename, data = fetched.filename, fetched.content
    else:
        path = Path(source)
        mime_type, _ = mimetypes.guess_type(path.name)
        file_type = classify_upload(mime_type, path.name)
        if path.stat().st_size > MAX_DOCUMENT_BYTES:
            raise DocumentTooLargeError(MAX_DOCUMENT_BYTES)
        filename, data = path.name, path.read_bytes()

    logger.info(f"Loading {filename} as {file_type.value}")
    segments = await extractor.extract_async(data, file_type)
    return filename, segments


def render(filename: str, segments: List[TextSegment], search_term: str, key_terms: bool, as_regex: bool) -> str:
    """Render highlighted segments as plain text with page headers."""
    lines = [filename, f"{len(segments)} pages" if len(segments) > 1 else "1 page", ""]
    for segment in highlight_segments(segments, search_term, key_terms, search_as_regex=as_regex):
        if segment.page_number:
            lines.append(f"Page {segment.page_number}")
        lines.append(segment.html)
        lines.append("")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the highlighter; returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Extract text from a PDF or DOCX document and highlight key terms"
    )
    parser.add_argument("source", help="Path to a local file or an http(s) URL")
    parser.add_argument("--search", default="", help="Search term to highlight")
    parser.add_argument(
        "--no-key-terms",
        action="store_true",
        help="Do not highlight the built-in key terms"
    )
    parser.add_argument(
        "--regex",
        action="store_true",
        default=SEARCH_TERM_AS_REGEX,
        help="Treat the search term as a regular expression"
    )
    args = parser.parse_args(argv)

    try:
        filename, segments = asyncio.run(
            load_segments(args.source, DocumentExtractor(), DocumentFetcher())
        )
        print(render(filename, segments, args.search, not args.no_key_terms, args.regex))
    except (UnsupportedFormatError, ExtractionError, TransportError, DocumentTooLargeError, InvalidSearchTermError) as e:
        print(e.message, file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Could not read {args.source}: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
