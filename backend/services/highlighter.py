"""Search-term and key-term highlighting for extracted text."""
import logging
import re
from typing import Dict, Iterable, List, Pattern

from models.document import HighlightedSegment, TextSegment

logger = logging.getLogger(__name__)

KEY_TERMS = (
    "breach",
    "dispute",
    "litigation",
    "covenant",
    "bad debts",
    "impaired",
    "impairment",
    "write off",
    "qualified",
    "adverse",
    "disclaimer of opinion",
)

SEARCH_HIGHLIGHT_CLASS = "search-highlight"
KEY_TERM_HIGHLIGHT_CLASS = "key-term-highlight"


class InvalidSearchTermError(ValueError):
    """Raised when a search term is not a valid regular expression in regex mode."""

    def __init__(self, search_term: str, reason: str):
        self.search_term = search_term
        self.message = f"Invalid search pattern: {reason}"
        super().__init__(self.message)


def _key_term_pattern(term: str) -> Pattern:
    # \b anchors the first and last character only, so "bad debts" matches as one phrase.
    # re.ASCII keeps the word boundary to [A-Za-z0-9_] as in browser regex engines.
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE | re.ASCII)


KEY_TERM_PATTERNS = tuple((term, _key_term_pattern(term)) for term in KEY_TERMS)


def _wrap(css_class: str):
    return lambda match: f'<mark class="{css_class}">{match.group(0)}</mark>'


def compile_search_term(search_term: str, as_regex: bool = False) -> Pattern:
    """
    Compile the user's search term as a case-insensitive pattern.

    Args:
        search_term: Text typed in the search box
        as_regex: Treat the term as a regular expression instead of a literal

    Raises:
        InvalidSearchTermError: If as_regex is set and the pattern does not compile
    """
    if not as_regex:
        return re.compile(re.escape(search_term), re.IGNORECASE)
    try:
        return re.compile(search_term, re.IGNORECASE)
    except re.error as e:
        raise InvalidSearchTermError(search_term, str(e)) from e


def highlight(
    text: str,
    search_term: str,
    highlight_key_terms: bool,
    search_as_regex: bool = False
) -> str:
    """
    Wrap search-term and key-term matches in <mark> markers.

    The search term is applied first. Key terms are then matched, in
    KEY_TERMS order, against the already marked-up text, so markers can nest
    and a key term inside a search marker gets wrapped again. Running this on
    its own output is not a no-op.

    Args:
        text: Segment text
        search_term: Ad-hoc search term, may be empty
        highlight_key_terms: Whether to mark KEY_TERMS
        search_as_regex: Compile the search term as a regular expression

    Returns:
        Text with <mark class="search-highlight"> and
        <mark class="key-term-highlight"> markers

    Raises:
        InvalidSearchTermError: Only in regex mode, for a malformed pattern
    """
    if not text:
        return ""

    highlighted = text

    if search_term:
        pattern = compile_search_term(search_term, as_regex=search_as_regex)
        highlighted = pattern.sub(_wrap(SEARCH_HIGHLIGHT_CLASS), highlighted)

    if highlight_key_terms:
        for _, pattern in KEY_TERM_PATTERNS:
            highlighted = pattern.sub(_wrap(KEY_TERM_HIGHLIGHT_CLASS), highlighted)

    return highlighted


def highlight_segments(
    segments: Iterable[TextSegment],
    search_term: str,
    highlight_key_terms: bool,
    search_as_regex: bool = False
) -> List[HighlightedSegment]:
    """Highlight every segment, keeping page numbers and order."""
    if search_as_regex and search_term:
        # Fail before doing any work on a bad pattern
        compile_search_term(search_term, as_regex=True)

    return [
        HighlightedSegment(
            html=highlight(segment.text, search_term, highlight_key_terms, search_as_regex),
            page_number=segment.page_number
        )
        for segment in segments
    ]


def count_key_terms(segments: Iterable[TextSegment]) -> Dict[str, int]:
    """Count whole-word occurrences of each key term in the original text."""
    counts = {term: 0 for term in KEY_TERMS}
    for segment in segments:
        for term, pattern in KEY_TERM_PATTERNS:
            counts[term] += len(pattern.findall(segment.text))
    return counts
