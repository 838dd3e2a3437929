"""Tests for the public model exports."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
import models


@pytest.mark.parametrize("name", models.__all__)
def test_exported_names_resolve(name):
    assert getattr(models, name) is not None


def test_highlighted_segment_out_exported():
    from models import HighlightedSegmentOut, HighlightResponse
    assert "HighlightedSegmentOut" in models.__all__

    response = HighlightResponse(
        document_id="doc_x",
        search_term="x",
        highlight_key_terms=False,
        segments=[HighlightedSegmentOut(page_number=1, html="<mark>x</mark>")]
    )
    assert response.segments[0].page_number == 1
