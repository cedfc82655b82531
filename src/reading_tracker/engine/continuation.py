"""
Module: engine.continuation

Purpose:
    Picks where the user should resume reading and cuts a bounded excerpt
    from there that ends on a natural boundary.

Key Functions:
    - locate_continuation(): Main entry point, returns an Excerpt
    - next_unread_paragraph(): First paragraph with unread text
    - previous_paragraph(): Paragraph before a position

Algorithm:
    1. Unread gaps = complement of the read cover in [0, total)
    2. First paragraph start (ascending) inside a gap -> UNREAD
    3. Otherwise furthest read end > 0 -> start lookback before it -> CURRENT
    4. Otherwise the document start -> BEGINNING
    5. Grow the excerpt to window_units; if that lands inside the document,
       snap the end just past the last newline within
       ±boundary_search_units, else just past the last ". ", else keep it
    6. A start at or past the end yields an empty excerpt at total

    Every cut goes through Utf16Index so no surrogate pair is split.

Dependencies:
    - engine.config: ContinuationConfig sizes
    - engine.ranges.range_set: complement, clip
    - engine.offsets: Utf16Index, paragraph_starts
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from reading_tracker.core.errors import InvalidOffset, check_interval
from reading_tracker.core.models import ContinuationType, Document, Excerpt, Paragraph
from .config import ContinuationConfig, DEFAULT_CONFIG
from .offsets.markup import paragraph_starts as detect_paragraph_starts
from .offsets.utf16 import Utf16Index
from .ranges.range_set import Span, SpanLike, as_span, clip, complement

logger = logging.getLogger(__name__)


def _first_start_in_gaps(starts: Iterable[int], gaps: Sequence[Span]) -> Optional[int]:
    """First start (ascending) with gap_start <= start < gap_end."""
    gap_iter = iter(gaps)
    gap = next(gap_iter, None)
    for start in sorted(set(starts)):
        while gap is not None and gap[1] <= start:
            gap = next(gap_iter, None)
        if gap is None:
            return None
        if gap[0] <= start:
            return start
    return None


def choose_start(
    total_length: int,
    spans: Sequence[Span],
    starts: Iterable[int],
    config: ContinuationConfig,
) -> Tuple[int, ContinuationType]:
    """
    Steps 1-4: resume position and the reason for it.

    Args:
        total_length: Document length in code units
        spans: Read intervals as (start, end) pairs
        starts: Paragraph start offsets
        config: Lookback size

    Returns:
        (start, continuation type)
    """
    gaps = complement(total_length, spans)
    if gaps:
        start = _first_start_in_gaps(starts, gaps)
        if start is not None:
            return start, ContinuationType.UNREAD

    current = max((end for _, end in spans), default=0)
    if current > 0:
        return max(0, current - config.lookback_units), ContinuationType.CURRENT
    return 0, ContinuationType.BEGINNING


def grow_excerpt_end(index: Utf16Index, start: int, config: ContinuationConfig) -> int:
    """
    Step 5: excerpt end for a start position.

    Args:
        index: Position map of the document
        start: Excerpt start (a code point boundary)
        config: Window and boundary search sizes

    Returns:
        End position on a code point boundary, > start when start < length
    """
    total = index.length
    target = min(start + config.window_units, total)
    if target >= total:
        return total

    lo = max(start + 1, target - config.boundary_search_units)
    hi = min(total, target + config.boundary_search_units)

    newline = index.rfind("\n", lo, hi)
    if newline >= 0:
        end = newline + 1
    else:
        sentence = index.rfind(". ", lo, hi)
        end = sentence + 1 if sentence >= 0 else target

    end = index.align_backward(end)
    if end <= start:
        end = index.align_forward(start + 1)
    return end


def locate_continuation(
    document: Document,
    read_intervals: Iterable[SpanLike],
    paragraph_starts: Optional[Iterable[int]] = None,
    config: Optional[ContinuationConfig] = None,
) -> Excerpt:
    """
    Choose where to resume reading and cut the excerpt.

    Args:
        document: Document snapshot
        read_intervals: Stored read intervals (any order, may overlap)
        paragraph_starts: Paragraph start offsets from the paragraph
            detector; detected from the content when None
        config: Excerpt sizing (default DEFAULT_CONFIG.continuation)

    Returns:
        Excerpt; empty and pinned to the end when nothing is left

    Raises:
        InvalidOffset: If a read interval or paragraph start lies outside
            the document

    Example:
        >>> doc = Document.from_content(1, "Hello world.")
        >>> locate_continuation(doc, [], paragraph_starts=[]).continuation_type
        <ContinuationType.BEGINNING: 'beginning'>
    """
    config = config or DEFAULT_CONFIG.continuation
    total = document.content_length

    spans = [as_span(r) for r in read_intervals]
    for span_start, span_end in spans:
        check_interval(span_start, span_end, total)

    if paragraph_starts is None:
        starts: List[int] = detect_paragraph_starts(document.content)
    else:
        starts = list(paragraph_starts)
        for start in starts:
            if start < 0 or start > total:
                raise InvalidOffset(f"paragraph start {start} outside document of length {total}")

    start, continuation_type = choose_start(total, spans, starts, config)
    if start >= total:
        logger.debug(f"Document {document.id} fully consumed ({continuation_type})")
        return Excerpt.exhausted(total, continuation_type)

    index = Utf16Index(document.content)
    start = index.align_backward(start)
    end = grow_excerpt_end(index, start, config)
    logger.debug(f"Continuation for document {document.id}: {continuation_type} [{start}, {end})")

    return Excerpt(
        start_pos=start,
        end_pos=end,
        text=index.slice(start, end),
        continuation_type=continuation_type,
        total_length=total,
        read_ranges=tuple(clip(spans, start, end)),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Paragraph Navigation
# ─────────────────────────────────────────────────────────────────────────────

def next_unread_paragraph(
    paragraphs: Sequence[Paragraph],
    read_intervals: Iterable[SpanLike],
    total_length: int,
    after: int = 0,
) -> Optional[Paragraph]:
    """
    First paragraph starting at or after `after` with any unread text.

    Returns:
        The paragraph, or None when everything from `after` on is read
    """
    gaps = complement(total_length, read_intervals)
    for paragraph in sorted(paragraphs, key=lambda p: p.start):
        if paragraph.start < after:
            continue
        if any(gap_start < paragraph.end and paragraph.start < gap_end for gap_start, gap_end in gaps):
            return paragraph
    return None


def previous_paragraph(paragraphs: Sequence[Paragraph], position: int) -> Optional[Paragraph]:
    """
    Last paragraph ending at or before position.

    For a position inside paragraph k this is paragraph k-1.
    """
    candidates = [p for p in paragraphs if p.end <= position]
    return max(candidates, key=lambda p: p.start, default=None)
