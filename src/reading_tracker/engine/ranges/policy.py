"""
Module: engine.ranges.policy

Purpose:
    Decides which rows to write when the user marks or unmarks a span as
    read. Marking persists only the genuinely unread parts of the new span;
    unmarking trims or splits the stored spans it touches. Counters riding
    on a span are shared out in proportion to length.

Key Functions:
    - plan_insertion(): Unread sub-intervals of a new read interval
    - plan_removal(): Rows to delete and replacement rows for an unmark
    - scale_count(): Proportional counter split

Key Classes:
    - RemovalPlan: Result of plan_removal()

Guarantees:
    plan_insertion() is idempotent: persisting its result and calling it
    again with the same interval returns an empty list.

Used By:
    - engine.pipeline: record_read()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from reading_tracker.core.errors import InvalidOffset, check_interval
from reading_tracker.core.models import ReadInterval
from .range_set import SpanLike, Span, as_span

logger = logging.getLogger(__name__)


def scale_count(count: Optional[int], part_length: int, whole_length: int) -> Optional[int]:
    """
    Share of count for a part of a span.

    Uses truncating integer division and never returns 0 for a positive
    count, so every persisted part carries at least one unit. This is an
    approximation, not a token recount.

    Args:
        count: Counter for the whole span (None passes through)
        part_length: Length of the part
        whole_length: Length of the whole span

    Example:
        >>> scale_count(100, 200, 300)
        66
        >>> scale_count(3, 1, 300)
        1
    """
    if count is None:
        return None
    if count == 0:
        return 0
    if whole_length <= 0:
        raise InvalidOffset(f"whole_length must be > 0: {whole_length}")
    return max(1, count * part_length // whole_length)


# ─────────────────────────────────────────────────────────────────────────────
# Marking Read
# ─────────────────────────────────────────────────────────────────────────────

def unread_gaps(start: int, end: int, existing: Iterable[SpanLike]) -> List[Span]:
    """
    Sub-spans of [start, end) not covered by existing intervals.

    Existing intervals need not be merged. Only those overlapping the
    window are considered; touching ones do not affect the result.

    Example:
        >>> unread_gaps(400, 700, [(0, 500)])
        [(500, 700)]
    """
    overlapping = []
    for interval in existing:
        span_start, span_end = as_span(interval)
        check_interval(span_start, span_end)
        if span_start < end and start < span_end:
            overlapping.append((span_start, span_end))
    overlapping.sort()

    gaps: List[Span] = []
    current = start
    for span_start, span_end in overlapping:
        if span_start > current:
            gaps.append((current, span_start))
        current = max(current, span_end)
    if current < end:
        gaps.append((current, end))
    return gaps


def plan_insertion(
    new: ReadInterval,
    existing: Iterable[SpanLike],
    content_length: Optional[int] = None,
) -> List[ReadInterval]:
    """
    Unread parts of a new read interval, ready to persist.

    Each returned interval copies the new interval's auto_completed flag and
    marked_at, and carries character/word counts scaled from the new
    interval's counts by length.

    Args:
        new: Interval the user just read
        existing: Stored intervals of the document (any order, may overlap)
        content_length: Document length; when given, new must fit inside it

    Returns:
        New ReadIntervals in ascending order; empty if everything was read

    Raises:
        InvalidOffset: If new ends past content_length or an existing
            interval is malformed

    Example:
        >>> plan_insertion(ReadInterval(400, 700), [ReadInterval(0, 500)])
        [ReadInterval(500, 700)]
    """
    if content_length is not None:
        check_interval(new.start, new.end, content_length)

    gaps = unread_gaps(new.start, new.end, existing)
    planned = [
        new.with_span(
            gap_start,
            gap_end,
            character_count=scale_count(new.character_count, gap_end - gap_start, new.length),
            word_count=scale_count(new.word_count, gap_end - gap_start, new.length),
        )
        for gap_start, gap_end in gaps
    ]
    logger.debug(f"Insertion of {new!r}: {len(planned)} unread part(s) {gaps}")
    return planned


# ─────────────────────────────────────────────────────────────────────────────
# Unmarking
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RemovalPlan:
    """
    Rows to change when a span is unmarked.

    Attributes:
        removed: Stored intervals touching the span (delete these)
        replacements: Remaining pieces of removed intervals (insert these)
    """
    removed: List[ReadInterval] = field(default_factory=list)
    replacements: List[ReadInterval] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        return not self.removed


def plan_removal(existing: Iterable[ReadInterval], start: int, end: int) -> RemovalPlan:
    """
    Unmark [start, end) from the stored intervals.

    Intervals inside the span are removed. Intervals straddling an edge are
    replaced by the piece outside; an interval covering the whole span is
    split in two. Counters are scaled by piece length.

    Raises:
        InvalidOffset: If start < 0 or end < start

    Example:
        >>> plan = plan_removal([ReadInterval(0, 100)], 40, 60)
        >>> plan.replacements
        [ReadInterval(0, 40), ReadInterval(60, 100)]
    """
    check_interval(start, end)
    if start == end:
        return RemovalPlan()
    removed: List[ReadInterval] = []
    replacements: List[ReadInterval] = []

    for interval in sorted(existing, key=lambda r: (r.start, r.end)):
        if not interval.overlaps(start, end):
            continue
        removed.append(interval)
        pieces = []
        if interval.start < start:
            pieces.append((interval.start, start))
        if interval.end > end:
            pieces.append((end, interval.end))
        for piece_start, piece_end in pieces:
            replacements.append(
                interval.with_span(
                    piece_start,
                    piece_end,
                    character_count=scale_count(interval.character_count, piece_end - piece_start, interval.length),
                    word_count=scale_count(interval.word_count, piece_end - piece_start, interval.length),
                )
            )

    logger.debug(f"Removal of [{start}, {end}): {len(removed)} removed, {len(replacements)} replacement(s)")
    return RemovalPlan(removed=removed, replacements=replacements)
