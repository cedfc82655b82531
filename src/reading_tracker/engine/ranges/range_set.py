"""
Module: engine.ranges.range_set

Purpose:
    Interval-set arithmetic over half-open [start, end) spans: merge to a
    minimal sorted cover, union length, complement against [0, total) and
    point containment.

Key Functions:
    - merge(): Sorted, non-overlapping cover of any interval collection
    - union_length(): Code units covered by the union
    - complement(): Gaps of the cover inside [0, total)
    - contains(): Whether any interval covers a point
    - clip(): Cover restricted to a window

Key Classes:
    - RangeSet: Frozen wrapper around a merged cover

Algorithm:
    Sort by start, sweep once, extend the current run while the next
    interval starts at or before its end. Touching intervals
    (next.start == current.end) join into one run.

Used By:
    - engine.ranges.policy
    - engine.progress
    - engine.continuation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from reading_tracker.core.errors import InvalidOffset, check_interval
from reading_tracker.core.models import ReadInterval

Span = Tuple[int, int]
SpanLike = Union[ReadInterval, Span]


def as_span(interval: SpanLike) -> Span:
    """Normalize a ReadInterval or (start, end) pair to a pair."""
    if isinstance(interval, ReadInterval):
        return interval.as_tuple()
    start, end = interval
    return (start, end)


def _validated_spans(intervals: Iterable[SpanLike], total: Optional[int] = None) -> List[Span]:
    spans = []
    for interval in intervals:
        start, end = as_span(interval)
        check_interval(start, end, total)
        if end > start:
            spans.append((start, end))
    return spans


# ─────────────────────────────────────────────────────────────────────────────
# Operations
# ─────────────────────────────────────────────────────────────────────────────

def merge(intervals: Iterable[SpanLike]) -> List[Span]:
    """
    Merge intervals into a minimal sorted cover.

    Args:
        intervals: ReadIntervals or (start, end) pairs, in any order,
            possibly overlapping. Empty pairs are ignored.

    Returns:
        Sorted, pairwise non-overlapping, non-touching spans

    Raises:
        InvalidOffset: If any interval has start < 0 or end < start

    Example:
        >>> merge([(400, 700), (0, 500), (700, 800), (900, 950)])
        [(0, 800), (900, 950)]
    """
    spans = sorted(_validated_spans(intervals))
    if not spans:
        return []

    merged: List[Span] = [spans[0]]
    for start, end in spans[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def union_length(intervals: Iterable[SpanLike]) -> int:
    """
    Code units covered by at least one interval.

    Example:
        >>> union_length([(0, 500), (400, 700)])
        700
    """
    return sum(end - start for start, end in merge(intervals))


def complement(total: int, intervals: Iterable[SpanLike]) -> List[Span]:
    """
    Gaps in [0, total) not covered by any interval.

    Args:
        total: Document length in code units
        intervals: Read intervals, any order

    Returns:
        Sorted gaps: before, between and after the merged cover

    Raises:
        InvalidOffset: If total < 0 or an interval ends past total

    Example:
        >>> complement(1000, [(100, 200), (150, 300)])
        [(0, 100), (300, 1000)]
    """
    if total < 0:
        raise InvalidOffset(f"total must be >= 0: {total}")
    cover = merge(_validated_spans(intervals, total))

    gaps: List[Span] = []
    position = 0
    for start, end in cover:
        if start > position:
            gaps.append((position, start))
        position = max(position, end)
    if position < total:
        gaps.append((position, total))
    return gaps


def contains(point: int, intervals: Iterable[SpanLike]) -> bool:
    """True if some interval satisfies start <= point < end."""
    return any(start <= point < end for start, end in _validated_spans(intervals))


def clip(intervals: Iterable[SpanLike], start: int, end: int) -> List[Span]:
    """
    Merged cover restricted to [start, end).

    Example:
        >>> clip([(0, 100), (150, 400)], 50, 200)
        [(50, 100), (150, 200)]
    """
    clipped = []
    for span_start, span_end in merge(intervals):
        lo, hi = max(span_start, start), min(span_end, end)
        if lo < hi:
            clipped.append((lo, hi))
    return clipped


# ─────────────────────────────────────────────────────────────────────────────
# Value Type
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class RangeSet:
    """
    Immutable merged cover.

    Attributes:
        spans: Sorted, non-overlapping, non-touching (start, end) pairs

    Example:
        >>> rs = RangeSet.from_intervals([(0, 5), (5, 10), (20, 30)])
        >>> rs.spans
        ((0, 10), (20, 30))
        >>> rs.length
        20
        >>> 25 in rs
        True
    """

    spans: Tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        """Validate the cover is already merged."""
        for (a_start, a_end), (b_start, b_end) in zip(self.spans, self.spans[1:]):
            if b_start <= a_end:
                raise ValueError(f"RangeSet spans must be merged: {(a_start, a_end)} then {(b_start, b_end)}")
        for start, end in self.spans:
            if start < 0 or end <= start:
                raise InvalidOffset(f"Invalid span in RangeSet: ({start}, {end})")

    @classmethod
    def from_intervals(cls, intervals: Iterable[SpanLike]) -> RangeSet:
        return cls(spans=tuple(merge(intervals)))

    @property
    def length(self) -> int:
        """Union length."""
        return sum(end - start for start, end in self.spans)

    @property
    def furthest_end(self) -> int:
        """End of the last span, 0 when empty."""
        return self.spans[-1][1] if self.spans else 0

    def gaps(self, total: int) -> List[Span]:
        """Complement against [0, total)."""
        return complement(total, self.spans)

    def union(self, other: RangeSet) -> RangeSet:
        return RangeSet.from_intervals(self.spans + other.spans)

    def __contains__(self, point: object) -> bool:
        return isinstance(point, int) and contains(point, self.spans)

    def __iter__(self):
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __bool__(self) -> bool:
        return bool(self.spans)
