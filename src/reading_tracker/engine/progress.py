"""
Module: engine.progress

Purpose:
    Completion percentage of a document: union length of the read
    intervals over the countable length.

Key Functions:
    - calculate_progress(): Percentage from intervals and countable length
    - document_progress(): Full ProgressReport for a document

Known Simplification:
    Read intervals are not clipped to excluded/header spans before the
    division. A read interval that crosses an excluded section adds to the
    numerator while the denominator leaves it out, so a fully read document
    with exclusions can report more than 100%.

Dependencies:
    - engine.ranges.range_set: union_length
    - engine.offsets.markup: countable_length
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from reading_tracker.core.errors import check_interval
from reading_tracker.core.models import Document
from .offsets.markup import countable_length as _countable_length
from .ranges.range_set import SpanLike, as_span, merge, union_length

logger = logging.getLogger(__name__)


def calculate_progress(read_intervals: Iterable[SpanLike], countable_length: int) -> float:
    """
    Percentage of the countable length covered by read intervals.

    Args:
        read_intervals: Stored intervals (any order, may overlap)
        countable_length: Denominator from the offset model

    Returns:
        0.0 when countable_length <= 0, else union / countable * 100.0

    Example:
        >>> calculate_progress([(0, 250), (200, 500)], 1000)
        50.0
        >>> calculate_progress([(0, 250)], 0)
        0.0
    """
    if countable_length <= 0:
        return 0.0
    return union_length(read_intervals) / countable_length * 100.0


@dataclass(frozen=True)
class ProgressReport:
    """
    Reading progress of one document.

    Attributes:
        read_characters: Union length of read intervals
        countable_length: Length minus excluded and header spans
        total_length: Full document length
        percentage: calculate_progress() result
        current_position: Furthest read end, 0 when nothing is read
    """
    read_characters: int
    countable_length: int
    total_length: int
    percentage: float
    current_position: int

    @property
    def is_complete(self) -> bool:
        return self.countable_length > 0 and self.read_characters >= self.countable_length


def document_progress(document: Document, read_intervals: Iterable[SpanLike]) -> ProgressReport:
    """
    Progress report for a document.

    Raises:
        InvalidOffset: If a read interval ends past the document
    """
    spans = [as_span(r) for r in read_intervals]
    for start, end in spans:
        check_interval(start, end, document.content_length)

    cover = merge(spans)
    countable = _countable_length(document.content, document.content_length)
    report = ProgressReport(
        read_characters=sum(end - start for start, end in cover),
        countable_length=countable,
        total_length=document.content_length,
        percentage=calculate_progress(cover, countable),
        current_position=max((end for _, end in spans), default=0),
    )
    logger.debug(f"Progress for document {document.id}: {report.percentage:.1f}%")
    return report
