"""
Module: engine.reconcile.reconciler

Purpose:
    Keeps marks and read intervals attached to the right text when a
    document is edited. Every mark is classified against the edit window
    and either left alone, shifted by the length delta, or flagged for
    manual review. Nothing is ever dropped.

Key Functions:
    - classify_mark(): Outcome for one mark
    - reconcile_marks(): Outcomes for all marks of a document
    - reconcile_read_intervals(): Keep, shift or trim stored read spans
    - detect_overlap(): Which marks/intervals an edit window touches

Classification (first match wins):
    1. converted                      -> TERMINAL, untouched
    2. unknown positions              -> FLAG
    3. end <= edit.start              -> UNAFFECTED
    4. start >= edit.end, in bounds   -> SHIFT by length_delta
       start >= edit.end, out of bounds -> INVALIDATE (flag, keep positions)
    5. anything else overlaps         -> FLAG

Used By:
    - engine.pipeline: apply_edit()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from reading_tracker.core.errors import InvalidEditWindow, InvalidOffset
from reading_tracker.core.models import DocumentEdit, Mark, ReadInterval
from ..ranges.policy import scale_count

logger = logging.getLogger(__name__)


class ReconcileAction(str, Enum):
    """What happened to a mark."""
    UNAFFECTED = "unaffected"  # Entirely before the edit
    SHIFT = "shift"            # Entirely after the edit, moved by the delta
    INVALIDATE = "invalidate"  # After the edit but the shift left the document
    FLAG = "flag"              # Overlaps the edit or has no position
    TERMINAL = "terminal"      # Already converted, not reconciled

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MarkOutcome:
    """
    Classification of one mark.

    Attributes:
        action: Classification result
        original: Mark as stored, before any positioning
        mark: Mark to persist (same object when nothing changed)
    """
    action: ReconcileAction
    original: Mark
    mark: Mark

    @property
    def changed(self) -> bool:
        return self.mark != self.original

    @property
    def needs_review(self) -> bool:
        return self.action in (ReconcileAction.FLAG, ReconcileAction.INVALIDATE)


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Outcomes for every mark of a document, in input order.

    Attributes:
        outcomes: One MarkOutcome per input mark
    """
    outcomes: tuple[MarkOutcome, ...] = ()

    @property
    def marks(self) -> List[Mark]:
        """Marks to persist, in input order."""
        return [o.mark for o in self.outcomes]

    @property
    def shifted(self) -> List[int]:
        """Ids of marks whose positions moved."""
        return [o.original.id for o in self.outcomes if o.action is ReconcileAction.SHIFT]

    @property
    def flagged(self) -> List[int]:
        """Ids of marks set to needs_review."""
        return [o.original.id for o in self.outcomes if o.needs_review]

    @property
    def changed(self) -> List[Mark]:
        """Marks whose stored row must be updated."""
        return [o.mark for o in self.outcomes if o.changed]


def classify_mark(mark: Mark, edit: DocumentEdit) -> MarkOutcome:
    """
    Classify one mark against an edit.

    Args:
        mark: Mark in old-content coordinates
        edit: The edit being applied

    Returns:
        MarkOutcome; flagged marks keep their old positions

    Raises:
        InvalidOffset: If the mark ends past the old content

    Example:
        >>> edit = DocumentEdit(start=50, end=50, length_delta=20, new_length=1020)
        >>> classify_mark(Mark(1, 1, 100, 150), edit).mark
        Mark(1, 120, 170, pending)
    """
    if mark.is_terminal:
        return MarkOutcome(ReconcileAction.TERMINAL, mark, mark)
    if not mark.has_position:
        return MarkOutcome(ReconcileAction.FLAG, mark, mark.flagged())
    if mark.end > edit.old_length:
        raise InvalidOffset(f"{mark!r} ends past the old content ({edit.old_length} code units)")

    if mark.end <= edit.start:
        return MarkOutcome(ReconcileAction.UNAFFECTED, mark, mark)

    if mark.start >= edit.end:
        new_start = mark.start + edit.length_delta
        new_end = mark.end + edit.length_delta
        if new_start < 0 or new_end < 0 or new_end > edit.new_length:
            logger.warning(f"{mark!r} shift to [{new_start}, {new_end}) leaves the document, flagging")
            return MarkOutcome(ReconcileAction.INVALIDATE, mark, mark.flagged())
        return MarkOutcome(ReconcileAction.SHIFT, mark, mark.moved(new_start, new_end))

    return MarkOutcome(ReconcileAction.FLAG, mark, mark.flagged())


def reconcile_marks(
    marks: Iterable[Mark],
    edit: DocumentEdit,
    originals: Optional[Sequence[Mark]] = None,
) -> ReconciliationResult:
    """
    Classify every mark against an edit.

    Args:
        marks: Marks in old-content coordinates
        edit: The edit being applied
        originals: Marks as stored, one per mark, when marks were
            positioned before reconciling. Outcomes compare against these,
            so a mark that only gained positions still counts as changed.

    Returns:
        ReconciliationResult with one outcome per mark, in input order
    """
    outcomes = tuple(classify_mark(mark, edit) for mark in marks)
    if originals is not None:
        if len(originals) != len(outcomes):
            raise ValueError(f"{len(originals)} originals for {len(outcomes)} marks")
        outcomes = tuple(replace(o, original=m) for o, m in zip(outcomes, originals))
    result = ReconciliationResult(outcomes=outcomes)
    logger.debug(
        f"Edit [{edit.start}, {edit.end}) delta {edit.length_delta}: "
        f"{len(result.shifted)} shifted, {len(result.flagged)} flagged of {len(outcomes)}"
    )
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Read Intervals
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class IntervalReconciliation:
    """
    Read interval changes for an edit.

    Attributes:
        unchanged: Intervals entirely before the edit
        shifted: Intervals entirely after the edit, moved (ids kept)
        removed: Intervals overlapping the edit (delete these)
        replacements: Pieces of removed intervals outside the edit window,
            in new-content coordinates (insert these)
    """
    unchanged: List[ReadInterval] = field(default_factory=list)
    shifted: List[ReadInterval] = field(default_factory=list)
    removed: List[ReadInterval] = field(default_factory=list)
    replacements: List[ReadInterval] = field(default_factory=list)

    @property
    def intervals(self) -> List[ReadInterval]:
        """Full interval set after the edit."""
        return sorted(self.unchanged + self.shifted + self.replacements, key=lambda r: (r.start, r.end))


def reconcile_read_intervals(intervals: Iterable[ReadInterval], edit: DocumentEdit) -> IntervalReconciliation:
    """
    Carry stored read intervals across an edit.

    Text inside the edit window changed, so no interval may claim it any
    more. An interval overlapping the window is replaced by its pieces
    before and after the window, with counters scaled by length.

    Raises:
        InvalidOffset: If an interval ends past the old content
    """
    result = IntervalReconciliation()
    for interval in intervals:
        if interval.end > edit.old_length:
            raise InvalidOffset(f"{interval!r} ends past the old content ({edit.old_length} code units)")

        if interval.end <= edit.start:
            result.unchanged.append(interval)
        elif interval.start >= edit.end:
            result.shifted.append(interval.shifted(edit.length_delta))
        else:
            result.removed.append(interval)
            pieces = []
            if interval.start < edit.start:
                pieces.append((interval.start, edit.start))
            if interval.end > edit.end:
                pieces.append((edit.end + edit.length_delta, interval.end + edit.length_delta))
            for start, end in pieces:
                result.replacements.append(
                    interval.with_span(
                        start,
                        end,
                        character_count=scale_count(interval.character_count, end - start, interval.length),
                        word_count=scale_count(interval.word_count, end - start, interval.length),
                    )
                )
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Overlap Detection
# ─────────────────────────────────────────────────────────────────────────────

def _overlaps(edit_start: int, edit_end: int, start: int, end: int) -> bool:
    # Empty windows and empty spans never overlap; touching is not overlap
    if edit_start == edit_end or start == end:
        return False
    return start < edit_end and end > edit_start


@dataclass(frozen=True)
class OverlapReport:
    """
    Marks and read intervals touched by an edit window.

    Attributes:
        overlapping_marks: Positioned marks sharing a code unit with the window
        safe_marks: Positioned marks clear of the window
        unpositioned_marks: Marks without stored offsets
        overlapping_intervals: Read intervals sharing a code unit with the window
        safe_intervals: Read intervals clear of the window
    """
    overlapping_marks: List[Mark] = field(default_factory=list)
    safe_marks: List[Mark] = field(default_factory=list)
    unpositioned_marks: List[Mark] = field(default_factory=list)
    overlapping_intervals: List[ReadInterval] = field(default_factory=list)
    safe_intervals: List[ReadInterval] = field(default_factory=list)

    @property
    def has_overlap(self) -> bool:
        return bool(self.overlapping_marks or self.overlapping_intervals)

    @property
    def mark_ids(self) -> List[int]:
        return [m.id for m in self.overlapping_marks]


def detect_overlap(
    edit_start: int,
    edit_end: int,
    marks: Sequence[Mark],
    read_intervals: Sequence[ReadInterval] = (),
) -> OverlapReport:
    """
    Report what an edit window would touch, before the edit is made.

    Used to warn the user that an edit will send marks to review. All mark
    statuses are included.

    Raises:
        InvalidEditWindow: If edit_end < edit_start or edit_start < 0
    """
    if edit_start < 0 or edit_end < edit_start:
        raise InvalidEditWindow(f"Invalid edit window: start={edit_start}, end={edit_end}")

    report = OverlapReport()
    for mark in marks:
        if not mark.has_position:
            report.unpositioned_marks.append(mark)
        elif _overlaps(edit_start, edit_end, mark.start, mark.end):
            report.overlapping_marks.append(mark)
        else:
            report.safe_marks.append(mark)
    for interval in read_intervals:
        if _overlaps(edit_start, edit_end, interval.start, interval.end):
            report.overlapping_intervals.append(interval)
        else:
            report.safe_intervals.append(interval)
    return report
