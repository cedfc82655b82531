"""
Module: engine.pipeline

Purpose:
    Entry points the persistence layer calls. Each one takes snapshots,
    runs the engine components in order and returns everything the caller
    must write back. Nothing here touches storage; the caller applies the
    outputs in one transaction.

Key Functions:
    - apply_edit(): New content for a document -> reconciled marks/intervals
    - apply_replacement(): Same, for a splice described by offsets
    - record_read(): New read interval -> rows to insert

Key Classes:
    - EditOutcome: Container for apply_edit() output

Dependencies:
    - engine.reconcile: locators and reconciler
    - engine.ranges.policy: plan_insertion

Used By:
    - Document save handlers (editor, importers)
    - Reader "mark as read" actions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from reading_tracker.core.errors import InvalidOffset
from reading_tracker.core.models import Document, DocumentEdit, Mark, ReadInterval
from .offsets.utf16 import Utf16Index
from .ranges.policy import plan_insertion
from .reconcile.locators import DEFAULT_LOCATORS, MarkLocator, resolve_positions
from .reconcile.reconciler import (
    IntervalReconciliation,
    ReconciliationResult,
    reconcile_marks,
    reconcile_read_intervals,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditOutcome:
    """
    Everything that changes when a document is edited.

    Attributes:
        document: Snapshot of the new content
        edit: Edit derived from old and new content
        marks: Per-mark reconciliation outcomes
        intervals: Read interval changes
    """
    document: Document
    edit: DocumentEdit
    marks: ReconciliationResult
    intervals: IntervalReconciliation

    @property
    def is_noop(self) -> bool:
        """True when the content did not change."""
        return self.edit.removed_length == 0 and self.edit.inserted_length == 0


def _reconcile(
    document: Document,
    new_document: Document,
    edit: DocumentEdit,
    marks: Iterable[Mark],
    read_intervals: Iterable[ReadInterval],
    locators: Optional[Sequence[MarkLocator]],
) -> EditOutcome:
    marks = list(marks)
    if locators is None:
        locators = DEFAULT_LOCATORS
    located = resolve_positions(marks, document.content, locators)
    mark_result = reconcile_marks([lm.mark for lm in located], edit, originals=marks)
    interval_result = reconcile_read_intervals(read_intervals, edit)

    logger.info(
        f"Document {document.id} edited at [{edit.start}, {edit.end}) "
        f"delta {edit.length_delta:+d}: {len(mark_result.shifted)} mark(s) shifted, "
        f"{len(mark_result.flagged)} flagged, {len(interval_result.removed)} read interval(s) trimmed"
    )
    return EditOutcome(document=new_document, edit=edit, marks=mark_result, intervals=interval_result)


def apply_edit(
    document: Document,
    new_content: str,
    marks: Iterable[Mark],
    read_intervals: Iterable[ReadInterval],
    locators: Optional[Sequence[MarkLocator]] = None,
    updated_at: Optional[datetime] = None,
) -> EditOutcome:
    """
    Reconcile a document's marks and read intervals with new content.

    The edit window is derived by diffing old and new content. Marks are
    first positioned against the old content, then classified against the
    edit. By default only stored offsets are used, so a mark without
    offsets is flagged. Pass SEARCH_LOCATORS to place such marks by a
    unique match of their original text first.

    Args:
        document: Snapshot before the edit
        new_content: Full content after the edit
        marks: All marks of the document, any status
        read_intervals: All stored read intervals of the document
        locators: Mark positioning strategies (default: stored offsets
            only)
        updated_at: Timestamp for the new snapshot

    Returns:
        EditOutcome

    Raises:
        InvalidOffset: If a mark or interval ends past the old content,
            including stored offsets that no longer fit it

    Example:
        >>> doc = Document.from_content(1, "a" * 1000)
        >>> new = "a" * 50 + "b" * 20 + "a" * 950
        >>> outcome = apply_edit(doc, new, [Mark(1, 1, 100, 150)], [])
        >>> outcome.marks.marks[0]
        Mark(1, 120, 170, pending)
    """
    edit = DocumentEdit.between(document.content, new_content)
    new_document = Document.from_content(document.id, new_content, updated_at=updated_at)
    return _reconcile(document, new_document, edit, marks, read_intervals, locators)


def apply_replacement(
    document: Document,
    start: int,
    end: int,
    text: str,
    marks: Iterable[Mark],
    read_intervals: Iterable[ReadInterval],
    locators: Optional[Sequence[MarkLocator]] = None,
    updated_at: Optional[datetime] = None,
) -> EditOutcome:
    """
    Replace old [start, end) with text and reconcile.

    Unlike apply_edit() the window is taken as given, so replacing text
    with identical text still flags marks inside the window.

    Raises:
        InvalidEditWindow: If end < start
        InvalidOffset: If the window lies outside the document or splits a
            surrogate pair
    """
    edit = DocumentEdit.replacement(document.content, start, end, text)
    index = Utf16Index(document.content)
    if not (index.is_boundary(start) and index.is_boundary(end)):
        raise InvalidOffset(f"Edit window [{start}, {end}) splits a surrogate pair")

    new_content = index.slice(0, start) + text + index.slice(end, index.length)
    new_document = Document.from_content(document.id, new_content, updated_at=updated_at)
    return _reconcile(document, new_document, edit, marks, read_intervals, locators)


def record_read(
    document: Document,
    existing: Iterable[ReadInterval],
    new: ReadInterval,
) -> List[ReadInterval]:
    """
    Rows to insert when the user marks new as read.

    Args:
        document: Document being read
        existing: Stored read intervals of the document
        new: Interval just read

    Returns:
        Unread parts of new, ascending; empty if it was all read already

    Raises:
        InvalidOffset: If new ends past the document
    """
    planned = plan_insertion(new, existing, content_length=document.content_length)
    if planned:
        logger.info(f"Document {document.id}: recording {len(planned)} read interval(s) from {new!r}")
    return planned
