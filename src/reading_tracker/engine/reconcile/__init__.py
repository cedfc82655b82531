"""
Module: engine.reconcile

Purpose:
    Keeps marks and read intervals attached to the right text across
    document edits.

Key Modules:
    - locators: Position marks (stored offsets, text search)
    - reconciler: Classify marks against an edit, carry read intervals
"""

from .locators import (
    LocatorKind,
    LocatedMark,
    StoredOffsetLocator,
    TextSearchLocator,
    DEFAULT_LOCATORS,
    SEARCH_LOCATORS,
    find_matches,
    resolve_positions,
)
from .reconciler import (
    ReconcileAction,
    MarkOutcome,
    ReconciliationResult,
    IntervalReconciliation,
    OverlapReport,
    classify_mark,
    reconcile_marks,
    reconcile_read_intervals,
    detect_overlap,
)

__all__ = [
    "LocatorKind",
    "LocatedMark",
    "StoredOffsetLocator",
    "TextSearchLocator",
    "DEFAULT_LOCATORS",
    "SEARCH_LOCATORS",
    "find_matches",
    "resolve_positions",
    "ReconcileAction",
    "MarkOutcome",
    "ReconciliationResult",
    "IntervalReconciliation",
    "OverlapReport",
    "classify_mark",
    "reconcile_marks",
    "reconcile_read_intervals",
    "detect_overlap",
]
