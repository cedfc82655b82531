"""
Reading Tracker Engine

Pure functions over document snapshots: no storage, no clocks, no shared
state. The caller loads a document with its marks and read intervals,
calls one of these, and writes the results back atomically.

| Concern | Entry point |
|---------|-------------|
| Mark a span read | `record_read()` / `plan_insertion()` |
| Unmark a span | `plan_removal()` |
| Progress | `calculate_progress()` / `document_progress()` |
| Resume reading | `locate_continuation()` |
| Document edited | `apply_edit()` / `apply_replacement()` |
| Warn before editing | `detect_overlap()` |
"""

from .config import ContinuationConfig, EngineConfig, DEFAULT_CONFIG
from .offsets import Utf16Index, utf16_length, countable_length, detect_paragraphs, paragraph_starts
from .ranges import RangeSet, merge, union_length, complement, plan_insertion, plan_removal, RemovalPlan
from .progress import calculate_progress, document_progress, ProgressReport
from .continuation import locate_continuation, next_unread_paragraph, previous_paragraph
from .reconcile import (
    ReconcileAction,
    ReconciliationResult,
    IntervalReconciliation,
    OverlapReport,
    LocatorKind,
    reconcile_marks,
    reconcile_read_intervals,
    detect_overlap,
    resolve_positions,
)
from .pipeline import EditOutcome, apply_edit, apply_replacement, record_read

__all__ = [
    "ContinuationConfig",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "Utf16Index",
    "utf16_length",
    "countable_length",
    "detect_paragraphs",
    "paragraph_starts",
    "RangeSet",
    "merge",
    "union_length",
    "complement",
    "plan_insertion",
    "plan_removal",
    "RemovalPlan",
    "calculate_progress",
    "document_progress",
    "ProgressReport",
    "locate_continuation",
    "next_unread_paragraph",
    "previous_paragraph",
    "ReconcileAction",
    "ReconciliationResult",
    "IntervalReconciliation",
    "OverlapReport",
    "LocatorKind",
    "reconcile_marks",
    "reconcile_read_intervals",
    "detect_overlap",
    "resolve_positions",
    "EditOutcome",
    "apply_edit",
    "apply_replacement",
    "record_read",
]
