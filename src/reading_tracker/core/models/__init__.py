"""
Core Models Package

Immutable, validated value types exchanged between the engine and the
persistence layer.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while an edit is being reconciled
2. Every engine operation is a pure function of its inputs
3. Results can be compared, hashed and collected in sets

| Type | Role |
|------|------|
| `Document` | Snapshot of content + UTF-16 length |
| `ReadInterval` | Stored read span with optional counters |
| `Mark` | Flashcard anchor, optionally unpositioned |
| `DocumentEdit` | One replace operation in old-content coordinates |
| `Excerpt` | Where to resume reading |
| `Paragraph` | Blank-line separated block |
"""

from .documents import Document
from .intervals import ReadInterval
from .marks import Mark, MarkStatus, TERMINAL_STATUSES, EDITED_REGION_NOTE
from .edits import DocumentEdit
from .excerpts import Excerpt, ContinuationType
from .paragraphs import Paragraph

__all__ = [
    "Document",
    "ReadInterval",
    "Mark",
    "MarkStatus",
    "TERMINAL_STATUSES",
    "EDITED_REGION_NOTE",
    "DocumentEdit",
    "Excerpt",
    "ContinuationType",
    "Paragraph",
]
