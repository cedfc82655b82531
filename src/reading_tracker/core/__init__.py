"""
Reading Tracker Core Package

Shared value types, the error taxonomy and payload validation. Everything
the engine consumes or returns is defined here.

**CONVENTIONS:**

1. **UTF-16 Positions**
   - Every offset is a UTF-16 code unit index, matching the rendering
     layer's string indexing, never a Python str index.

2. **Half-Open Spans**
   - Intervals are [start, end); touching spans do not overlap.

3. **Immutable Data Models**
   - Frozen dataclasses; engine operations return new instances.
"""

from .errors import (
    ReadingTrackerError,
    InvalidOffset,
    InvalidEditWindow,
    ValidationError,
)
from .models import (
    Document,
    ReadInterval,
    Mark,
    MarkStatus,
    DocumentEdit,
    Excerpt,
    ContinuationType,
    Paragraph,
)

__all__ = [
    "ReadingTrackerError",
    "InvalidOffset",
    "InvalidEditWindow",
    "ValidationError",
    "Document",
    "ReadInterval",
    "Mark",
    "MarkStatus",
    "DocumentEdit",
    "Excerpt",
    "ContinuationType",
    "Paragraph",
]
