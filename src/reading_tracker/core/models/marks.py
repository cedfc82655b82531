"""
Module: marks

Purpose:
    Provides the Mark dataclass - a stored anchor into a document that is
    later turned into a flashcard - and its workflow status.

Key Functions:
    - Mark.has_position: Whether stored offsets are known
    - Mark.is_terminal: Whether the mark is no longer reconciled
    - Mark.flagged(note): Copy with status needs_review
    - Mark.moved(start, end): Copy with new offsets

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - engine.reconcile.reconciler
    - engine.reconcile.locators
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..errors import InvalidOffset


class MarkStatus(str, Enum):
    """Workflow status of a mark."""
    PENDING = "pending"
    NEEDS_REVIEW = "needs_review"
    CONVERTED = "converted"  # Consumed into a flashcard
    BURIED = "buried"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value


# Statuses that are no longer repositioned on edit
TERMINAL_STATUSES = frozenset({MarkStatus.CONVERTED})

EDITED_REGION_NOTE = "Text was edited in marked region"


@dataclass(frozen=True, slots=True)
class Mark:
    """
    Anchor [start, end) into a document, in UTF-16 code units.

    Positions are optional: legacy marks only carry the selected text and
    must be located by search before they can be reconciled.

    Attributes:
        id: Storage identifier
        document_id: Document the mark belongs to
        start: Inclusive start, or None when unknown
        end: Exclusive end, or None when unknown
        status: Workflow status
        original_text: Text selected when the mark was made
        notes: Free-form note (set when flagged for review)

    Invariants:
        - start and end are both set or both None
        - 0 <= start <= end
    """

    id: int
    document_id: int
    start: Optional[int] = None
    end: Optional[int] = None
    status: MarkStatus = MarkStatus.PENDING
    original_text: str = ""
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate positions and coerce status on construction."""
        if (self.start is None) != (self.end is None):
            raise InvalidOffset(f"start and end must both be set or both be None: {self.start}, {self.end}")
        if self.start is not None:
            if self.start < 0:
                raise InvalidOffset(f"start must be >= 0: {self.start}")
            if self.end < self.start:
                raise InvalidOffset(f"end must be >= start: {self.end} < {self.start}")
        if not isinstance(self.status, MarkStatus):
            try:
                object.__setattr__(self, "status", MarkStatus(self.status))
            except ValueError:
                raise ValueError(f"Invalid mark status: {self.status!r}") from None

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def has_position(self) -> bool:
        """True when stored offsets are known."""
        return self.start is not None

    @property
    def is_terminal(self) -> bool:
        """True once the mark has been converted into a flashcard."""
        return self.status in TERMINAL_STATUSES

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def flagged(self, note: str = EDITED_REGION_NOTE) -> Mark:
        """Copy with status needs_review; positions untouched."""
        return replace(self, status=MarkStatus.NEEDS_REVIEW, notes=note)

    def moved(self, start: int, end: int) -> Mark:
        """Copy with new offsets."""
        return replace(self, start=start, end=end)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "document_id": self.document_id,
            "status": self.status.value,
        }
        if self.start is not None:
            d["start"] = self.start
            d["end"] = self.end
        if self.original_text:
            d["original_text"] = self.original_text
        if self.notes is not None:
            d["notes"] = self.notes
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Mark:
        return cls(
            id=data["id"],
            document_id=data["document_id"],
            start=data.get("start"),
            end=data.get("end"),
            status=MarkStatus(data.get("status", "pending")),
            original_text=data.get("original_text", ""),
            notes=data.get("notes"),
        )

    def __repr__(self) -> str:
        if self.start is None:
            return f"Mark({self.id}, unpositioned, {self.status})"
        return f"Mark({self.id}, {self.start}, {self.end}, {self.status})"
