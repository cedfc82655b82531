"""
Module: intervals

Purpose:
    Provides the ReadInterval dataclass - a stored half-open span of a
    document that the user has already read, plus the counters recorded
    with it.

Key Functions:
    - ReadInterval.length: Span length in UTF-16 code units
    - ReadInterval.contains(pos): Check if a position is inside the span
    - ReadInterval.overlaps(start, end): Check for overlap with a window
    - ReadInterval.with_span(start, end, ...): Copy with new bounds
    - ReadInterval.to_dict() / from_dict(): Persistence boundary

Dependencies:
    - dataclasses (std)
    - datetime (std)

Used By:
    - engine.ranges.range_set
    - engine.ranges.policy
    - engine.progress
    - engine.continuation
    - engine.reconcile.reconciler
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from ..errors import InvalidOffset


@dataclass(frozen=True, slots=True)
class ReadInterval:
    """
    A span of text the user has read, in UTF-16 code units.

    The span is half-open: [start, end).

    Attributes:
        start: First code unit read (inclusive)
        end: First code unit after the span (exclusive)
        character_count: Characters credited to this span (optional)
        word_count: Words credited to this span (optional)
        auto_completed: True when the span was marked read automatically
        marked_at: When the span was recorded
        id: Storage identifier, None until persisted

    Invariants:
        - start >= 0
        - end > start
        - counts are None or >= 0

    Example:
        >>> r = ReadInterval(0, 500)
        >>> r.length
        500
        >>> r.contains(500)
        False
    """

    start: int
    end: int
    character_count: Optional[int] = None
    word_count: Optional[int] = None
    auto_completed: bool = False
    marked_at: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate span on construction."""
        if self.start < 0:
            raise InvalidOffset(f"start must be >= 0: {self.start}")
        if self.end <= self.start:
            raise InvalidOffset(f"end must be > start: {self.end} <= {self.start}")
        if self.character_count is not None and self.character_count < 0:
            raise ValueError(f"character_count cannot be negative: {self.character_count}")
        if self.word_count is not None and self.word_count < 0:
            raise ValueError(f"word_count cannot be negative: {self.word_count}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def length(self) -> int:
        """Length of the span in code units."""
        return self.end - self.start

    def as_tuple(self) -> Tuple[int, int]:
        """Get as (start, end) tuple."""
        return (self.start, self.end)

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def contains(self, position: int) -> bool:
        """
        Check if a position is within this span.

        Returns:
            True if start <= position < end
        """
        return self.start <= position < self.end

    def overlaps(self, start: int, end: int) -> bool:
        """
        Check if this span shares at least one code unit with [start, end).

        Touching spans (self.end == start) do NOT overlap.
        """
        return self.start < end and start < self.end

    def with_span(
        self,
        start: int,
        end: int,
        character_count: Optional[int] = None,
        word_count: Optional[int] = None,
    ) -> ReadInterval:
        """
        Copy this interval with new bounds and counters.

        The storage id is dropped: the copy describes a row that does not
        exist yet.
        """
        return replace(
            self,
            start=start,
            end=end,
            character_count=character_count,
            word_count=word_count,
            id=None,
        )

    def shifted(self, delta: int) -> ReadInterval:
        """Copy with both bounds moved by delta, keeping id and counters."""
        return replace(self, start=self.start + delta, end=self.end + delta)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary.

        Returns:
            Dict with start, end and any optional fields that are set
        """
        d: dict = {"start": self.start, "end": self.end}
        if self.id is not None:
            d["id"] = self.id
        if self.character_count is not None:
            d["character_count"] = self.character_count
        if self.word_count is not None:
            d["word_count"] = self.word_count
        if self.auto_completed:
            d["auto_completed"] = True
        if self.marked_at is not None:
            d["marked_at"] = self.marked_at.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ReadInterval:
        """Deserialize from dictionary."""
        marked_at = data.get("marked_at")
        return cls(
            start=data["start"],
            end=data["end"],
            character_count=data.get("character_count"),
            word_count=data.get("word_count"),
            auto_completed=data.get("auto_completed", False),
            marked_at=datetime.fromisoformat(marked_at) if marked_at else None,
            id=data.get("id"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"ReadInterval({self.start}, {self.end})"
