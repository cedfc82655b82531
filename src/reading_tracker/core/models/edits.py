"""
Module: edits

Purpose:
    Provides the DocumentEdit dataclass - a single replace operation on a
    document described in old-content coordinates. Every insert, delete or
    replacement is one of these.

Key Functions:
    - DocumentEdit.between(old, new): Derive the edit from two versions
    - DocumentEdit.replacement(old, start, end, text): Describe a splice
    - DocumentEdit.old_length: Length of the content before the edit

Dependencies:
    - core.units: utf16_length
    - dataclasses (std)

Used By:
    - engine.reconcile.reconciler
    - engine.pipeline
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidEditWindow, InvalidOffset
from ..units import utf16_length


@dataclass(frozen=True, slots=True)
class DocumentEdit:
    """
    Replacement of old [start, end) by new text, in UTF-16 code units.

    Attributes:
        start: Edit window start in the old content
        end: Edit window end in the old content (== start for pure inserts)
        length_delta: new_length - old_length
        new_length: Length of the content after the edit

    Invariants:
        - 0 <= start <= end <= old_length
        - new_length >= 0
        - inserted_length >= 0 (length_delta >= -(end - start))

    Example:
        >>> edit = DocumentEdit(start=50, end=50, length_delta=20, new_length=1020)
        >>> edit.old_length
        1000
        >>> edit.inserted_length
        20
    """

    start: int
    end: int
    length_delta: int
    new_length: int

    def __post_init__(self) -> None:
        """Validate the window on construction."""
        if self.start < 0:
            raise InvalidEditWindow(f"edit start must be >= 0: {self.start}")
        if self.end < self.start:
            raise InvalidEditWindow(f"edit end must be >= start: {self.end} < {self.start}")
        if self.new_length < 0:
            raise InvalidEditWindow(f"new_length must be >= 0: {self.new_length}")
        if self.end > self.old_length:
            raise InvalidEditWindow(
                f"edit end {self.end} is past the old content ({self.old_length} code units)"
            )
        if self.inserted_length < 0:
            raise InvalidEditWindow(
                f"edit removes {self.removed_length} code units but length_delta is {self.length_delta}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def old_length(self) -> int:
        """Length of the content before the edit."""
        return self.new_length - self.length_delta

    @property
    def removed_length(self) -> int:
        """Code units removed from the old content."""
        return self.end - self.start

    @property
    def inserted_length(self) -> int:
        """Code units of replacement text."""
        return self.removed_length + self.length_delta

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def between(cls, old_content: str, new_content: str) -> DocumentEdit:
        """
        Derive the smallest single edit turning old_content into new_content.

        Trims the common prefix, then the common suffix (without letting it
        run back past the prefix). Comparison is per code point, so the
        window never splits a surrogate pair.

        Example:
            >>> DocumentEdit.between("Hello world", "Hello there world")
            DocumentEdit(start=6, end=6, length_delta=6, new_length=17)
        """
        start = 0
        limit = min(len(old_content), len(new_content))
        while start < limit and old_content[start] == new_content[start]:
            start += 1

        old_end = len(old_content)
        new_end = len(new_content)
        while old_end > start and new_end > start and old_content[old_end - 1] == new_content[new_end - 1]:
            old_end -= 1
            new_end -= 1

        prefix_units = utf16_length(old_content[:start])
        old_length = utf16_length(old_content)
        new_length = utf16_length(new_content)
        return cls(
            start=prefix_units,
            end=prefix_units + utf16_length(old_content[start:old_end]),
            length_delta=new_length - old_length,
            new_length=new_length,
        )

    @classmethod
    def replacement(cls, old_content: str, start: int, end: int, text: str) -> DocumentEdit:
        """
        Describe replacing old [start, end) with text.

        Raises:
            InvalidEditWindow: If end < start
            InvalidOffset: If the window lies outside old_content
        """
        if end < start:
            raise InvalidEditWindow(f"edit end must be >= start: {end} < {start}")
        old_length = utf16_length(old_content)
        if start < 0 or end > old_length:
            raise InvalidOffset(f"Invalid edit window [{start}, {end}) for length {old_length}")
        delta = utf16_length(text) - (end - start)
        return cls(start=start, end=end, length_delta=delta, new_length=old_length + delta)

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "length_delta": self.length_delta,
            "new_length": self.new_length,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DocumentEdit:
        return cls(
            start=data["start"],
            end=data["end"],
            length_delta=data["length_delta"],
            new_length=data["new_length"],
        )
