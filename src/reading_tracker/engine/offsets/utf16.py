"""
Module: engine.offsets.utf16

Purpose:
    Maps UTF-16 code unit positions (what every stored offset uses) onto
    Python string indices (code points). Characters outside the Basic
    Multilingual Plane take two code units, so the two index spaces drift
    apart as soon as a document contains emoji or rare scripts.

Key Functions:
    - utf16_length(): Length of a string in code units (from core.units)
    - Utf16Index: Position map with boundary alignment, slicing and search

Dependencies:
    - core.units: utf16_length
    - bisect (std)
    - itertools (std)

Used By:
    - engine.offsets.markup: Span offsets for exclusions/headers/paragraphs
    - engine.continuation: Excerpt slicing and boundary search
    - engine.reconcile.locators: Text search results in code units

Design Notes:
    A position that lands between the two halves of a surrogate pair is
    never an error here. Callers ask for the boundary on either side and
    carry on; the alignment helpers are total over any integer.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from itertools import accumulate
from typing import List, Optional

from reading_tracker.core.units import SUPPLEMENTARY_START, utf16_length

__all__ = ["Utf16Index", "utf16_length"]


class Utf16Index:
    """
    Bidirectional map between UTF-16 positions and str indices.

    For text without supplementary characters the two spaces coincide and
    no table is built.

    Attributes:
        text: The indexed string
        length: Length in code units

    Example:
        >>> idx = Utf16Index("A👋B")
        >>> idx.length
        4
        >>> idx.is_boundary(2)  # between the surrogate halves
        False
        >>> idx.align_backward(2), idx.align_forward(2)
        (1, 3)
        >>> idx.slice(1, 3)
        '👋'
    """

    __slots__ = ("text", "length", "_starts")

    def __init__(self, text: str) -> None:
        self.text = text
        self._starts: Optional[List[int]] = None
        if any(ord(ch) >= SUPPLEMENTARY_START for ch in text):
            # _starts[i] is the code unit offset of code point i; last entry is the length
            widths = (2 if ord(ch) >= SUPPLEMENTARY_START else 1 for ch in text)
            self._starts = list(accumulate(widths, initial=0))
            self.length = self._starts[-1]
        else:
            self.length = len(text)

    # ─────────────────────────────────────────────────────────────────────────
    # Boundaries
    # ─────────────────────────────────────────────────────────────────────────

    def _clamp(self, position: int) -> int:
        return max(0, min(position, self.length))

    def is_boundary(self, position: int) -> bool:
        """True if position is in [0, length] and not inside a surrogate pair."""
        if position < 0 or position > self.length:
            return False
        if self._starts is None:
            return True
        i = bisect_left(self._starts, position)
        return self._starts[i] == position

    def align_backward(self, position: int) -> int:
        """Nearest boundary at or before position (clamped to the text)."""
        position = self._clamp(position)
        if self._starts is None:
            return position
        return self._starts[bisect_right(self._starts, position) - 1]

    def align_forward(self, position: int) -> int:
        """Nearest boundary at or after position (clamped to the text)."""
        position = self._clamp(position)
        if self._starts is None:
            return position
        return self._starts[bisect_left(self._starts, position)]

    # ─────────────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────────────

    def to_str_index(self, position: int) -> int:
        """
        Python str index for a code unit position.

        Positions inside a surrogate pair resolve to the character that
        contains them.
        """
        position = self.align_backward(position)
        if self._starts is None:
            return position
        return bisect_left(self._starts, position)

    def to_utf16(self, str_index: int) -> int:
        """Code unit position of a Python str index (clamped to the text)."""
        str_index = max(0, min(str_index, len(self.text)))
        if self._starts is None:
            return str_index
        return self._starts[str_index]

    # ─────────────────────────────────────────────────────────────────────────
    # Slicing and Search
    # ─────────────────────────────────────────────────────────────────────────

    def slice(self, start: int, end: int) -> str:
        """Text in [start, end), both ends aligned backward to whole characters."""
        return self.text[self.to_str_index(start):self.to_str_index(end)]

    def find(self, sub: str, start: int = 0, end: Optional[int] = None) -> int:
        """
        Lowest code unit position where sub occurs entirely within [start, end).

        Returns:
            Position in code units, or -1 if not found
        """
        hi = self.length if end is None else end
        found = self.text.find(sub, self.to_str_index(start), self.to_str_index(hi))
        return -1 if found < 0 else self.to_utf16(found)

    def rfind(self, sub: str, start: int = 0, end: Optional[int] = None) -> int:
        """
        Highest code unit position where sub occurs entirely within [start, end).

        Returns:
            Position in code units, or -1 if not found
        """
        hi = self.length if end is None else end
        found = self.text.rfind(sub, self.to_str_index(start), self.to_str_index(hi))
        return -1 if found < 0 else self.to_utf16(found)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Utf16Index(length={self.length}, chars={len(self.text)})"
