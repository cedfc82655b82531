"""
Module: paragraphs

Purpose:
    Provides the Paragraph dataclass - one blank-line separated block of a
    document, as produced by the paragraph detector.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidOffset


@dataclass(frozen=True, slots=True)
class Paragraph:
    """
    Paragraph span [start, end) in UTF-16 code units.

    Attributes:
        index: Zero-based position among the document's paragraphs
        start: Inclusive start
        end: Exclusive end
        character_count: Code units in the paragraph (end - start)
    """

    index: int
    start: int
    end: int
    character_count: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise InvalidOffset(f"Invalid paragraph span: [{self.start}, {self.end})")

    def contains(self, position: int) -> bool:
        return self.start <= position < self.end
