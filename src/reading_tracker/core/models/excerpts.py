"""
Module: excerpts

Purpose:
    Provides the Excerpt dataclass returned by the continuation locator and
    the ContinuationType telling the caller why that spot was chosen.

Dependencies:
    - dataclasses (std)
    - enum (std)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ContinuationType(str, Enum):
    """Why the excerpt starts where it does."""
    UNREAD = "unread"        # First paragraph inside an unread gap
    CURRENT = "current"      # Lookback from the furthest read position
    BEGINNING = "beginning"  # Nothing read yet

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Excerpt:
    """
    Bounded slice of a document to resume reading from.

    Attributes:
        start_pos: Inclusive start in UTF-16 code units
        end_pos: Exclusive end in UTF-16 code units
        text: Document text in [start_pos, end_pos)
        continuation_type: How start_pos was chosen
        total_length: Document length in UTF-16 code units
        read_ranges: Merged read cover clipped to [start_pos, end_pos)

    Invariants:
        - 0 <= start_pos <= end_pos <= total_length
    """

    start_pos: int
    end_pos: int
    text: str
    continuation_type: ContinuationType
    total_length: int = 0
    read_ranges: Tuple[Tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        """Validate excerpt bounds on construction."""
        if self.start_pos < 0:
            raise ValueError(f"start_pos must be >= 0: {self.start_pos}")
        if self.end_pos < self.start_pos:
            raise ValueError(f"end_pos must be >= start_pos: {self.end_pos} < {self.start_pos}")
        if self.end_pos > self.total_length:
            raise ValueError(f"end_pos must be <= total_length: {self.end_pos} > {self.total_length}")

    @classmethod
    def exhausted(cls, total_length: int, continuation_type: ContinuationType) -> Excerpt:
        """Empty excerpt pinned to the end of a fully consumed document."""
        return cls(
            start_pos=total_length,
            end_pos=total_length,
            text="",
            continuation_type=continuation_type,
            total_length=total_length,
        )

    @property
    def is_empty(self) -> bool:
        return self.start_pos == self.end_pos

    def to_dict(self) -> dict:
        return {
            "start_pos": self.start_pos,
            "end_pos": self.end_pos,
            "text": self.text,
            "continuation_type": self.continuation_type.value,
            "total_length": self.total_length,
            "read_ranges": [list(r) for r in self.read_ranges],
        }
