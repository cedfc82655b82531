"""
Module: engine.reconcile.locators

Purpose:
    Resolves where a mark sits in the current content before it is
    reconciled. Two tagged strategies:

    - STORED_OFFSET: trust the stored [start, end), even when it is out of
      range, so the reconciler can reject it
    - TEXT_SEARCH: legacy marks without offsets are found by searching the
      content for their original text; only a unique match is accepted

    Only STORED_OFFSET runs by default. A mark without offsets is flagged
    on edit unless the caller opts into SEARCH_LOCATORS.

Key Functions:
    - find_matches(): All literal matches of a query, in code units
    - resolve_positions(): Apply locators in order to each mark

Key Classes:
    - LocatorKind: Strategy tag
    - StoredOffsetLocator, TextSearchLocator: Strategies
    - LocatedMark: Mark plus the strategy that positioned it
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from reading_tracker.core.models import Mark
from ..offsets.utf16 import Utf16Index

logger = logging.getLogger(__name__)


class LocatorKind(str, Enum):
    """Strategy that produced a mark's positions."""
    STORED_OFFSET = "stored_offset"
    TEXT_SEARCH = "text_search"

    def __str__(self) -> str:
        return self.value


def find_matches(
    index: Utf16Index,
    query: str,
    case_sensitive: bool = True,
    whole_word: bool = False,
) -> List[Tuple[int, int]]:
    """
    Non-overlapping literal matches of query in the indexed text.

    Returns:
        (start, end) pairs in code units; empty for an empty query

    Example:
        >>> find_matches(Utf16Index("a cat and a cat"), "cat")
        [(2, 5), (12, 15)]
    """
    if not query:
        return []
    pattern = re.escape(query)
    if whole_word:
        pattern = rf"\b{pattern}\b"
    flags = 0 if case_sensitive else re.IGNORECASE
    return [
        (index.to_utf16(m.start()), index.to_utf16(m.end()))
        for m in re.finditer(pattern, index.text, flags)
    ]


class MarkLocator(Protocol):
    """Protocol for mark positioning strategies."""

    kind: LocatorKind

    def locate(self, mark: Mark, index: Utf16Index) -> Optional[Tuple[int, int]]:
        """Return (start, end) for the mark in the indexed content, or None."""
        ...


class StoredOffsetLocator:
    """Use stored offsets as they are, in range or not."""

    kind = LocatorKind.STORED_OFFSET

    def locate(self, mark: Mark, index: Utf16Index) -> Optional[Tuple[int, int]]:
        if not mark.has_position:
            return None
        return (mark.start, mark.end)


@dataclass(frozen=True)
class TextSearchLocator:
    """
    Find a mark by searching for its original text.

    Attributes:
        case_sensitive: Match case exactly (default True)
        whole_word: Require word boundaries at both ends (default False)
    """
    case_sensitive: bool = True
    whole_word: bool = False

    kind = LocatorKind.TEXT_SEARCH

    def locate(self, mark: Mark, index: Utf16Index) -> Optional[Tuple[int, int]]:
        matches = find_matches(index, mark.original_text, self.case_sensitive, self.whole_word)
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.warning(f"{mark!r}: {len(matches)} matches for its text, leaving unpositioned")
        return None


@dataclass(frozen=True)
class LocatedMark:
    """
    Mark after positioning.

    Attributes:
        mark: Mark with resolved offsets (unchanged when unresolved)
        kind: Strategy that positioned it, None when unresolved
    """
    mark: Mark
    kind: Optional[LocatorKind]

    @property
    def resolved(self) -> bool:
        return self.kind is not None


DEFAULT_LOCATORS: Tuple[MarkLocator, ...] = (StoredOffsetLocator(),)
SEARCH_LOCATORS: Tuple[MarkLocator, ...] = (StoredOffsetLocator(), TextSearchLocator())


def resolve_positions(
    marks: Iterable[Mark],
    content: str,
    locators: Sequence[MarkLocator] = DEFAULT_LOCATORS,
) -> List[LocatedMark]:
    """
    Position marks against content, trying locators in order.

    Terminal marks are passed through untouched. A mark no locator can
    place keeps its old fields and will be flagged by the reconciler if it
    has no offsets.

    Args:
        marks: Marks of one document
        content: Content the offsets refer to
        locators: Strategies, first hit wins

    Returns:
        One LocatedMark per mark, in input order
    """
    index = Utf16Index(content)
    located = []
    for mark in marks:
        if mark.is_terminal:
            located.append(LocatedMark(mark, None))
            continue
        for locator in locators:
            span = locator.locate(mark, index)
            if span is not None:
                located.append(LocatedMark(mark.moved(*span), locator.kind))
                break
        else:
            located.append(LocatedMark(mark, None))
    return located
