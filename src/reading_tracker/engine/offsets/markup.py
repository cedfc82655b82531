"""
Module: engine.offsets.markup

Purpose:
    Scans inline markup that affects what counts as readable: author
    exclusions and section headers. Also splits a document into paragraphs
    for the continuation locator.

Key Functions:
    - excluded_spans() / excluded_character_count()
    - header_spans() / header_character_count()
    - countable_length(): content length minus excluded and header units
    - detect_paragraphs() / paragraph_starts()
    - count_words()

Markup:
    [[exclude]]...[[/exclude]]   excluded span, tags included in the count
    == Title ==                  header line (two or more '=' each side)

Dependencies:
    - re (std)
    - engine.offsets.utf16: Code unit offsets

Used By:
    - engine.progress: Countable length denominator
    - engine.continuation: Paragraph starts when the caller has none
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from reading_tracker.core.models import Paragraph
from .utf16 import Utf16Index

logger = logging.getLogger(__name__)


EXCLUDE_PATTERN = re.compile(r"\[\[exclude\]\].*?\[\[/exclude\]\]", re.DOTALL)
# Lines may end in \n or \r\n; a trailing \r is never part of a header span
HEADER_PATTERN = re.compile(r"^={2,}[ \t]*(.+?)[ \t]*={2,}(?=\r?$)", re.MULTILINE)
PARAGRAPH_BREAK_PATTERN = re.compile(r"\r?\n[ \t]*\r?\n\s*")


def _spans(pattern: re.Pattern, content: str, index: Utf16Index) -> List[Tuple[int, int]]:
    return [(index.to_utf16(m.start()), index.to_utf16(m.end())) for m in pattern.finditer(content)]


# ─────────────────────────────────────────────────────────────────────────────
# Excluded and Header Spans
# ─────────────────────────────────────────────────────────────────────────────

def excluded_spans(content: str) -> List[Tuple[int, int]]:
    """
    Find [[exclude]]...[[/exclude]] spans.

    An opening tag without a closing tag excludes nothing.

    Returns:
        Sorted, non-overlapping (start, end) spans in code units
    """
    return _spans(EXCLUDE_PATTERN, content, Utf16Index(content))


def header_spans(content: str) -> List[Tuple[int, int]]:
    """
    Find header lines such as "== Early life ==".

    Headers inside an excluded span are skipped so no unit is subtracted
    twice. The span covers the line without its line ending.

    Returns:
        Sorted (start, end) spans in code units
    """
    index = Utf16Index(content)
    excluded = _spans(EXCLUDE_PATTERN, content, index)
    headers = []
    for start, end in _spans(HEADER_PATTERN, content, index):
        if any(ex_start < end and start < ex_end for ex_start, ex_end in excluded):
            continue
        headers.append((start, end))
    return headers


def excluded_character_count(content: str) -> int:
    """Code units covered by excluded spans."""
    return sum(end - start for start, end in excluded_spans(content))


def header_character_count(content: str) -> int:
    """Code units covered by header lines outside excluded spans."""
    return sum(end - start for start, end in header_spans(content))


def countable_length(content: str, content_length: Optional[int] = None) -> int:
    """
    Length that counts toward reading progress.

    Args:
        content: Document text with markup
        content_length: Known length in code units (computed when None)

    Returns:
        content_length - excluded units - header units
    """
    if content_length is None:
        content_length = Utf16Index(content).length
    excluded = excluded_character_count(content)
    headers = header_character_count(content)
    countable = content_length - excluded - headers
    logger.debug(
        f"Countable length {countable} = {content_length} - {excluded} excluded - {headers} header"
    )
    return countable


# ─────────────────────────────────────────────────────────────────────────────
# Paragraphs and Words
# ─────────────────────────────────────────────────────────────────────────────

def detect_paragraphs(content: str) -> List[Paragraph]:
    """
    Split content into paragraphs on blank lines.

    Whitespace-only blocks are dropped; each paragraph span runs from its
    first character to the start of the following blank-line run.

    Example:
        >>> [(p.start, p.end) for p in detect_paragraphs("One.\\n\\nTwo.")]
        [(0, 4), (6, 10)]
    """
    index = Utf16Index(content)
    paragraphs: List[Paragraph] = []
    block_start = 0
    breaks = [(m.start(), m.end()) for m in PARAGRAPH_BREAK_PATTERN.finditer(content)]
    breaks.append((len(content), len(content)))

    for break_start, break_end in breaks:
        block = content[block_start:break_start]
        stripped = block.lstrip()
        if stripped.strip():
            lead = len(block) - len(stripped)
            start = index.to_utf16(block_start + lead)
            end = index.to_utf16(break_start)
            paragraphs.append(
                Paragraph(index=len(paragraphs), start=start, end=end, character_count=end - start)
            )
        block_start = break_end

    return paragraphs


def paragraph_starts(content: str) -> List[int]:
    """Start offsets of detect_paragraphs(content)."""
    return [p.start for p in detect_paragraphs(content)]


def count_words(text: str) -> int:
    """Whitespace-separated word count."""
    return len(text.split())
