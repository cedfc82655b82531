"""
Module: engine.offsets

Purpose:
    Offset model: UTF-16 position mapping and the markup scans that yield
    a document's countable length.
"""

from .utf16 import Utf16Index, utf16_length
from .markup import (
    excluded_spans,
    header_spans,
    excluded_character_count,
    header_character_count,
    countable_length,
    detect_paragraphs,
    paragraph_starts,
    count_words,
)

__all__ = [
    "Utf16Index",
    "utf16_length",
    "excluded_spans",
    "header_spans",
    "excluded_character_count",
    "header_character_count",
    "countable_length",
    "detect_paragraphs",
    "paragraph_starts",
    "count_words",
]
