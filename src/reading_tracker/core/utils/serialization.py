"""
Serialization Utilities

Provides dict conversion for the models exchanged with the persistence
layer. Nothing here touches files or connections: the caller owns storage
and hands over rows it has already decoded.

- `deserialize_*` validate against the payload schema, then build models
- `serialize_*` call the model's to_dict()
- Calculated values (countable length, progress) are never serialized
"""

from __future__ import annotations

from typing import Any, Iterable

from ..models.documents import Document
from ..models.edits import DocumentEdit
from ..models.excerpts import Excerpt
from ..models.intervals import ReadInterval
from ..models.marks import Mark
from ..schemas.validator import (
    validate_document,
    validate_document_edit,
    validate_mark,
    validate_read_interval,
)


# ─────────────────────────────────────────────────────────────────────────────
# Read Intervals
# ─────────────────────────────────────────────────────────────────────────────

def serialize_read_interval(interval: ReadInterval) -> dict[str, Any]:
    """Serialize a ReadInterval to a dictionary."""
    return interval.to_dict()


def deserialize_read_interval(data: dict[str, Any], *, validate: bool = True) -> ReadInterval:
    """
    Deserialize a ReadInterval from a dictionary.

    Args:
        data: Stored row as a dict
        validate: Whether to validate against the schema first

    Raises:
        ValidationError: If validate=True and data is malformed
        InvalidOffset: If end <= start
    """
    if validate:
        validate_read_interval(data)
    return ReadInterval.from_dict(data)


def deserialize_read_intervals(
    rows: Iterable[dict[str, Any]],
    *,
    validate: bool = True,
) -> list[ReadInterval]:
    """Deserialize every stored interval of a document."""
    return [deserialize_read_interval(row, validate=validate) for row in rows]


# ─────────────────────────────────────────────────────────────────────────────
# Marks
# ─────────────────────────────────────────────────────────────────────────────

def serialize_mark(mark: Mark) -> dict[str, Any]:
    """Serialize a Mark to a dictionary."""
    return mark.to_dict()


def deserialize_mark(data: dict[str, Any], *, validate: bool = True) -> Mark:
    """
    Deserialize a Mark from a dictionary.

    Raises:
        ValidationError: If validate=True and data is malformed
        InvalidOffset: If end < start
    """
    if validate:
        validate_mark(data)
    return Mark.from_dict(data)


def deserialize_marks(rows: Iterable[dict[str, Any]], *, validate: bool = True) -> list[Mark]:
    """Deserialize every mark of a document."""
    return [deserialize_mark(row, validate=validate) for row in rows]


# ─────────────────────────────────────────────────────────────────────────────
# Documents, Edits, Excerpts
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_document(data: dict[str, Any], *, validate: bool = True) -> Document:
    """
    Deserialize a Document; content_length is computed when absent.

    Raises:
        ValidationError: If validate=True and data is malformed
        InvalidOffset: If content_length disagrees with content
    """
    if validate:
        validate_document(data)
    return Document.from_dict(data)


def deserialize_document_edit(data: dict[str, Any], *, validate: bool = True) -> DocumentEdit:
    """
    Deserialize a DocumentEdit.

    Raises:
        ValidationError: If validate=True and data is malformed
        InvalidEditWindow: If the window is inverted or past the old content
    """
    if validate:
        validate_document_edit(data)
    return DocumentEdit.from_dict(data)


def serialize_excerpt(excerpt: Excerpt) -> dict[str, Any]:
    """Serialize an Excerpt for the presentation layer."""
    return excerpt.to_dict()
