"""
Utils Package

Serialization helpers for the persistence boundary.
"""

from .serialization import (
    serialize_read_interval,
    deserialize_read_interval,
    deserialize_read_intervals,
    serialize_mark,
    deserialize_mark,
    deserialize_marks,
    deserialize_document,
    deserialize_document_edit,
    serialize_excerpt,
)

__all__ = [
    "serialize_read_interval",
    "deserialize_read_interval",
    "deserialize_read_intervals",
    "serialize_mark",
    "deserialize_mark",
    "deserialize_marks",
    "deserialize_document",
    "deserialize_document_edit",
    "serialize_excerpt",
]
