"""
Schemas Package

JSON schema definitions and validation utilities for boundary payloads.
"""

from .validator import (
    validate_payload,
    validate_read_interval,
    validate_mark,
    validate_document,
    validate_document_edit,
    SCHEMA_NAMES,
)
from ..errors import ValidationError

__all__ = [
    "validate_payload",
    "validate_read_interval",
    "validate_mark",
    "validate_document",
    "validate_document_edit",
    "ValidationError",
    "SCHEMA_NAMES",
]
