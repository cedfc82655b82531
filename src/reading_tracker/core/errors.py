"""
Module: core.errors

Purpose:
    Error taxonomy shared by the models and the engine. Offset and edit
    errors subclass ValueError so model validation reads the same as any
    other dataclass constructor failure.

Key Classes:
    - ReadingTrackerError: Base class for all package errors
    - InvalidOffset: Negative start, end before start, end past the document
    - InvalidEditWindow: Edit window that cannot describe the old content
    - ValidationError: Payload failed schema validation

Used By:
    - core.models: __post_init__ validation
    - core.schemas.validator: payload validation
    - engine: fail-fast checks on caller-supplied offsets
"""

from __future__ import annotations

from typing import Optional


class ReadingTrackerError(Exception):
    """Base class for reading tracker errors."""


class InvalidOffset(ReadingTrackerError, ValueError):
    """Raised when a position or interval does not fit the document."""


class InvalidEditWindow(ReadingTrackerError, ValueError):
    """Raised when an edit window is inverted or outside the old content."""


class ValidationError(ReadingTrackerError):
    """Raised when a payload fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: Optional[list[str]] = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def check_interval(start: int, end: int, length: Optional[int] = None) -> None:
    """
    Validate a half-open interval against an optional document length.

    Args:
        start: Inclusive start in UTF-16 code units
        end: Exclusive end in UTF-16 code units
        length: Document length; when None only ordering is checked

    Raises:
        InvalidOffset: If start < 0, end < start, or end > length
    """
    if start < 0:
        raise InvalidOffset(f"start must be >= 0: {start}")
    if end < start:
        raise InvalidOffset(f"end must be >= start: {end} < {start}")
    if length is not None and end > length:
        raise InvalidOffset(f"end must be <= length: {end} > {length}")
