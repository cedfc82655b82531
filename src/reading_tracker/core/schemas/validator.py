"""
Schema Validation Utilities

Validates plain-dict payloads handed over by the persistence layer before
they are turned into models.

**WHY SCHEMAS AT THE BOUNDARY:**

Rows arrive from storage as loosely typed dicts. Checking shape here means
a bad row fails with the field path that broke, instead of surfacing later
as an arithmetic error deep inside a range sweep. Cross-field rules
(end > start, end <= content_length) stay in the model constructors and
engine operations, which know the document.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ValidationError


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}
_VALIDATORS: dict[str, jsonschema.protocols.Validator] = {}

SCHEMA_NAMES = ("read_interval", "mark", "document", "document_edit")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _get_validator(name: str) -> jsonschema.protocols.Validator:
    if name not in _VALIDATORS:
        schema = _load_schema(name)
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        _VALIDATORS[name] = validator_cls(schema)
    return _VALIDATORS[name]


def validate_payload(name: str, data: Any) -> None:
    """
    Validate a payload against a named schema.

    All violations are collected; the first one (by path) becomes the
    error message.

    Args:
        name: One of SCHEMA_NAMES
        data: Decoded payload

    Raises:
        ValidationError: If data does not match the schema
    """
    if name not in SCHEMA_NAMES:
        raise ValueError(f"Unknown schema: {name!r}")
    validator = _get_validator(name)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        raise ValidationError(
            f"Invalid {name} payload: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )


def validate_read_interval(data: dict[str, Any]) -> None:
    """Validate a read interval payload."""
    validate_payload("read_interval", data)


def validate_mark(data: dict[str, Any]) -> None:
    """Validate a mark payload."""
    validate_payload("mark", data)


def validate_document(data: dict[str, Any]) -> None:
    """Validate a document payload."""
    validate_payload("document", data)


def validate_document_edit(data: dict[str, Any]) -> None:
    """Validate an edit payload."""
    validate_payload("document_edit", data)
