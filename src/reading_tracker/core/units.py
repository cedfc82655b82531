"""
Module: units

Purpose:
    UTF-16 code unit length of a string. Every stored offset counts code
    units, so models and the engine share this one measure.

Key Functions:
    - utf16_length(): Length of a string in code units

Used By:
    - core.models.documents: content_length
    - core.models.edits: DocumentEdit.between(), DocumentEdit.replacement()
    - engine.offsets.utf16: Utf16Index
"""

# First code point that needs a surrogate pair
SUPPLEMENTARY_START = 0x10000


def utf16_length(text: str) -> int:
    """
    Length of text in UTF-16 code units.

    Example:
        >>> utf16_length("Hello")
        5
        >>> utf16_length("Hi 👋")
        5
    """
    return len(text) + sum(1 for ch in text if ord(ch) >= SUPPLEMENTARY_START)
