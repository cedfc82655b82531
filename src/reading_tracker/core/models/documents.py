"""
Module: documents

Purpose:
    Provides the Document dataclass - the immutable snapshot of a text the
    engine reads positions against. Owned by the persistence layer; the
    engine only ever receives it.

Dependencies:
    - dataclasses (std)
    - datetime (std)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..errors import InvalidOffset
from ..units import utf16_length


@dataclass(frozen=True, slots=True)
class Document:
    """
    Document snapshot.

    Attributes:
        id: Storage identifier
        content: Full text, including inline markup
        content_length: Length of content in UTF-16 code units
        updated_at: Last modification time, if known

    Invariants:
        - content_length == UTF-16 length of content

    Example:
        >>> doc = Document.from_content(1, "Hi 👋")
        >>> doc.content_length
        5
    """

    id: int
    content: str
    content_length: int
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate the stored length against the content."""
        actual = utf16_length(self.content)
        if self.content_length != actual:
            raise InvalidOffset(
                f"content_length {self.content_length} does not match content ({actual} code units)"
            )

    @classmethod
    def from_content(
        cls,
        id: int,
        content: str,
        updated_at: Optional[datetime] = None,
    ) -> Document:
        """Create a document, computing content_length from content."""
        return cls(id=id, content=content, content_length=utf16_length(content), updated_at=updated_at)

    @property
    def is_empty(self) -> bool:
        """True for a zero-length document."""
        return self.content_length == 0

    def to_dict(self) -> dict:
        d = {"id": self.id, "content": self.content, "content_length": self.content_length}
        if self.updated_at is not None:
            d["updated_at"] = self.updated_at.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        updated_at = data.get("updated_at")
        content = data["content"]
        return cls(
            id=data["id"],
            content=content,
            content_length=data.get("content_length", utf16_length(content)),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )

    def __repr__(self) -> str:
        return f"Document({self.id}, length={self.content_length})"
