import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import reading_tracker
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from reading_tracker.core.models import Document, Mark, ReadInterval


# Common test fixtures
@pytest.fixture
def long_document() -> Document:
    """1000 code unit document without newlines or sentence breaks."""
    return Document.from_content(1, "a" * 1000)


@pytest.fixture
def article_document() -> Document:
    """Small article with a header, an excluded section and three paragraphs."""
    content = (
        "== Introduction ==\n"
        "First paragraph about reading.\n"
        "\n"
        "[[exclude]]Editor notes.[[/exclude]]\n"
        "\n"
        "Second paragraph continues here.\n"
        "\n"
        "Third paragraph ends the article."
    )
    return Document.from_content(7, content)


@pytest.fixture
def emoji_document() -> Document:
    """Document where every fourth character needs a surrogate pair."""
    return Document.from_content(3, "abc👋" * 300)


@pytest.fixture
def make_mark():
    """Factory for positioned pending marks on document 1."""
    counter = iter(range(1, 10_000))

    def _make(start, end, **kwargs) -> Mark:
        return Mark(id=next(counter), document_id=1, start=start, end=end, **kwargs)

    return _make
