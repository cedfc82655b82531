"""
Unit Tests for Continuation Locator

Tests for choosing the resume position, excerpt boundaries and paragraph
navigation.
"""

import pytest

from reading_tracker.core.errors import InvalidOffset
from reading_tracker.core.models import ContinuationType, Document, ReadInterval
from reading_tracker.engine.config import ContinuationConfig
from reading_tracker.engine.continuation import (
    locate_continuation,
    next_unread_paragraph,
    previous_paragraph,
)
from reading_tracker.engine.offsets.markup import detect_paragraphs
from reading_tracker.engine.offsets.utf16 import utf16_length


class TestStartSelection:
    """Tests for where the excerpt starts."""

    def test_locate_when_nothing_read_and_no_paragraphs_then_beginning(self, long_document):
        excerpt = locate_continuation(long_document, [], paragraph_starts=[])

        assert excerpt.continuation_type is ContinuationType.BEGINNING
        assert excerpt.start_pos == 0
        assert excerpt.end_pos == 500
        assert excerpt.text == "a" * 500
        assert excerpt.read_ranges == ()

    def test_locate_when_paragraph_in_gap_then_unread(self, article_document):
        """Paragraphs are detected from the content when not supplied."""
        excerpt = locate_continuation(article_document, [ReadInterval(0, 49)])

        assert excerpt.continuation_type is ContinuationType.UNREAD
        assert excerpt.start_pos == 51
        assert excerpt.end_pos == 156
        assert excerpt.text == article_document.content[51:]

    def test_locate_when_no_paragraph_in_gap_then_lookback_from_furthest_end(self, long_document):
        excerpt = locate_continuation(long_document, [(0, 600)], paragraph_starts=[0])

        assert excerpt.continuation_type is ContinuationType.CURRENT
        assert excerpt.start_pos == 350
        assert excerpt.end_pos == 850
        assert excerpt.read_ranges == ((350, 600),)

    def test_locate_when_fully_read_then_current_window_to_end(self, long_document):
        excerpt = locate_continuation(long_document, [(0, 1000)], paragraph_starts=[0])

        assert excerpt.continuation_type is ContinuationType.CURRENT
        assert (excerpt.start_pos, excerpt.end_pos) == (750, 1000)

    def test_locate_when_no_lookback_and_fully_read_then_exhausted(self, long_document):
        config = ContinuationConfig(lookback_units=0)
        excerpt = locate_continuation(long_document, [(0, 1000)], paragraph_starts=[0], config=config)

        assert excerpt.is_empty is True
        assert excerpt.start_pos == 1000
        assert excerpt.text == ""

    def test_locate_when_empty_document_then_empty_beginning(self):
        excerpt = locate_continuation(Document.from_content(1, ""), [])

        assert excerpt.continuation_type is ContinuationType.BEGINNING
        assert excerpt.is_empty is True

    def test_locate_when_paragraph_starts_unsorted_then_lowest_in_gap_wins(self, long_document):
        excerpt = locate_continuation(long_document, [(0, 300)], paragraph_starts=[800, 0, 450])

        assert excerpt.continuation_type is ContinuationType.UNREAD
        assert excerpt.start_pos == 450


class TestExcerptBoundaries:
    """Tests for how far the excerpt grows."""

    def test_locate_when_newline_near_target_then_ends_after_newline(self):
        doc = Document.from_content(1, "a" * 480 + "\n" + "b" * 600)
        excerpt = locate_continuation(doc, [], paragraph_starts=[])

        assert excerpt.end_pos == 481
        assert excerpt.text.endswith("\n")

    def test_locate_when_sentence_end_near_target_then_ends_after_period(self):
        doc = Document.from_content(1, "a" * 470 + ". " + "b" * 600)
        excerpt = locate_continuation(doc, [], paragraph_starts=[])

        assert excerpt.end_pos == 471
        assert excerpt.text.endswith("a.")

    def test_locate_when_newline_and_sentence_then_newline_preferred(self):
        doc = Document.from_content(1, "a" * 460 + "\n" + "c" * 50 + ". " + "b" * 600)
        excerpt = locate_continuation(doc, [], paragraph_starts=[])

        assert excerpt.end_pos == 461

    def test_locate_when_boundary_outside_search_window_then_target(self):
        doc = Document.from_content(1, "a" * 300 + "\n" + "b" * 800)
        excerpt = locate_continuation(doc, [], paragraph_starts=[])

        assert excerpt.end_pos == 500

    def test_locate_when_custom_window_then_sizes_follow_config(self, long_document):
        config = ContinuationConfig(window_units=100, lookback_units=10, boundary_search_units=5)
        excerpt = locate_continuation(long_document, [(0, 200)], paragraph_starts=[0], config=config)

        assert (excerpt.start_pos, excerpt.end_pos) == (190, 290)


class TestSurrogateSafety:
    """Tests that excerpts never split a surrogate pair."""

    def test_locate_when_target_inside_pair_then_end_aligned_backward(self, emoji_document):
        config = ContinuationConfig(window_units=499, boundary_search_units=0)
        excerpt = locate_continuation(emoji_document, [], paragraph_starts=[], config=config)

        assert excerpt.end_pos == 498
        assert excerpt.text == "abc👋" * 99 + "abc"
        assert utf16_length(excerpt.text) == excerpt.end_pos - excerpt.start_pos

    def test_locate_when_lookback_lands_inside_pair_then_start_aligned_backward(self, emoji_document):
        excerpt = locate_continuation(emoji_document, [(0, 254)], paragraph_starts=[0])

        assert excerpt.continuation_type is ContinuationType.CURRENT
        assert excerpt.start_pos == 3
        assert excerpt.text.startswith("👋")
        assert utf16_length(excerpt.text) == excerpt.end_pos - excerpt.start_pos


class TestValidation:
    """Tests for rejected inputs."""

    def test_locate_when_paragraph_start_past_end_then_raises_error(self, long_document):
        with pytest.raises(InvalidOffset, match="paragraph start 2000"):
            locate_continuation(long_document, [], paragraph_starts=[2000])

    def test_locate_when_read_interval_past_end_then_raises_error(self, long_document):
        with pytest.raises(InvalidOffset):
            locate_continuation(long_document, [(900, 1001)])

    def test_config_when_window_not_positive_then_raises_error(self):
        with pytest.raises(ValueError, match="window_units must be positive"):
            ContinuationConfig(window_units=0)


class TestParagraphNavigation:
    """Tests for next_unread_paragraph and previous_paragraph."""

    def test_next_unread_when_first_two_read_then_third(self, article_document):
        paragraphs = detect_paragraphs(article_document.content)
        found = next_unread_paragraph(paragraphs, [(0, 49), (51, 87)], 156)
        assert found.index == 2

    def test_next_unread_when_after_last_start_then_none(self, article_document):
        paragraphs = detect_paragraphs(article_document.content)
        assert next_unread_paragraph(paragraphs, [], 156, after=124) is None

    def test_next_unread_when_everything_read_then_none(self, article_document):
        paragraphs = detect_paragraphs(article_document.content)
        assert next_unread_paragraph(paragraphs, [(0, 156)], 156) is None

    def test_previous_paragraph_when_inside_paragraph_then_one_before(self, article_document):
        paragraphs = detect_paragraphs(article_document.content)
        assert previous_paragraph(paragraphs, 100).index == 1
        assert previous_paragraph(paragraphs, 10) is None
