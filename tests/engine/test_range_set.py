"""
Unit Tests for Range Set Arithmetic

Tests for merge, union length, complement and the RangeSet wrapper.
Randomized cases are checked against a point-sampling oracle built with
numpy boolean masks.
"""

import numpy as np
import pytest

from reading_tracker.core.errors import InvalidOffset
from reading_tracker.core.models import ReadInterval
from reading_tracker.engine.ranges.range_set import (
    RangeSet,
    clip,
    complement,
    contains,
    merge,
    union_length,
)


def _coverage(total: int, spans) -> np.ndarray:
    """Boolean mask with True at every covered code unit."""
    mask = np.zeros(total, dtype=bool)
    for start, end in spans:
        mask[start:end] = True
    return mask


def _random_spans(rng: np.random.Generator, total: int, count: int):
    starts = rng.integers(0, total, size=count)
    lengths = rng.integers(0, total // 4 + 1, size=count)
    return [(int(s), int(min(total, s + n))) for s, n in zip(starts, lengths)]


class TestMerge:
    """Tests for merge function."""

    def test_merge_when_overlapping_then_single_run(self):
        assert merge([(0, 500), (400, 700)]) == [(0, 700)]

    def test_merge_when_touching_then_joined(self):
        """Touching intervals form one run."""
        assert merge([(0, 5), (5, 10)]) == [(0, 10)]

    def test_merge_when_unsorted_then_sorted_output(self):
        assert merge([(900, 950), (400, 700), (0, 500), (700, 800)]) == [(0, 800), (900, 950)]

    def test_merge_when_empty_pairs_then_ignored(self):
        assert merge([(5, 5), (1, 2)]) == [(1, 2)]

    def test_merge_when_read_intervals_then_accepted(self):
        assert merge([ReadInterval(10, 20), ReadInterval(0, 10)]) == [(0, 20)]

    def test_merge_when_inverted_pair_then_raises_error(self):
        with pytest.raises(InvalidOffset):
            merge([(10, 5)])

    def test_merge_when_nothing_then_empty(self):
        assert merge([]) == []

    @pytest.mark.parametrize("seed", range(20))
    def test_merge_when_random_then_matches_oracle(self, seed):
        """Merged cover is minimal and covers exactly the same points."""
        rng = np.random.default_rng(seed)
        total = 200
        spans = _random_spans(rng, total, 12)

        merged = merge(spans)

        assert np.array_equal(_coverage(total, merged), _coverage(total, spans))
        for (_, a_end), (b_start, _) in zip(merged, merged[1:]):
            assert a_end < b_start


class TestUnionLength:
    """Tests for union_length function."""

    def test_union_length_when_overlapping_then_counts_once(self):
        assert union_length([(0, 500), (400, 700)]) == 700

    @pytest.mark.parametrize("seed", range(10))
    def test_union_length_when_random_then_matches_oracle(self, seed):
        rng = np.random.default_rng(100 + seed)
        spans = _random_spans(rng, 300, 15)
        assert union_length(spans) == int(_coverage(300, spans).sum())


class TestComplement:
    """Tests for complement function."""

    def test_complement_when_middle_read_then_gaps_on_both_sides(self):
        assert complement(1000, [(100, 200), (150, 300)]) == [(0, 100), (300, 1000)]

    def test_complement_when_nothing_read_then_whole_document(self):
        assert complement(50, []) == [(0, 50)]

    def test_complement_when_fully_read_then_empty(self):
        assert complement(50, [(0, 30), (30, 50)]) == []

    def test_complement_when_empty_document_then_empty(self):
        assert complement(0, []) == []

    def test_complement_when_interval_past_total_then_raises_error(self):
        with pytest.raises(InvalidOffset):
            complement(50, [(40, 60)])

    def test_complement_when_negative_total_then_raises_error(self):
        with pytest.raises(InvalidOffset, match="total must be >= 0"):
            complement(-1, [])

    @pytest.mark.parametrize("seed", range(10))
    def test_complement_when_random_then_partitions_document(self, seed):
        """Cover and gaps together tile [0, total) without overlap."""
        rng = np.random.default_rng(200 + seed)
        total = 250
        spans = _random_spans(rng, total, 10)

        gaps = complement(total, spans)

        assert np.array_equal(_coverage(total, gaps), ~_coverage(total, spans))
        assert union_length(spans) + union_length(gaps) == total


class TestContainsAndClip:
    """Tests for contains and clip functions."""

    def test_contains_when_point_at_end_then_false(self):
        assert contains(99, [(0, 100)]) is True
        assert contains(100, [(0, 100)]) is False

    def test_clip_when_window_cuts_spans_then_trimmed(self):
        assert clip([(0, 100), (150, 400)], 50, 200) == [(50, 100), (150, 200)]

    def test_clip_when_window_outside_then_empty(self):
        assert clip([(0, 100)], 100, 200) == []


class TestRangeSet:
    """Tests for RangeSet class."""

    def test_from_intervals_when_touching_then_merged(self):
        rs = RangeSet.from_intervals([(0, 5), (5, 10), (20, 30)])
        assert rs.spans == ((0, 10), (20, 30))
        assert rs.length == 20
        assert rs.furthest_end == 30
        assert len(rs) == 2

    def test_init_when_not_merged_then_raises_error(self):
        with pytest.raises(ValueError, match="must be merged"):
            RangeSet(spans=((0, 10), (10, 20)))

    def test_contains_when_point_given_then_half_open(self):
        rs = RangeSet.from_intervals([(20, 30)])
        assert 20 in rs
        assert 30 not in rs
        assert "20" not in rs

    def test_gaps_when_called_then_complement(self):
        rs = RangeSet.from_intervals([(20, 30)])
        assert rs.gaps(40) == [(0, 20), (30, 40)]

    def test_union_when_combined_then_merged(self):
        a = RangeSet.from_intervals([(0, 10)])
        b = RangeSet.from_intervals([(10, 15), (40, 50)])
        assert list(a.union(b)) == [(0, 15), (40, 50)]

    def test_bool_when_empty_then_false(self):
        assert not RangeSet()
        assert RangeSet().furthest_end == 0
