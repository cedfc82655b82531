"""
Unit Tests for Unread Insertion Policy

Tests for plan_insertion, plan_removal and counter scaling.
"""

from datetime import datetime

import numpy as np
import pytest

from reading_tracker.core.errors import InvalidOffset
from reading_tracker.core.models import ReadInterval
from reading_tracker.engine.ranges.policy import (
    plan_insertion,
    plan_removal,
    scale_count,
    unread_gaps,
)
from reading_tracker.engine.ranges.range_set import merge, union_length


class TestScaleCount:
    """Tests for scale_count function."""

    @pytest.mark.parametrize("count,part,whole,expected", [
        (100, 200, 300, 66),
        (300, 300, 300, 300),
        (3, 1, 300, 1),      # never rounds a positive count to zero
        (0, 100, 300, 0),    # zero stays zero
        (None, 100, 300, None),
    ])
    def test_scale_count_when_values_given_then_truncates(self, count, part, whole, expected):
        assert scale_count(count, part, whole) == expected

    def test_scale_count_when_whole_is_zero_then_raises_error(self):
        with pytest.raises(InvalidOffset):
            scale_count(5, 0, 0)


class TestPlanInsertion:
    """Tests for plan_insertion function."""

    def test_plan_insertion_when_partly_read_then_only_unread_tail(self):
        """(0,500) read in a 1000-unit document, then (400,700) read."""
        planned = plan_insertion(ReadInterval(400, 700), [ReadInterval(0, 500)], content_length=1000)
        assert [r.as_tuple() for r in planned] == [(500, 700)]

    def test_plan_insertion_when_counts_given_then_scaled_by_length(self):
        new = ReadInterval(400, 700, character_count=300, word_count=60)
        planned = plan_insertion(new, [(0, 500)])
        assert planned[0].character_count == 200
        assert planned[0].word_count == 40

    @pytest.mark.parametrize("existing", [[], [(0, 50)], [(0, 100), (400, 500)]])
    def test_plan_insertion_when_nothing_of_new_read_then_counts_conserved(self, existing):
        """Scaled counters of the persisted parts add up to the counters supplied."""
        new = ReadInterval(100, 400, character_count=300, word_count=57)
        planned = plan_insertion(new, existing)

        assert sum(r.character_count for r in planned) == 300
        assert sum(r.word_count for r in planned) == 57

    def test_plan_insertion_when_fully_read_then_empty(self):
        assert plan_insertion(ReadInterval(100, 200), [(0, 150), (150, 300)]) == []

    def test_plan_insertion_when_holes_then_one_row_per_hole(self):
        planned = plan_insertion(ReadInterval(0, 500), [(100, 200), (300, 400)])
        assert [r.as_tuple() for r in planned] == [(0, 100), (200, 300), (400, 500)]

    def test_plan_insertion_when_touching_existing_then_whole_interval(self):
        planned = plan_insertion(ReadInterval(400, 700), [(0, 400)])
        assert [r.as_tuple() for r in planned] == [(400, 700)]

    def test_plan_insertion_when_flags_set_then_copied_to_every_part(self):
        ts = datetime(2024, 3, 1)
        new = ReadInterval(0, 300, auto_completed=True, marked_at=ts, id=5)
        planned = plan_insertion(new, [(100, 200)])
        assert all(r.auto_completed and r.marked_at == ts for r in planned)
        assert all(r.id is None for r in planned)

    def test_plan_insertion_when_past_document_then_raises_error(self):
        with pytest.raises(InvalidOffset, match="end must be <= length"):
            plan_insertion(ReadInterval(900, 1100), [], content_length=1000)

    def test_plan_insertion_when_repeated_then_idempotent(self):
        existing = [ReadInterval(100, 200), ReadInterval(300, 400)]
        new = ReadInterval(50, 450)

        first = plan_insertion(new, existing)
        second = plan_insertion(new, existing + first)

        assert second == []

    @pytest.mark.parametrize("seed", range(15))
    def test_plan_insertion_when_random_then_conserves_coverage(self, seed):
        """Persisted parts fill exactly the unread part of the new interval."""
        rng = np.random.default_rng(seed)
        total = 300
        existing = []
        for _ in range(8):
            start = int(rng.integers(0, total - 1))
            end = int(rng.integers(start + 1, total + 1))
            existing.append(ReadInterval(start, end))
        new_start = int(rng.integers(0, total - 1))
        new = ReadInterval(new_start, int(rng.integers(new_start + 1, total + 1)))

        planned = plan_insertion(new, existing, content_length=total)

        assert union_length(existing + planned) == union_length(existing + [new])
        assert union_length(existing) + sum(r.length for r in planned) == union_length(existing + planned)
        assert merge(planned) == [r.as_tuple() for r in planned]

    def test_unread_gaps_when_existing_unmerged_then_same_result(self):
        assert unread_gaps(400, 700, [(0, 450), (420, 500)]) == [(500, 700)]


class TestPlanRemoval:
    """Tests for plan_removal function."""

    def test_plan_removal_when_window_inside_interval_then_split(self):
        stored = ReadInterval(0, 100, character_count=100, id=1)
        plan = plan_removal([stored], 40, 60)
        assert plan.removed == [stored]
        assert [r.as_tuple() for r in plan.replacements] == [(0, 40), (60, 100)]
        assert [r.character_count for r in plan.replacements] == [40, 40]

    def test_plan_removal_when_interval_inside_window_then_deleted(self):
        plan = plan_removal([ReadInterval(10, 20)], 0, 50)
        assert len(plan.removed) == 1
        assert plan.replacements == []

    def test_plan_removal_when_straddling_edges_then_trimmed(self):
        plan = plan_removal([ReadInterval(0, 30), ReadInterval(40, 80)], 20, 50)
        assert [r.as_tuple() for r in plan.replacements] == [(0, 20), (50, 80)]

    def test_plan_removal_when_touching_then_noop(self):
        plan = plan_removal([ReadInterval(0, 20)], 20, 50)
        assert plan.is_noop is True

    def test_plan_removal_when_inverted_window_then_raises_error(self):
        with pytest.raises(InvalidOffset):
            plan_removal([], 50, 20)

    @pytest.mark.parametrize("seed", range(10))
    def test_plan_removal_when_random_then_window_cleared(self, seed):
        rng = np.random.default_rng(500 + seed)
        total = 200
        stored = []
        for _ in range(6):
            start = int(rng.integers(0, total - 1))
            stored.append(ReadInterval(start, int(rng.integers(start + 1, total + 1))))
        lo = int(rng.integers(0, total))
        hi = int(rng.integers(lo, total + 1))

        plan = plan_removal(stored, lo, hi)
        kept = [r for r in stored if r not in plan.removed] + plan.replacements

        before = np.zeros(total, dtype=bool)
        for r in stored:
            before[r.start:r.end] = True
        after = np.zeros(total, dtype=bool)
        for r in kept:
            after[r.start:r.end] = True
        expected = before.copy()
        expected[lo:hi] = False
        assert np.array_equal(after, expected)
