"""
Module: engine.ranges

Purpose:
    Range arithmetic over read intervals and the policy deciding which
    intervals to persist.

Key Modules:
    - range_set: merge, union length, complement, containment
    - policy: unread insertion and unmark planning
"""

from .range_set import RangeSet, merge, union_length, complement, contains, clip
from .policy import plan_insertion, plan_removal, RemovalPlan, scale_count, unread_gaps

__all__ = [
    "RangeSet",
    "merge",
    "union_length",
    "complement",
    "contains",
    "clip",
    "plan_insertion",
    "plan_removal",
    "RemovalPlan",
    "scale_count",
    "unread_gaps",
]
