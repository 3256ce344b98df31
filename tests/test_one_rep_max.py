"""Epley estimate and working-set qualification."""

import math

import pytest

from strength_analytics.schemas.analytics import SetEntry
from strength_analytics.services.one_rep_max import estimate_one_rep_max, is_qualifying_set, set_volume


class TestEstimateOneRepMax:
    def test_epley(self):
        assert estimate_one_rep_max(100, 5) == pytest.approx(116.67, abs=0.01)

    def test_single_rep_is_not_the_weight(self):
        # Epley never returns the raw weight for one rep
        assert estimate_one_rep_max(100, 1) == pytest.approx(103.33, abs=0.01)

    @pytest.mark.parametrize(
        "weight,reps",
        [(0, 5), (100, 0), (-20, 5), (100, -1), (None, 5), (100, None), ("heavy", 5), (math.nan, 5), (math.inf, 3)],
    )
    def test_invalid_inputs_return_none(self, weight, reps):
        assert estimate_one_rep_max(weight, reps) is None

    def test_numeric_strings_are_accepted(self):
        assert estimate_one_rep_max("60", "10") == pytest.approx(80.0)


class TestQualifyingSet:
    def test_working_set_qualifies(self):
        assert is_qualifying_set(SetEntry(weight=80, reps=8))

    def test_warmup_never_qualifies(self):
        assert not is_qualifying_set(SetEntry(weight=140, reps=3, is_warmup=True))

    def test_bodyweight_set_is_excluded(self):
        assert not is_qualifying_set(SetEntry(weight=None, reps=12))

    def test_set_volume(self):
        assert set_volume(SetEntry(weight=60, reps=10)) == 600.0
        assert set_volume(SetEntry(weight=60, reps=10, is_warmup=True)) == 0.0
