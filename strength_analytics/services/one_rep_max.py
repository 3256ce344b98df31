"""Estimated one-rep-max (Epley) and set qualification."""

from __future__ import annotations

import math

from strength_analytics.core.constants import EPLEY_DIVISOR
from strength_analytics.schemas.analytics import SetEntry


def _positive(value) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def estimate_one_rep_max(weight, reps) -> float | None:
    """Epley 1RM = weight * (1 + reps/30). None unless both inputs are positive numbers."""
    w = _positive(weight)
    r = _positive(reps)
    if w is None or r is None:
        return None
    return w * (1 + r / EPLEY_DIVISOR)


def is_qualifying_set(entry: SetEntry) -> bool:
    """Working set with positive weight and reps: counts toward 1RM, volume and records."""
    if entry.is_warmup:
        return False
    return _positive(entry.weight) is not None and _positive(entry.reps) is not None


def set_volume(entry: SetEntry) -> float:
    if not is_qualifying_set(entry):
        return 0.0
    return float(entry.weight) * int(entry.reps)
