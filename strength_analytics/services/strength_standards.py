"""Strength standards classification.

Tables are loaded once into a registry: configs live in a tuple (the arena) and
lookups go through small indexes keyed by stable exercise key and by
lower-cased display name / alias. Callers may pass either.
"""

from __future__ import annotations

import math
from typing import Optional

from strength_analytics.core.enums import Gender, MeasurementMode, StrengthLevel
from strength_analytics.core.standards_data import STANDARDS_TABLE, TIER_TEXT, TIERS, ExerciseStandards
from strength_analytics.schemas.analytics import StandardsSummary, StrengthClassification, StrengthStandard


class StandardsRegistry:
    """Arena of exercise standards with key and name indexes."""

    def __init__(self, table: tuple[ExerciseStandards, ...] = STANDARDS_TABLE) -> None:
        self._arena: tuple[ExerciseStandards, ...] = tuple(table)
        self._by_key: dict[str, int] = {}
        self._by_name: dict[str, int] = {}
        for slot, config in enumerate(self._arena):
            if config.key in self._by_key:
                raise ValueError(f"Duplicate standards key: {config.key}")
            for thresholds in (config.male, config.female):
                if len(thresholds) != len(TIERS) or any(
                    b <= a for a, b in zip(thresholds, thresholds[1:])
                ):
                    raise ValueError(f"Standards for {config.key} must be {len(TIERS)} strictly increasing values")
            self._by_key[config.key] = slot
            for name in (config.name, *config.aliases):
                self._by_name[_normalize_name(name)] = slot

    def get(self, exercise: str | None) -> Optional[ExerciseStandards]:
        """Look up by stable key first, then by display name or alias."""
        if not exercise:
            return None
        slot = self._by_key.get(exercise)
        if slot is None:
            slot = self._by_name.get(_normalize_name(exercise))
        return self._arena[slot] if slot is not None else None

    def resolve_key(self, name: str | None) -> Optional[str]:
        config = self.get(name)
        return config.key if config else None

    def __contains__(self, exercise: str) -> bool:
        return self.get(exercise) is not None

    def __iter__(self):
        return iter(self._arena)


def _normalize_name(name: str) -> str:
    return " ".join(name.strip().lower().split())


_registry = StandardsRegistry()


def get_registry() -> StandardsRegistry:
    return _registry


def has_standards(exercise: str | None) -> bool:
    """True when the exercise (key, display name or alias) has a standards table."""
    return exercise is not None and exercise in _registry


def resolve_standards_key(name: str | None) -> Optional[str]:
    return _registry.resolve_key(name)


def is_rep_based(exercise: str) -> bool:
    config = _registry.get(exercise)
    return config is not None and config.mode == MeasurementMode.BODYWEIGHT_REPS


def available_standards() -> list[StandardsSummary]:
    return [
        StandardsSummary(key=c.key, name=c.name, rep_based=c.mode == MeasurementMode.BODYWEIGHT_REPS)
        for c in _registry
    ]


def _coerce_gender(gender) -> Optional[Gender]:
    if gender is None:
        return None
    try:
        return Gender(str(gender.value if isinstance(gender, Gender) else gender).strip().lower())
    except ValueError:
        return None


def _build_ladder(config: ExerciseStandards, gender: Gender) -> list[StrengthStandard]:
    thresholds = config.male if gender == Gender.MALE else config.female
    return [
        StrengthStandard(
            level=tier,
            multiplier=multiplier,
            description=TIER_TEXT[tier][0],
            recommendation=TIER_TEXT[tier][1],
        )
        for tier, multiplier in zip(TIERS, thresholds)
    ]


def get_standards_ladder(exercise: str, gender) -> Optional[list[StrengthStandard]]:
    """Full six-tier ladder for display, independent of any lifter."""
    config = _registry.get(exercise)
    g = _coerce_gender(gender)
    if config is None or g is None:
        return None
    return _build_ladder(config, g)


def clamp_progress(progress: float) -> float:
    if not math.isfinite(progress):
        return 0.0
    return max(0.0, min(100.0, progress))


def classify(
    exercise: str,
    gender,
    body_weight_kg: float | None,
    value: float,
) -> Optional[StrengthClassification]:
    """
    Place a lifter on the exercise's ladder.

    value is the best estimated 1RM for weight-based exercises, or the best rep
    count for bodyweight movements. Returns None when gender or bodyweight is
    missing or the exercise has no standards.
    """
    config = _registry.get(exercise)
    g = _coerce_gender(gender)
    if config is None or g is None or body_weight_kg is None or body_weight_kg <= 0:
        return None

    ladder = _build_ladder(config, g)
    if config.mode == MeasurementMode.BODYWEIGHT_REPS:
        thresholds = [s.multiplier for s in ladder]
    else:
        thresholds = [body_weight_kg * s.multiplier for s in ladder]
    value = float(value or 0.0)

    index = -1
    for i in range(len(ladder) - 1, -1, -1):
        if value >= thresholds[i]:
            index = i
            break

    if index == -1:
        # Below the first milestone: progress toward Beginner
        next_threshold = thresholds[0]
        progress = (value / next_threshold) * 100 if next_threshold > 0 else 0.0
        return StrengthClassification(
            level=StrengthLevel.UNTRAINED,
            standard=ladder[0],
            next_level=ladder[0],
            progress_pct=clamp_progress(progress),
            value=value,
            threshold=None,
            next_threshold=round(next_threshold, 2),
        )

    current = ladder[index]
    if index == len(ladder) - 1:
        return StrengthClassification(
            level=current.level,
            standard=current,
            next_level=None,
            progress_pct=100.0,
            value=value,
            threshold=round(thresholds[index], 2),
        )

    span = thresholds[index + 1] - thresholds[index]
    progress = (value - thresholds[index]) / span * 100 if span > 0 else 0.0
    return StrengthClassification(
        level=current.level,
        standard=current,
        next_level=ladder[index + 1],
        progress_pct=clamp_progress(progress),
        value=value,
        threshold=round(thresholds[index], 2),
        next_threshold=round(thresholds[index + 1], 2),
    )
