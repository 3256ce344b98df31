"""PR detection: flag records a newly logged session breaks against prior history."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import NamedTuple, Optional

from strength_analytics.core.enums import PRKind
from strength_analytics.schemas.analytics import (
    ExercisePrs,
    PrDetail,
    PrResult,
    SessionContext,
    SessionRecord,
    SessionSet,
    SetEntry,
)
from strength_analytics.services.one_rep_max import estimate_one_rep_max, is_qualifying_set, set_volume
from strength_analytics.services.personal_records import as_utc
from strength_analytics.services.stores import WorkoutStore

logger = logging.getLogger(__name__)


class _Set(NamedTuple):
    index: int  # position in the logged session (-1 for history)
    weight: float
    reps: int

    @property
    def volume(self) -> float:
        return self.weight * self.reps

    @property
    def one_rm(self) -> float:
        return estimate_one_rep_max(self.weight, self.reps)


def _working_sets(entries: Iterable[SetEntry], indexed: bool = False) -> list[_Set]:
    out: list[_Set] = []
    for i, entry in enumerate(entries):
        if is_qualifying_set(entry):
            out.append(_Set(i if indexed else -1, float(entry.weight), int(entry.reps)))
    return out


def _history_sets(sessions: Iterable[SessionRecord]) -> list[_Set]:
    return [s for session in sessions for s in _working_sets(session.sets)]


def _best(sets: Sequence[_Set], key) -> Optional[_Set]:
    """First set with the maximum key value."""
    best: Optional[_Set] = None
    for s in sets:
        if best is None or key(s) > key(best):
            best = s
    return best


def _fmt_weight(weight: float) -> str:
    return f"{weight:g}"


def split_history(
    history: Iterable[SessionRecord], session_id, created_at: datetime
) -> tuple[list[SessionRecord], list[SessionRecord]]:
    """(prior, later) sessions around created_at, excluding the session being evaluated."""
    at = as_utc(created_at)
    prior: list[SessionRecord] = []
    later: list[SessionRecord] = []
    for session in history:
        if session.session_id == session_id:
            continue
        ts = as_utc(session.timestamp)
        if ts < at:
            prior.append(session)
        elif ts > at:
            later.append(session)
    return prior, later


def detect_exercise_prs(
    current: Sequence[SetEntry | SessionSet],
    prior: Sequence[SessionRecord],
    later: Sequence[SessionRecord] = (),
) -> list[PrDetail]:
    """
    Records broken by `current` (one exercise's sets in the new session).

    A record is broken when the session strictly exceeds the best in `prior`.
    With no prior working sets at all, every record except rep PRs counts.
    is_current is false once `later` history matches or beats the new value.
    """
    entries = [SetEntry(weight=s.weight, reps=s.reps, is_warmup=s.is_warmup) for s in current]
    sets = _working_sets(entries, indexed=True)
    if not sets:
        return []

    before = _history_sets(prior)
    after = _history_sets(later)
    prs: list[PrDetail] = []

    # Heaviest weight
    top = _best(sets, key=lambda s: s.weight)
    top = _best([s for s in sets if s.weight == top.weight], key=lambda s: s.reps)
    prev = _best(before, key=lambda s: s.weight)
    if prev is not None:
        prev = _best([s for s in before if s.weight == prev.weight], key=lambda s: s.reps)
    if prev is None or top.weight > prev.weight:
        prs.append(
            PrDetail(
                kind=PRKind.HEAVIEST_WEIGHT,
                label="Heaviest Weight",
                weight=top.weight,
                value=top.weight,
                previous_reps=prev.reps if prev else None,
                current_reps=top.reps,
                is_current=not any(s.weight >= top.weight for s in after),
                set_indices=[top.index],
            )
        )

    # Best estimated 1RM
    top = _best(sets, key=lambda s: s.one_rm)
    prev = _best(before, key=lambda s: s.one_rm)
    if prev is None or top.one_rm > prev.one_rm:
        prs.append(
            PrDetail(
                kind=PRKind.BEST_1RM,
                label="Best 1RM",
                weight=top.weight,
                value=round(top.one_rm, 2),
                previous_reps=prev.reps if prev else None,
                current_reps=top.reps,
                is_current=not any(s.one_rm >= top.one_rm for s in after),
                set_indices=[top.index],
            )
        )

    # Rep PRs: more reps at a weight than ever done at that weight or heavier
    seen: set[float] = set()
    for s in sets:
        if s.weight in seen:
            continue
        seen.add(s.weight)
        top = _best([x for x in sets if x.weight == s.weight], key=lambda x: x.reps)
        baseline = max((x.reps for x in before if x.weight >= s.weight), default=None)
        if baseline is None or top.reps <= baseline:
            continue
        prs.append(
            PrDetail(
                kind=PRKind.REP_MAX,
                label=f"Rep PR at {_fmt_weight(s.weight)}kg",
                weight=s.weight,
                value=float(top.reps),
                previous_reps=baseline,
                current_reps=top.reps,
                is_current=not any(x.weight >= s.weight and x.reps >= top.reps for x in after),
                set_indices=[top.index],
            )
        )

    # Best single-set volume
    top = _best(sets, key=lambda s: s.volume)
    prev = _best(before, key=lambda s: s.volume)
    if prev is None or top.volume > prev.volume:
        prs.append(
            PrDetail(
                kind=PRKind.SET_VOLUME,
                label="Best Set Volume",
                weight=top.weight,
                value=round(top.volume, 2),
                previous_reps=prev.reps if prev else None,
                current_reps=top.reps,
                is_current=not any(s.volume >= top.volume for s in after),
                set_indices=[top.index],
            )
        )

    # Best session volume
    total = sum(s.volume for s in sets)
    prior_best = max((_session_volume(p) for p in prior), default=0.0)
    if not before or total > prior_best:
        prs.append(
            PrDetail(
                kind=PRKind.SESSION_VOLUME,
                label="Best Session Volume",
                weight=None,
                value=round(total, 2),
                is_current=not any(_session_volume(p) >= total for p in later),
                set_indices=[s.index for s in sets],
            )
        )

    return prs


def _session_volume(session: SessionRecord) -> float:
    return sum(set_volume(entry) for entry in session.sets)


class SessionPrEvaluator:
    """Evaluates a just-logged session against the user's history, exercise by exercise."""

    def __init__(self, workouts: WorkoutStore) -> None:
        self.workouts = workouts

    async def evaluate(self, ctx: SessionContext) -> PrResult:
        per_exercise: list[ExercisePrs] = []
        for exercise in ctx.exercises:
            history = await self.workouts.get_session_history(ctx.user_id, exercise.exercise_id)
            prior, later = split_history(history, ctx.session_id, ctx.created_at)
            prs = detect_exercise_prs(exercise.sets, prior, later)
            if prs:
                per_exercise.append(
                    ExercisePrs(exercise_id=exercise.exercise_id, exercise_name=exercise.exercise_name, prs=prs)
                )

        total = sum(len(e.prs) for e in per_exercise)
        if total:
            logger.info("Session %s broke %d record(s)", ctx.session_id, total)
        return PrResult(total_prs=total, per_exercise=per_exercise)
