"""Personal record tracking over a user's set history.

Everything here is recomputed from the full history on every call: no cached
aggregates, so identical history always yields identical output.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from strength_analytics.schemas.analytics import (
    ExerciseRecordPoint,
    PersonalBests,
    ProgressPoint,
    SessionRecord,
    SetVolume,
    StrengthScorePoint,
)
from strength_analytics.services.one_rep_max import estimate_one_rep_max, is_qualifying_set, set_volume


def chronological(sessions: Iterable[SessionRecord]) -> list[SessionRecord]:
    """Sessions oldest first (stable for equal timestamps)."""
    return sorted(sessions, key=lambda s: as_utc(s.timestamp))


def session_best_1rm(session: SessionRecord) -> float | None:
    best: float | None = None
    for entry in session.sets:
        if not is_qualifying_set(entry):
            continue
        est = estimate_one_rep_max(entry.weight, entry.reps)
        if best is None or est > best:
            best = est
    return best


def running_max_series(sessions: Iterable[SessionRecord]) -> list[ProgressPoint]:
    """Running personal-best estimated 1RM, one point per session with working sets."""
    running_max = 0.0
    points: list[ProgressPoint] = []
    for session in chronological(sessions):
        best = session_best_1rm(session)
        if best is None:
            continue
        running_max = max(running_max, best)
        points.append(ProgressPoint(date=session.timestamp, max_weight=round(running_max, 2)))
    return points


def compute_personal_bests(sessions: Iterable[SessionRecord]) -> PersonalBests:
    """Global bests: heaviest weight, best 1RM, best single set and best session volume."""
    heaviest = 0.0
    best_1rm = 0.0
    best_set: SetVolume | None = None
    best_session = 0.0

    for session in chronological(sessions):
        session_total = 0.0
        for entry in session.sets:
            if not is_qualifying_set(entry):
                continue
            weight = float(entry.weight)
            heaviest = max(heaviest, weight)
            best_1rm = max(best_1rm, estimate_one_rep_max(entry.weight, entry.reps))
            volume = set_volume(entry)
            session_total += volume
            # strict > keeps the earliest set on ties
            if best_set is None or volume > best_set.volume:
                best_set = SetVolume(weight=weight, reps=int(entry.reps), volume=round(volume, 2))
        best_session = max(best_session, session_total)

    return PersonalBests(
        heaviest_weight=heaviest,
        best_1rm=round(best_1rm, 2),
        best_set_volume=best_set,
        best_session_volume=round(best_session, 2),
    )


def exercise_records_by_weight(sessions: Iterable[SessionRecord]) -> list[ExerciseRecordPoint]:
    """
    One row per distinct (weight, date): most reps done at that weight that day,
    with its estimated 1RM. Heaviest first; same weight oldest first.
    """
    max_reps: dict[tuple[float, date], int] = {}
    for session in sessions:
        day = session.timestamp.date()
        for entry in session.sets:
            if not is_qualifying_set(entry):
                continue
            key = (float(entry.weight), day)
            if int(entry.reps) > max_reps.get(key, 0):
                max_reps[key] = int(entry.reps)

    rows = [
        ExerciseRecordPoint(
            weight=weight,
            max_reps=reps,
            date=day,
            estimated_1rm=round(estimate_one_rep_max(weight, reps), 2),
        )
        for (weight, day), reps in max_reps.items()
    ]
    rows.sort(key=lambda r: (-r.weight, r.date))
    return rows


def rep_max_table(sessions: Iterable[SessionRecord]) -> dict[int, float]:
    """Heaviest weight lifted for each rep count, e.g. {1: 140.0, 5: 120.0}."""
    table: dict[int, float] = {}
    for session in sessions:
        for entry in session.sets:
            if not is_qualifying_set(entry):
                continue
            reps = int(entry.reps)
            if float(entry.weight) > table.get(reps, 0.0):
                table[reps] = float(entry.weight)
    return dict(sorted(table.items()))


def best_rep_count(sessions: Iterable[SessionRecord]) -> int:
    """Most reps in a single working set, load ignored (pull-ups, dips)."""
    best = 0
    for session in sessions:
        for entry in session.sets:
            if entry.is_warmup or entry.reps is None:
                continue
            best = max(best, int(entry.reps))
    return best


def best_one_rep_max(sessions: Iterable[SessionRecord]) -> float:
    """Unrounded best estimated 1RM; comparisons use this, output models round."""
    best = 0.0
    for session in sessions:
        session_best = session_best_1rm(session)
        if session_best is not None and session_best > best:
            best = session_best
    return best


def best_one_rep_maxes(sessions: Iterable[SessionRecord]) -> dict[uuid.UUID, float]:
    """Best estimated 1RM per exercise across a mixed history."""
    bests: dict[uuid.UUID, float] = {}
    for session in sessions:
        best = session_best_1rm(session)
        if best is not None and best > bests.get(session.exercise_id, 0.0):
            bests[session.exercise_id] = best
    return bests


def strength_score_series(sessions: Iterable[SessionRecord]) -> list[StrengthScorePoint]:
    """
    Strength score = sum of all-time best estimated 1RMs across exercises,
    evaluated after each workout (all exercises of a workout count together).
    """
    bests: dict[uuid.UUID, float] = {}
    points: list[StrengthScorePoint] = []
    current: uuid.UUID | None = None
    current_ts: datetime | None = None

    # records of one workout share a timestamp; keep them adjacent
    ordered = sorted(sessions, key=lambda s: (as_utc(s.timestamp), str(s.session_id)))
    for session in ordered:
        best = session_best_1rm(session)
        if best is None:
            continue
        if current is not None and session.session_id != current:
            points.append(StrengthScorePoint(date=current_ts, strength_score=round(sum(bests.values()))))
        current, current_ts = session.session_id, session.timestamp
        if best > bests.get(session.exercise_id, 0.0):
            bests[session.exercise_id] = best

    if current is not None:
        points.append(StrengthScorePoint(date=current_ts, strength_score=round(sum(bests.values()))))
    return points


def clamp_days_back(days_back: int | None, minimum: int = 7, maximum: int = 365) -> int | None:
    if days_back is None or days_back <= 0:
        return None
    return min(max(int(days_back), minimum), maximum)


def filter_recent(
    sessions: Iterable[SessionRecord],
    days_back: int | None,
    now: datetime | None = None,
    minimum: int = 7,
    maximum: int = 365,
) -> list[SessionRecord]:
    """Sessions within the last days_back days (clamped); all of them when days_back is unset."""
    window = clamp_days_back(days_back, minimum, maximum)
    sessions = list(sessions)
    if window is None:
        return sessions
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=window)
    return [s for s in sessions if as_utc(s.timestamp) >= cutoff]


def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts
