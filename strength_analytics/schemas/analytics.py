"""Strength analytics schemas - set history in, records / standards / rankings out."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from strength_analytics.core.enums import Gender, PRKind, StrengthLevel


# ── Set history ──────────────────────────────────────────────────────────

class SetEntry(BaseModel):
    """One logged set. weight is None for bodyweight movements."""

    model_config = ConfigDict(frozen=True)

    weight: Optional[float] = None
    reps: Optional[int] = None
    is_warmup: bool = False


class SessionRecord(BaseModel):
    """All sets of one exercise within one logged workout session."""

    model_config = ConfigDict(frozen=True)

    session_id: UUID
    user_id: UUID
    exercise_id: UUID
    timestamp: datetime
    sets: tuple[SetEntry, ...] = ()


# ── Collaborator payloads ────────────────────────────────────────────────

class BodyMetrics(BaseModel):
    gender: Optional[Gender] = None
    body_weight_kg: Optional[float] = None


class ExerciseInfo(BaseModel):
    """Exercise metadata: display name plus the stable standards key, if any."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    standards_key: Optional[str] = None


# ── Personal records ─────────────────────────────────────────────────────

class ExerciseRecordPoint(BaseModel):
    weight: float
    max_reps: int
    date: date
    estimated_1rm: float


class ProgressPoint(BaseModel):
    """Running personal-best estimated 1RM as of one session."""

    date: datetime
    max_weight: float


class SetVolume(BaseModel):
    weight: float
    reps: int
    volume: float


class PersonalBests(BaseModel):
    heaviest_weight: float = 0.0
    best_1rm: float = 0.0
    best_set_volume: Optional[SetVolume] = None
    best_session_volume: float = 0.0


class StrengthScorePoint(BaseModel):
    date: datetime
    strength_score: int


# ── Strength standards ───────────────────────────────────────────────────

class StrengthStandard(BaseModel):
    level: StrengthLevel
    multiplier: float = Field(..., description="Bodyweight multiple, or absolute reps for bodyweight moves")
    description: str
    recommendation: str


class StrengthClassification(BaseModel):
    """Where a lifter sits on an exercise's ladder."""

    level: StrengthLevel
    standard: StrengthStandard
    next_level: Optional[StrengthStandard] = None
    progress_pct: float = Field(..., ge=0, le=100)
    value: float
    threshold: Optional[float] = None  # absolute kg / reps for the current tier
    next_threshold: Optional[float] = None


class StandardsSummary(BaseModel):
    key: str
    name: str
    rep_based: bool


# ── Population rankings ──────────────────────────────────────────────────

class LeaderboardEntry(BaseModel):
    exercise_id: UUID
    exercise_name: str
    user_max_1rm: float
    percentile: int = Field(..., ge=0, le=100)
    total_users: int


class ExercisePercentile(BaseModel):
    """Overall, gender and gender + bodyweight-band percentiles for one exercise."""

    exercise_id: UUID
    exercise_name: Optional[str] = None
    user_max_1rm: float
    percentile: int = Field(..., ge=0, le=100)
    total_users: int
    gender: Optional[Gender] = None
    gender_percentile: Optional[int] = None
    gender_total_users: int = 0
    weight_bucket_start: Optional[float] = None
    weight_bucket_end: Optional[float] = None
    gender_weight_percentile: Optional[int] = None
    gender_weight_total_users: int = 0


class FriendLeaderboardEntry(BaseModel):
    rank: int
    user_id: UUID
    display_name: str
    max_1rm: float
    is_current_user: bool = False
    strength_level: Optional[StrengthLevel] = None


# ── Session PR evaluation ────────────────────────────────────────────────

def _number_or_none(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class SessionSet(BaseModel):
    """A logged set as sent by the client. Malformed numbers become None and are skipped by the 1RM math."""

    reps: Optional[int] = None
    weight: Optional[float] = None
    is_warmup: bool = False

    @field_validator("weight", mode="before")
    @classmethod
    def _tolerant_weight(cls, v):
        return _number_or_none(v)

    @field_validator("reps", mode="before")
    @classmethod
    def _tolerant_reps(cls, v):
        number = _number_or_none(v)
        if number is None or not number.is_integer():
            return None
        return int(number)


class SessionExercise(BaseModel):
    exercise_id: UUID
    exercise_name: str
    sets: list[SessionSet] = []


class SessionContext(BaseModel):
    """A just-logged session to check for broken records."""

    session_id: UUID
    user_id: UUID
    created_at: datetime
    exercises: list[SessionExercise] = []


class PrDetail(BaseModel):
    kind: PRKind
    label: str  # e.g. "Heaviest Weight", "Rep PR at 60kg"
    weight: Optional[float] = None
    value: float  # the new record value (kg, estimated kg, or kg × reps)
    previous_reps: Optional[int] = None
    current_reps: Optional[int] = None
    is_current: bool = True
    set_indices: list[int] = []


class ExercisePrs(BaseModel):
    exercise_id: UUID
    exercise_name: str
    prs: list[PrDetail]


class PrResult(BaseModel):
    total_prs: int = 0
    per_exercise: list[ExercisePrs] = []
