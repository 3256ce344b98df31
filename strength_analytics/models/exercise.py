"""Exercise model - trackable exercise types linked to a strength standards table."""

from __future__ import annotations

import uuid

from sqlalchemy import Enum, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from strength_analytics.core.enums import MeasurementMode
from strength_analytics.db.base import Base


class Exercise(Base):
    """Exercise definition. standards_key is the stable link to its strength standards (if any)."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    unit: Mapped[str] = mapped_column(String(20), default="kg")
    measurement_mode: Mapped[MeasurementMode] = mapped_column(
        Enum(MeasurementMode), default=MeasurementMode.WEIGHT_REPS, nullable=False
    )
    standards_key: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    workout_sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet", back_populates="exercise", cascade="all, delete-orphan"
    )
