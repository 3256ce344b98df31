"""Strength standards reference endpoints."""

from fastapi import APIRouter, HTTPException

from strength_analytics.core.enums import Gender
from strength_analytics.schemas.analytics import StandardsSummary, StrengthStandard
from strength_analytics.services.strength_standards import available_standards, get_standards_ladder, has_standards

router = APIRouter()


@router.get("", response_model=list[StandardsSummary])
async def list_standards():
    """Exercises that have a strength standards table."""
    return available_standards()


@router.get("/{exercise}", response_model=list[StrengthStandard])
async def standards_ladder(exercise: str, gender: Gender = Gender.MALE):
    """Six-tier ladder for an exercise key, display name or alias."""
    if not has_standards(exercise):
        raise HTTPException(status_code=404, detail="No strength standards for this exercise")
    return get_standards_ladder(exercise, gender)
