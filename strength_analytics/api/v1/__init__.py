"""API v1 router aggregation."""

from fastapi import APIRouter

from strength_analytics.api.v1.endpoints import exercise_stats, health, pr, standards, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercise_stats.router, prefix="/exercises", tags=["exercise-stats"])
api_router.include_router(standards.router, prefix="/standards", tags=["standards"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(pr.router, prefix="/sessions", tags=["prs"])
