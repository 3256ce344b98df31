"""Session PR evaluation - which records a just-logged session broke."""

from fastapi import APIRouter, Depends

from strength_analytics.api.deps import get_pr_evaluator
from strength_analytics.schemas.analytics import PrResult, SessionContext
from strength_analytics.services.pr_detection import SessionPrEvaluator

router = APIRouter()


@router.post("/prs", response_model=PrResult)
async def session_prs(
    ctx: SessionContext,
    evaluator: SessionPrEvaluator = Depends(get_pr_evaluator),
):
    """
    Compare each exercise in the session with the user's history.
    Warmup sets never count; exercises without records are left out.
    """
    return await evaluator.evaluate(ctx)
