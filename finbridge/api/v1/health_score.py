"""Financial health score endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finbridge.api.dependencies import get_health_service, get_user_id
from finbridge.api.responses import envelope, failure_response
from finbridge.api.v1.schemas import (
    Envelope,
    ErrorResponse,
    HealthScoreSchema,
    ResilienceInsightsSchema,
    ScoreBreakdownSchema,
    ScoreHistoryEnvelope,
)
from finbridge.config import settings
from finbridge.services.health import FinancialHealthService

router = APIRouter(responses={503: {"model": ErrorResponse}})


@router.get("/health-score", response_model=Envelope[HealthScoreSchema])
def get_latest_score(
    user_id: str = Depends(get_user_id),
    service: FinancialHealthService = Depends(get_health_service),
):
    """
    Latest financial health score with per-factor breakdown.

    A score is calculated and stored on first access.
    """
    result = service.get_latest(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.post("/health-score/calculate", response_model=Envelope[HealthScoreSchema], status_code=201)
def calculate_score(
    user_id: str = Depends(get_user_id),
    service: FinancialHealthService = Depends(get_health_service),
):
    """Calculate and store a new score from the user's current records"""
    result = service.calculate(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data, message="Financial health score calculated successfully")


@router.get("/health-score/history", response_model=ScoreHistoryEnvelope)
def get_score_history(
    months: Optional[int] = Query(None, ge=1, le=120, description="Look-back window in months"),
    user_id: str = Depends(get_user_id),
    service: FinancialHealthService = Depends(get_health_service),
):
    """Score history for trend analysis, oldest first"""
    months = months or settings.score_history_default_months
    result = service.get_history(user_id, months)
    if not result.success:
        return failure_response(result)
    return envelope(result.data, period=f"{months} months", count=len(result.data))


@router.get("/health-score/breakdown", response_model=Envelope[ScoreBreakdownSchema])
def get_score_breakdown(
    user_id: str = Depends(get_user_id),
    service: FinancialHealthService = Depends(get_health_service),
):
    """Status and recommendation for each factor of the latest score"""
    result = service.get_breakdown(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.get("/resilience/insights", response_model=Envelope[ResilienceInsightsSchema])
def get_resilience_insights(
    user_id: str = Depends(get_user_id),
    service: FinancialHealthService = Depends(get_health_service),
):
    """Resilience level, strengths, improvement areas, next actions and risk level"""
    result = service.get_resilience_insights(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)
