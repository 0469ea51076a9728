"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

Priority = Literal["low", "medium", "high"]


class Envelope(BaseModel, Generic[T]):
    """Success wrapper shared by every endpoint"""

    success: bool = True
    message: Optional[str] = None
    data: T


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


# Financial health

class FactorBreakdownSchema(BaseModel):
    score: int
    status: str
    recommendation: str


class HealthScoreSchema(BaseModel):
    """One row of the score history"""

    id: Optional[str] = None
    user_id: str
    overall_score: int
    literacy_score: int
    savings_score: int
    debt_score: int
    insurance_score: int
    emergency_fund_score: int
    investment_score: int
    calculated_at: Optional[datetime] = None
    breakdown: Optional[Dict[str, FactorBreakdownSchema]] = None


class ScoreHistoryEnvelope(Envelope[List[HealthScoreSchema]]):
    period: str
    count: int


class ScoreBreakdownSchema(BaseModel):
    overall_score: int
    calculated_at: Optional[datetime] = None
    breakdown: Dict[str, FactorBreakdownSchema]


class OverallResilienceSchema(BaseModel):
    score: int
    level: str
    description: str


class RiskAssessmentSchema(BaseModel):
    level: str
    factors: List[str]


class ResilienceInsightsSchema(BaseModel):
    overall_resilience: OverallResilienceSchema
    strengths: List[str]
    improvement_areas: List[str]
    next_actions: List[str]
    risk_assessment: RiskAssessmentSchema


# Personality profiler

class AssessmentRequest(BaseModel):
    """Request body for POST /personality-profiler/assessment"""

    answers: Dict[str, str] = Field(..., description="salary_approach, risk_tolerance, planning_approach, purchase_decision, emergency_fund, investment_knowledge")


class ChallengeSchema(BaseModel):
    id: Optional[str] = None
    user_id: str
    personality_type: str
    title: str
    description: str
    target_amount: float
    duration_days: int
    difficulty: str
    status: str
    progress: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PersonalityProfileSchema(BaseModel):
    id: Optional[str] = None
    user_id: str
    personality_type: str
    assessment_answers: Dict[str, str]
    assessment_scores: Dict[str, int]
    confidence_level: float
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    personality_details: Optional[Dict[str, Any]] = None


class AssessmentResultSchema(PersonalityProfileSchema):
    challenges_generated: int
    challenges: List[ChallengeSchema]


class ChallengeProgressRequest(BaseModel):
    """Request body for PUT /personality-profiler/challenges/{id}/progress"""

    progress: float = Field(..., ge=0, le=100, description="Completion percentage")


class GeneratedChallengesSchema(BaseModel):
    challenges_generated: int
    challenges: List[ChallengeSchema]


# Smart alerts

class AlertCreateRequest(BaseModel):
    alert_type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    priority: Priority = "medium"
    enabled: bool = True
    frequency: str = "monthly"


class AlertUpdateRequest(BaseModel):
    alert_type: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    priority: Optional[Priority] = None
    enabled: Optional[bool] = None
    frequency: Optional[str] = None
    is_read: Optional[bool] = None


class AlertSchema(BaseModel):
    id: str
    user_id: str
    alert_type: str
    title: str
    description: str
    amount: Optional[float] = None
    due_date: Optional[date] = None
    priority: str
    enabled: bool
    frequency: str
    is_read: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AlertSettingsSchema(BaseModel):
    user_id: str
    bill_reminders: bool
    investment_opportunities: bool
    goal_progress: bool
    market_updates: bool
    emi_reminders: bool
    budget_alerts: bool
    emergency_fund_low: bool
    spending_spikes: bool
    budget_limit: float
    emergency_fund_target: float


class AlertSettingsUpdateRequest(BaseModel):
    bill_reminders: Optional[bool] = None
    investment_opportunities: Optional[bool] = None
    goal_progress: Optional[bool] = None
    market_updates: Optional[bool] = None
    emi_reminders: Optional[bool] = None
    budget_alerts: Optional[bool] = None
    emergency_fund_low: Optional[bool] = None
    spending_spikes: Optional[bool] = None
    budget_limit: Optional[float] = Field(None, ge=0)
    emergency_fund_target: Optional[float] = Field(None, ge=0)
