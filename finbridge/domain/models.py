"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


@dataclass
class Transaction:
    """Income, expense, savings or investment movement recorded by the user"""

    user_id: str
    transaction_date: date
    amount: float
    transaction_type: str  # "income" | "expense" | "savings" | "investment"
    category: Optional[str] = None
    description: str = ""


@dataclass
class Goal:
    """Savings goal tracked by the user"""

    user_id: str
    goal_type: Optional[str]
    target_amount: float
    current_amount: float
    status: str = "active"
    goal_name: str = ""
    target_date: Optional[date] = None


@dataclass
class LessonProgress:
    """Completion record for a single literacy lesson"""

    user_id: str
    progress_status: str
    score: Optional[float] = None
    lesson_id: Optional[str] = None


@dataclass
class ScoreInputs:
    """Everything the health scorer reads for one user"""

    transactions: List[Transaction] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    progress: List[LessonProgress] = field(default_factory=list)


@dataclass
class FactorBreakdown:
    """Status and advice for one score factor"""

    score: int
    status: str
    recommendation: str


@dataclass
class HealthScore:
    """Composite financial health score and its six factors"""

    user_id: str
    overall_score: int
    literacy_score: int
    savings_score: int
    debt_score: int
    insurance_score: int
    emergency_fund_score: int
    investment_score: int
    calculated_at: Optional[datetime] = None
    id: Optional[str] = None
    breakdown: Optional[Dict[str, FactorBreakdown]] = None


@dataclass
class PersonalityResult:
    """Output of the personality classifier"""

    personality_type: str
    scores: Dict[str, int]
    confidence_level: float


@dataclass
class PersonalityProfile:
    """Stored assessment outcome for a user"""

    user_id: str
    personality_type: str
    assessment_answers: Dict[str, str]
    assessment_scores: Dict[str, int]
    confidence_level: float
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[str] = None


@dataclass
class ChallengeTemplate:
    """Static challenge definition attached to an archetype"""

    title: str
    description: str
    target_amount: float
    duration_days: int
    difficulty: str  # "beginner" | "intermediate" | "advanced"


@dataclass
class Challenge:
    """Challenge materialised for a user"""

    user_id: str
    personality_type: str
    title: str
    description: str
    target_amount: float
    duration_days: int
    difficulty: str
    status: str = "pending"  # "pending" | "in_progress" | "completed"
    progress: float = 0
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class AlertSettings:
    """Per-user toggles and thresholds for smart alerts"""

    user_id: str
    bill_reminders: bool = True
    investment_opportunities: bool = True
    goal_progress: bool = True
    market_updates: bool = True
    emi_reminders: bool = True
    budget_alerts: bool = True
    emergency_fund_low: bool = True
    spending_spikes: bool = False
    budget_limit: float = 25000
    emergency_fund_target: float = 100000


@dataclass
class AlertDraft:
    """Alert fields supplied by a user or produced by the automatic rules"""

    alert_type: str
    title: str
    description: str = ""
    amount: Optional[float] = None
    due_date: Optional[date] = None
    priority: str = "medium"
    enabled: bool = True
    frequency: str = "monthly"


@dataclass
class Alert:
    """Stored smart alert"""

    id: str
    user_id: str
    alert_type: str
    title: str
    description: str
    amount: Optional[float]
    due_date: Optional[date]
    priority: str
    enabled: bool
    frequency: str
    is_read: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
