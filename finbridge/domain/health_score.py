"""Financial health scoring engine - weighted multi-factor score over a user's records"""

import math
from datetime import date
from typing import Dict, Iterable, List, Optional

from finbridge.domain.models import Goal, HealthScore, LessonProgress, ScoreInputs, Transaction
from finbridge.utils.date_utils import months_before, utcnow

TOTAL_LESSONS = 24

FACTOR_WEIGHTS: Dict[str, float] = {
    "literacy": 0.20,
    "savings": 0.20,
    "debt": 0.15,
    "insurance": 0.10,
    "emergency_fund": 0.20,
    "investment": 0.15,
}

SAVINGS_GOAL_TYPES = ("emergency_fund", "vacation", "house")
DEBT_CATEGORY_MARKERS = ("emi", "loan", "credit card")
EMERGENCY_FUND_MONTHS = 6


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (Python's round() is banker's rounding)"""
    return int(math.floor(value + 0.5))


def _since(transactions: Iterable[Transaction], cutoff: date) -> List[Transaction]:
    return [t for t in transactions if t.transaction_date >= cutoff]


def _total(transactions: Iterable[Transaction], transaction_type: str) -> float:
    return sum(t.amount for t in transactions if t.transaction_type == transaction_type)


def _category_contains(transaction: Transaction, markers: Iterable[str]) -> bool:
    if not transaction.category:
        return False
    category = transaction.category.lower()
    return any(marker in category for marker in markers)


def calculate_literacy_score(progress: List[LessonProgress]) -> int:
    """
    Lesson completion (60%) plus mean lesson score (40%).

    Completion is measured against a fixed catalogue of 24 lessons.
    """
    if not progress:
        return 0

    completed = sum(1 for p in progress if p.progress_status == "completed")
    average_score = sum(p.score or 0 for p in progress) / len(progress)

    completion_score = (completed / TOTAL_LESSONS) * 60
    performance_score = (average_score / 100) * 40

    return max(0, min(100, round_half_up(completion_score + performance_score)))


def calculate_savings_score(transactions: List[Transaction], goals: List[Goal], today: date) -> int:
    """
    Savings rate over the last 3 months, plus 5 points per active savings goal (max +20).

    Tiers: >=20% -> 100, >=15% -> 80, >=10% -> 60, >=5% -> 40, else 20.
    """
    if not transactions:
        return 0

    recent = _since(transactions, months_before(today, 3))
    total_income = _total(recent, "income")
    total_savings = _total(recent, "savings")

    if total_income == 0:
        return 0

    savings_rate = (total_savings / total_income) * 100

    if savings_rate >= 20:
        score = 100
    elif savings_rate >= 15:
        score = 80
    elif savings_rate >= 10:
        score = 60
    elif savings_rate >= 5:
        score = 40
    else:
        score = 20

    active_savings_goals = sum(
        1 for g in goals if g.status == "active" and g.goal_type in SAVINGS_GOAL_TYPES
    )
    score += min(20, active_savings_goals * 5)

    return min(100, score)


def calculate_debt_score(transactions: List[Transaction], today: date) -> int:
    """
    Debt-to-income ratio over the last 12 months; higher score means less debt.

    No transactions at all is treated as no debt (100); transactions without
    income in the window get a neutral 50.
    """
    if not transactions:
        return 100

    recent = _since(transactions, months_before(today, 12))
    total_income = _total(recent, "income")
    debt_payments = sum(t.amount for t in recent if _category_contains(t, DEBT_CATEGORY_MARKERS))

    if total_income == 0:
        return 50

    debt_to_income = (debt_payments / total_income) * 100

    if debt_to_income == 0:
        return 100
    if debt_to_income <= 10:
        return 90
    if debt_to_income <= 20:
        return 75
    if debt_to_income <= 30:
        return 60
    if debt_to_income <= 40:
        return 40
    return 20


def calculate_insurance_score(transactions: List[Transaction], today: date) -> int:
    """Insurance spend as a share of income over 12 months; 2-5% is ideal"""
    if not transactions:
        return 0

    recent = _since(transactions, months_before(today, 12))
    insurance_payments = sum(t.amount for t in recent if _category_contains(t, ("insurance",)))
    total_income = _total(recent, "income")

    if total_income == 0:
        return 0

    ratio = (insurance_payments / total_income) * 100

    if 2 <= ratio <= 5:
        return 100
    if 1 <= ratio < 2:
        return 70
    if 5 < ratio <= 8:
        return 80
    if 0 < ratio < 1:
        return 50
    if ratio > 8:
        return 60
    return 0


def calculate_emergency_fund_score(goals: List[Goal], transactions: List[Transaction], today: date) -> int:
    """
    Emergency fund goal balance against six months of average expenses.

    Without an emergency fund goal the score is 0; without expense history
    the ideal fund is unknown and the score is a neutral 50.
    """
    emergency_goal: Optional[Goal] = next(
        (g for g in goals if g.goal_type == "emergency_fund"), None
    )
    if emergency_goal is None:
        return 0

    annual_expenses = _total(_since(transactions, months_before(today, 12)), "expense")
    ideal_fund = (annual_expenses / 12) * EMERGENCY_FUND_MONTHS

    if ideal_fund == 0:
        return 50

    ratio = emergency_goal.current_amount / ideal_fund

    if ratio >= 1:
        return 100
    if ratio >= 0.75:
        return 85
    if ratio >= 0.5:
        return 70
    if ratio >= 0.25:
        return 50
    if ratio > 0:
        return 25
    return 0


def calculate_investment_score(transactions: List[Transaction], today: date) -> int:
    """Investment contributions as a share of income over 12 months"""
    if not transactions:
        return 0

    recent = _since(transactions, months_before(today, 12))
    total_income = _total(recent, "income")
    invested = _total(recent, "investment")

    if total_income == 0:
        return 0

    rate = (invested / total_income) * 100

    if rate >= 15:
        return 100
    if rate >= 10:
        return 80
    if rate >= 5:
        return 60
    if rate >= 2:
        return 40
    if rate > 0:
        return 20
    return 0


def combine_scores(factor_scores: Dict[str, int]) -> int:
    """Weighted sum of the six factor scores, rounded half-up"""
    weighted = sum(FACTOR_WEIGHTS[name] * factor_scores[name] for name in FACTOR_WEIGHTS)
    return round_half_up(weighted)


def calculate_health_score(user_id: str, inputs: ScoreInputs, today: date | None = None) -> HealthScore:
    """
    Main entry point: score every factor and combine them with fixed weights.

    Empty collections are valid and degrade to each factor's default.
    """
    if today is None:
        today = utcnow().date()

    factor_scores = {
        "literacy": calculate_literacy_score(inputs.progress),
        "savings": calculate_savings_score(inputs.transactions, inputs.goals, today),
        "debt": calculate_debt_score(inputs.transactions, today),
        "insurance": calculate_insurance_score(inputs.transactions, today),
        "emergency_fund": calculate_emergency_fund_score(inputs.goals, inputs.transactions, today),
        "investment": calculate_investment_score(inputs.transactions, today),
    }

    return HealthScore(
        user_id=user_id,
        overall_score=combine_scores(factor_scores),
        literacy_score=factor_scores["literacy"],
        savings_score=factor_scores["savings"],
        debt_score=factor_scores["debt"],
        insurance_score=factor_scores["insurance"],
        emergency_fund_score=factor_scores["emergency_fund"],
        investment_score=factor_scores["investment"],
    )
