"""Behavioural insights combining a personality profile with recent activity"""

from collections import defaultdict
from typing import Dict, List

from finbridge.domain.challenges import COMPLETED
from finbridge.domain.models import Challenge, PersonalityProfile, Transaction
from finbridge.domain.personality import PERSONALITY_TYPES
from finbridge.utils.date_utils import week_index

# Savings rate (%) each archetype is expected to reach
EXPECTED_SAVINGS_RATE = {
    "prudent_saver": 30,
    "lifestyle_enthusiast": 15,
    "growth_seeker": 20,
    "balanced_planner": 25,
    "risk_averse": 30,
}


def _savings_rate(transactions: List[Transaction]) -> tuple[float, float, float]:
    total_spent = sum(abs(t.amount) for t in transactions if t.transaction_type == "expense")
    total_income = sum(t.amount for t in transactions if t.transaction_type == "income")
    rate = ((total_income - total_spent) / total_income) * 100 if total_income > 0 else 0.0
    return rate, total_spent, total_income


def alignment_message(personality_type: str, savings_rate: float) -> str:
    expected = EXPECTED_SAVINGS_RATE.get(personality_type, 20)
    if savings_rate >= expected:
        return "aligns well with your personality type"
    return f"is below the {expected}% typically expected for your personality type"


def calculate_personality_alignment(profile: PersonalityProfile, transactions: List[Transaction]) -> Dict[str, object]:
    """Score (0-100, base 50) for how well recent saving matches the user's archetype"""
    alignment = 50

    if not transactions:
        return {"score": alignment, "analysis": "Insufficient transaction data"}

    savings_rate, total_spent, total_income = _savings_rate(transactions)
    personality_type = profile.personality_type

    if personality_type == "prudent_saver":
        if savings_rate >= 30:
            alignment += 30
        elif savings_rate >= 20:
            alignment += 15
        else:
            alignment -= 20
    elif personality_type == "lifestyle_enthusiast":
        if 10 <= savings_rate <= 25:
            alignment += 20
        if total_spent > total_income * 0.7:
            alignment += 10
    elif personality_type == "growth_seeker":
        if savings_rate >= 20:
            alignment += 20
    elif personality_type == "balanced_planner":
        if 20 <= savings_rate <= 35:
            alignment += 25
    elif personality_type == "risk_averse":
        if savings_rate >= 25:
            alignment += 25

    return {
        "score": min(100, max(0, alignment)),
        "analysis": f"{savings_rate:.1f}% savings rate {alignment_message(personality_type, savings_rate)}",
    }


def weekly_totals(transactions: List[Transaction]) -> List[float]:
    """Absolute transaction volume per epoch week"""
    weeks: Dict[int, float] = defaultdict(float)
    for t in transactions:
        weeks[week_index(t.transaction_date)] += abs(t.amount)
    return list(weeks.values())


def spending_dispersion(values: List[float]) -> float:
    """Population variance divided by the mean (mean of 0 treated as 1)"""
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return variance / (mean or 1)


def analyze_behavioral_trends(transactions: List[Transaction]) -> Dict[str, object]:
    if not transactions:
        return {"trend": "insufficient_data", "message": "Not enough transaction data to analyze trends"}

    variance = spending_dispersion(weekly_totals(transactions))

    if variance < 0.2:
        trend = "consistent"
        message = "Your spending patterns are very consistent, which aligns well with disciplined financial behavior."
    elif variance < 0.5:
        trend = "moderate_variance"
        message = "Your spending shows moderate variation, which is normal for most people."
    else:
        trend = "high_variance"
        message = "Your spending patterns vary significantly week to week. Consider budgeting tools for better consistency."

    return {"trend": trend, "message": message, "variance": variance}


def challenge_performance(challenges: List[Challenge]) -> Dict[str, float]:
    total = len(challenges)
    completed = sum(1 for c in challenges if c.status == COMPLETED)
    return {
        "completion_rate": (completed / total) * 100 if total else 0,
        "average_progress": sum(c.progress for c in challenges) / (total or 1),
        "total_challenges": total,
    }


def generate_behavioral_recommendations(
    profile: PersonalityProfile,
    challenges: List[Challenge],
    transactions: List[Transaction],
) -> List[Dict[str, str]]:
    details = PERSONALITY_TYPES[profile.personality_type]
    recommendations = [
        {"type": "personality_based", "message": message, "priority": "medium"}
        for message in details["recommendations"]
    ]

    if challenges:
        completion_rate = sum(1 for c in challenges if c.status == COMPLETED) / len(challenges)
        if completion_rate < 0.3:
            recommendations.append({
                "type": "challenge_completion",
                "message": "Try breaking down challenges into smaller, daily tasks to improve completion rates.",
                "priority": "high",
            })

    if transactions and not any(t.transaction_type == "income" for t in transactions):
        recommendations.append({
            "type": "income_tracking",
            "message": "Start tracking your income to get better financial insights and planning capabilities.",
            "priority": "high",
        })

    return recommendations


def calculate_growth_indicators(profile: PersonalityProfile, challenges: List[Challenge]) -> Dict[str, float]:
    learning_progress = min(100, profile.confidence_level + 20)
    challenge_engagement = sum(c.progress for c in challenges) / len(challenges) if challenges else 0
    # TODO: derive from analyze_behavioral_trends once trend history is persisted
    behavioral_consistency = 70

    return {
        "learning_progress": learning_progress,
        "behavioral_consistency": behavioral_consistency,
        "challenge_engagement": challenge_engagement,
        "overall_growth": (
            learning_progress * 0.3
            + behavioral_consistency * 0.3
            + challenge_engagement * 0.4
        ),
    }


def build_behavioral_insights(
    profile: PersonalityProfile,
    challenges: List[Challenge],
    transactions: List[Transaction],
) -> Dict[str, object]:
    """Assemble the full insights payload for the last month of activity"""
    return {
        "personality_alignment": calculate_personality_alignment(profile, transactions),
        "behavioral_trends": analyze_behavioral_trends(transactions),
        "challenge_performance": challenge_performance(challenges),
        "recommendations": generate_behavioral_recommendations(profile, challenges, transactions),
        "growth_indicators": calculate_growth_indicators(profile, challenges),
    }
