"""Score breakdown and resilience insights derived purely from a HealthScore"""

from typing import Dict, List

from finbridge.domain.models import FactorBreakdown, HealthScore

FACTORS = ("literacy", "savings", "debt", "insurance", "emergency_fund", "investment")

# One string per status band, ordered excellent, good, fair, needs_improvement
RECOMMENDATIONS: Dict[str, tuple] = {
    "literacy": (
        "Great job! Keep learning about advanced financial topics.",
        "Good progress! Focus on completing more advanced modules.",
        "You're on the right track. Try to complete more lessons regularly.",
        "Start with basic financial literacy modules to build your foundation.",
    ),
    "savings": (
        "Excellent savings habits! Consider increasing investments.",
        "Good savings rate. Try to automate your savings for consistency.",
        "Increase your savings rate. Aim for at least 10% of income.",
        "Start with small amounts. Even 5% savings can make a big difference.",
    ),
    "debt": (
        "Great debt management! Keep maintaining low debt levels.",
        "Good debt control. Consider debt consolidation if applicable.",
        "Focus on reducing debt-to-income ratio below 30%.",
        "Urgent: Create a debt reduction plan and avoid new debt.",
    ),
    "insurance": (
        "Well protected! Review coverage annually for adequacy.",
        "Good coverage. Consider term life and health insurance.",
        "Increase insurance coverage. Aim for 2-5% of income.",
        "Critical: Get basic health and term life insurance immediately.",
    ),
    "emergency_fund": (
        "Excellent emergency preparedness! You're well protected.",
        "Good emergency fund. Try to reach 6 months of expenses.",
        "Build your emergency fund to at least 3 months of expenses.",
        "Start building an emergency fund immediately. Start with ₹10,000.",
    ),
    "investment": (
        "Excellent investment habits! Diversify across asset classes.",
        "Good start! Consider increasing SIP amounts gradually.",
        "Start systematic investment plans (SIPs) for long-term wealth.",
        "Begin with mutual funds SIP after building emergency fund.",
    ),
}

STRENGTH_LABELS = {
    "literacy": "Strong financial knowledge",
    "savings": "Good savings habits",
    "debt": "Well-managed debt levels",
    "insurance": "Adequate insurance coverage",
    "emergency_fund": "Solid emergency preparedness",
    "investment": "Active investment portfolio",
}

IMPROVEMENT_LABELS = {
    "literacy": "Financial education",
    "savings": "Savings rate",
    "debt": "Debt management",
    "insurance": "Insurance coverage",
    "emergency_fund": "Emergency fund",
    "investment": "Investment strategy",
}

# Priority order for next actions when scores tie
NEXT_ACTIONS = (
    ("emergency_fund", "Build emergency fund to 6 months expenses"),
    ("debt", "Create debt reduction plan"),
    ("insurance", "Review and increase insurance coverage"),
    ("savings", "Increase monthly savings rate"),
    ("investment", "Start systematic investment plan"),
    ("literacy", "Complete financial education modules"),
)

# (factor, threshold, message): flag raised when score < threshold
RISK_FLAGS = (
    ("emergency_fund", 40, "High vulnerability to financial emergencies"),
    ("debt", 40, "Excessive debt burden"),
    ("insurance", 30, "Inadequate protection against risks"),
    ("savings", 30, "Insufficient savings for future goals"),
)


def factor_scores(score: HealthScore) -> Dict[str, int]:
    return {name: getattr(score, f"{name}_score") for name in FACTORS}


def _band(value: float) -> int:
    if value >= 80:
        return 0
    if value >= 60:
        return 1
    if value >= 40:
        return 2
    return 3


def get_score_status(value: float) -> str:
    return ("excellent", "good", "fair", "needs_improvement")[_band(value)]


def get_recommendation(factor: str, value: float) -> str:
    return RECOMMENDATIONS[factor][_band(value)]


def get_score_breakdown(score: HealthScore) -> Dict[str, FactorBreakdown]:
    """Per-factor status and recommendation; pure, safe to call repeatedly"""
    return {
        name: FactorBreakdown(
            score=value,
            status=get_score_status(value),
            recommendation=get_recommendation(name, value),
        )
        for name, value in factor_scores(score).items()
    }


def get_resilience_level(overall_score: float) -> str:
    if overall_score >= 80:
        return "High"
    if overall_score >= 60:
        return "Medium"
    return "Low"


def get_resilience_description(overall_score: float) -> str:
    if overall_score >= 80:
        return "Excellent financial resilience! You're well-prepared for financial challenges and opportunities."
    if overall_score >= 60:
        return "Good financial resilience. You have a solid foundation with room for improvement."
    if overall_score >= 40:
        return "Moderate financial resilience. Focus on building stronger financial habits."
    return "Low financial resilience. Immediate action needed to improve your financial security."


def get_strengths(score: HealthScore) -> List[str]:
    scores = factor_scores(score)
    strengths = [STRENGTH_LABELS[name] for name in FACTORS if scores[name] >= 70]
    return strengths or ["Building financial foundation"]


def get_improvement_areas(score: HealthScore) -> List[str]:
    scores = factor_scores(score)
    return [IMPROVEMENT_LABELS[name] for name in FACTORS if scores[name] < 60]


def get_next_actions(score: HealthScore, limit: int = 3) -> List[str]:
    """Actions for the lowest-scoring factors; sorted() is stable so ties keep NEXT_ACTIONS order"""
    scores = factor_scores(score)
    ranked = sorted(NEXT_ACTIONS, key=lambda item: scores[item[0]])
    return [action for _, action in ranked[:limit]]


def get_risk_assessment(score: HealthScore) -> Dict[str, object]:
    scores = factor_scores(score)
    factors = [message for name, threshold, message in RISK_FLAGS if scores[name] < threshold]

    if len(factors) >= 3:
        level = "High"
    elif factors:
        level = "Medium"
    else:
        level = "Low"

    return {"level": level, "factors": factors}


def get_resilience_insights(score: HealthScore) -> Dict[str, object]:
    """Overall resilience, strengths, gaps, next actions and risk level"""
    return {
        "overall_resilience": {
            "score": score.overall_score,
            "level": get_resilience_level(score.overall_score),
            "description": get_resilience_description(score.overall_score),
        },
        "strengths": get_strengths(score),
        "improvement_areas": get_improvement_areas(score),
        "next_actions": get_next_actions(score),
        "risk_assessment": get_risk_assessment(score),
    }
