"""Personalised challenge templates and progress rules"""

from typing import Dict, List, Tuple

from finbridge.domain.exceptions import InvalidInputError
from finbridge.domain.models import Challenge, ChallengeTemplate

PENDING = "pending"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"

CHALLENGE_TEMPLATES: Dict[str, List[ChallengeTemplate]] = {
    "prudent_saver": [
        ChallengeTemplate("30-Day Investment Challenge", "Start small with a balanced mutual fund SIP", 1000, 30, "beginner"),
        ChallengeTemplate("Emergency Fund Booster", "Increase emergency fund by 10%", 5000, 60, "intermediate"),
    ],
    "lifestyle_enthusiast": [
        ChallengeTemplate("Automated Savings Challenge", "Set up automatic transfers to save 20% of income", 10000, 30, "beginner"),
        ChallengeTemplate("Fun Fund Management", "Allocate entertainment budget without compromising savings", 5000, 30, "intermediate"),
    ],
    "growth_seeker": [
        ChallengeTemplate("Portfolio Diversification", "Spread investments across 5 different asset classes", 25000, 45, "advanced"),
        ChallengeTemplate("Risk Assessment Challenge", "Complete risk profiling and adjust portfolio accordingly", 0, 14, "intermediate"),
    ],
    "balanced_planner": [
        ChallengeTemplate("Financial Plan Review", "Create or update comprehensive 5-year financial plan", 0, 21, "intermediate"),
        ChallengeTemplate("Goal-Based Investing", "Allocate investments based on specific financial goals", 15000, 30, "advanced"),
    ],
    "risk_averse": [
        ChallengeTemplate("Conservative Portfolio Builder", "Start with debt funds and gradually add equity exposure", 5000, 60, "beginner"),
        ChallengeTemplate("Inflation Protection Plan", "Learn about and invest in inflation-protected securities", 10000, 45, "intermediate"),
    ],
}


def build_challenges(user_id: str, personality_type: str) -> List[Challenge]:
    """Materialise the archetype's templates as fresh pending challenges"""
    if personality_type not in CHALLENGE_TEMPLATES:
        raise InvalidInputError(f"Unknown personality type: {personality_type}")

    return [
        Challenge(
            user_id=user_id,
            personality_type=personality_type,
            title=template.title,
            description=template.description,
            target_amount=template.target_amount,
            duration_days=template.duration_days,
            difficulty=template.difficulty,
            status=PENDING,
            progress=0,
        )
        for template in CHALLENGE_TEMPLATES[personality_type]
    ]


def apply_progress(progress: float) -> Tuple[float, str]:
    """
    Clamp progress to [0, 100] and derive the status.

    Any update moves a challenge out of pending: 100 completes it, anything
    lower (including a clamped negative) marks it in progress.
    """
    if progress is None or isinstance(progress, bool):
        raise InvalidInputError("progress must be a number")

    clamped = min(100, max(0, progress))
    status = COMPLETED if clamped >= 100 else IN_PROGRESS
    return clamped, status
