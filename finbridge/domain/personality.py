"""Money personality classifier - point accumulation over six questionnaire answers"""

from typing import Dict, Mapping, Tuple

from finbridge.domain.exceptions import InvalidInputError
from finbridge.domain.models import PersonalityResult

# Iteration order doubles as the tie-break priority
PERSONALITY_TYPE_ORDER = (
    "prudent_saver",
    "lifestyle_enthusiast",
    "growth_seeker",
    "balanced_planner",
    "risk_averse",
)

MAX_POSSIBLE_SCORE = 18

# question -> answer -> ((archetype, points), ...)
ANSWER_WEIGHTS: Dict[str, Dict[str, Tuple[Tuple[str, int], ...]]] = {
    "salary_approach": {
        "save_immediately": (("prudent_saver", 3), ("balanced_planner", 1)),
        "buy_wanted_item": (("lifestyle_enthusiast", 3),),
        "invest_opportunity": (("growth_seeker", 3),),
        "review_budget": (("balanced_planner", 3), ("prudent_saver", 1)),
    },
    "risk_tolerance": {
        "guaranteed_returns": (("risk_averse", 3), ("prudent_saver", 2)),
        "calculated_risks": (("balanced_planner", 3), ("growth_seeker", 1)),
        "high_risk_reward": (("growth_seeker", 3),),
        "risk_anxious": (("risk_averse", 3),),
    },
    "planning_approach": {
        "detailed_longterm": (("balanced_planner", 3), ("prudent_saver", 1)),
        "basic_monthly": (("balanced_planner", 2), ("lifestyle_enthusiast", 1)),
        "reactive_approach": (("lifestyle_enthusiast", 2),),
        "planning_overwhelming": (("risk_averse", 2), ("lifestyle_enthusiast", 1)),
    },
    "purchase_decision": {
        "extensive_research": (("balanced_planner", 3), ("prudent_saver", 1)),
        "gut_feeling": (("lifestyle_enthusiast", 3),),
        "sleep_on_it": (("prudent_saver", 2), ("risk_averse", 2)),
        "best_deal": (("prudent_saver", 2), ("balanced_planner", 1)),
    },
    "emergency_fund": {
        "six_plus_months": (("prudent_saver", 3), ("balanced_planner", 2)),
        "one_to_three_months": (("balanced_planner", 2), ("prudent_saver", 1)),
        "less_than_month": (("lifestyle_enthusiast", 2), ("growth_seeker", 1)),
        "no_emergency_fund": (("lifestyle_enthusiast", 3),),
    },
    "investment_knowledge": {
        "very_knowledgeable": (("growth_seeker", 3), ("balanced_planner", 1)),
        "some_knowledge": (("balanced_planner", 2), ("growth_seeker", 1)),
        "basic_knowledge": (("prudent_saver", 2), ("risk_averse", 1)),
        "no_knowledge": (("risk_averse", 3),),
    },
}

REQUIRED_ANSWERS = tuple(ANSWER_WEIGHTS)

PERSONALITY_TYPES: Dict[str, Dict[str, object]] = {
    "prudent_saver": {
        "name": "The Prudent Saver",
        "description": "You prioritize financial security and long-term stability. You're naturally cautious with money and prefer guaranteed returns.",
        "traits": ["cautious", "security-focused", "long-term-oriented"],
        "strengths": ["Excellent at building emergency funds", "Natural budgeting skills", "Low debt tendency"],
        "challenges": ["May miss growth opportunities", "Could be too conservative with investments"],
        "recommendations": ["Explore balanced mutual funds", "Set up automated investing", "Learn about inflation protection"],
        "color": "#10B981",
    },
    "lifestyle_enthusiast": {
        "name": "The Lifestyle Enthusiast",
        "description": "You believe in enjoying life and see money as a tool for experiences and happiness.",
        "traits": ["experience-focused", "present-oriented", "optimistic"],
        "strengths": ["Good at enjoying life", "Often career-focused for income growth", "Values experiences"],
        "challenges": ["May struggle with long-term savings", "Impulse spending tendencies"],
        "recommendations": ["Automate savings first", "Use the 50/30/20 rule", "Set up separate fun money accounts"],
        "color": "#F59E0B",
    },
    "growth_seeker": {
        "name": "The Growth Seeker",
        "description": "You understand money should work for you and actively seek investment opportunities.",
        "traits": ["growth-oriented", "risk-tolerant", "research-focused"],
        "strengths": ["Future-oriented thinking", "Comfortable with market research", "Growth mindset"],
        "challenges": ["May take excessive risks", "Could neglect emergency funds"],
        "recommendations": ["Diversify your portfolio", "Don't forget emergency savings", "Regular portfolio reviews"],
        "color": "#3B82F6",
    },
    "balanced_planner": {
        "name": "The Balanced Planner",
        "description": "You take a methodical approach to finances, balancing saving, spending, and investing.",
        "traits": ["methodical", "balanced", "goal-oriented"],
        "strengths": ["Good at creating financial plans", "Balanced approach to risk", "Goal-focused"],
        "challenges": ["May over-analyze decisions", "Could be slow to act on opportunities"],
        "recommendations": ["Set clear financial milestones", "Automate regular reviews", "Consider robo-advisors"],
        "color": "#8B5CF6",
    },
    "risk_averse": {
        "name": "The Safety-First Investor",
        "description": "You prefer guaranteed returns and prioritize capital preservation over high growth.",
        "traits": ["conservative", "safety-focused", "patient"],
        "strengths": ["Low risk of major losses", "Consistent saving habits", "Patient investor"],
        "challenges": ["Returns may not beat inflation", "Overly cautious approach"],
        "recommendations": ["Consider balanced funds", "Learn about SIPs", "Gradual risk increase"],
        "color": "#64748B",
    },
}


def validate_answers(answers: Mapping[str, str]) -> Dict[str, str]:
    """
    Check that all six questions are answered with one of their allowed options.

    Raises:
        InvalidInputError: listing missing questions, or the first unknown answer
    """
    missing = [key for key in REQUIRED_ANSWERS if not answers.get(key)]
    if missing:
        raise InvalidInputError(f"Missing required answers: {', '.join(missing)}")

    for question in REQUIRED_ANSWERS:
        if answers[question] not in ANSWER_WEIGHTS[question]:
            allowed = ", ".join(ANSWER_WEIGHTS[question])
            raise InvalidInputError(
                f"Invalid answer '{answers[question]}' for {question}; expected one of: {allowed}"
            )

    return {question: answers[question] for question in REQUIRED_ANSWERS}


def classify(answers: Mapping[str, str]) -> PersonalityResult:
    """
    Accumulate points per archetype and pick the highest.

    Ties resolve to the archetype listed first in PERSONALITY_TYPE_ORDER.
    Confidence is the winning score as a percentage of the 18-point maximum.
    """
    clean = validate_answers(answers)
    scores = {personality_type: 0 for personality_type in PERSONALITY_TYPE_ORDER}

    for question, answer in clean.items():
        for personality_type, points in ANSWER_WEIGHTS[question][answer]:
            scores[personality_type] += points

    # max() returns the first maximal element, which gives the fixed tie-break
    dominant = max(PERSONALITY_TYPE_ORDER, key=lambda personality_type: scores[personality_type])
    best = scores[dominant]

    return PersonalityResult(
        personality_type=dominant,
        scores=scores,
        confidence_level=best / MAX_POSSIBLE_SCORE * 100,
    )


def get_personality_details(personality_type: str) -> Dict[str, object]:
    return PERSONALITY_TYPES[personality_type]
