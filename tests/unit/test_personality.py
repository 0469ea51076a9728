"""Unit tests for the money personality classifier"""

import pytest
from finbridge.domain.exceptions import InvalidInputError
from finbridge.domain.results import ErrorKind
from finbridge.domain.personality import (
    MAX_POSSIBLE_SCORE,
    PERSONALITY_TYPE_ORDER,
    PERSONALITY_TYPES,
    classify,
    get_personality_details,
    validate_answers,
)


@pytest.fixture
def prudent_answers():
    return {
        "salary_approach": "save_immediately",
        "risk_tolerance": "guaranteed_returns",
        "planning_approach": "detailed_longterm",
        "purchase_decision": "sleep_on_it",
        "emergency_fund": "six_plus_months",
        "investment_knowledge": "basic_knowledge",
    }


def test_classify_prudent_saver(prudent_answers):
    result = classify(prudent_answers)

    assert result.personality_type == "prudent_saver"
    assert result.scores == {
        "prudent_saver": 13,
        "lifestyle_enthusiast": 0,
        "growth_seeker": 0,
        "balanced_planner": 6,
        "risk_averse": 6,
    }
    assert result.confidence_level == pytest.approx(13 / 18 * 100)


def test_classify_growth_seeker():
    result = classify({
        "salary_approach": "invest_opportunity",
        "risk_tolerance": "high_risk_reward",
        "planning_approach": "reactive_approach",
        "purchase_decision": "gut_feeling",
        "emergency_fund": "less_than_month",
        "investment_knowledge": "very_knowledgeable",
    })

    assert result.personality_type == "growth_seeker"
    assert result.scores["growth_seeker"] == 10
    assert result.scores["lifestyle_enthusiast"] == 7


def test_classify_tie_resolves_in_declaration_order():
    """growth_seeker and balanced_planner both score 6; growth_seeker is listed first"""
    result = classify({
        "salary_approach": "invest_opportunity",
        "risk_tolerance": "high_risk_reward",
        "planning_approach": "detailed_longterm",
        "purchase_decision": "extensive_research",
        "emergency_fund": "no_emergency_fund",
        "investment_knowledge": "no_knowledge",
    })

    assert result.scores["growth_seeker"] == result.scores["balanced_planner"] == 6
    assert result.personality_type == "growth_seeker"
    assert result.confidence_level == pytest.approx(6 / MAX_POSSIBLE_SCORE * 100)


def test_classify_is_deterministic(prudent_answers):
    assert classify(prudent_answers) == classify(dict(prudent_answers))


def test_scores_cover_every_archetype(prudent_answers):
    result = classify(prudent_answers)
    assert tuple(result.scores) == PERSONALITY_TYPE_ORDER
    assert all(value >= 0 for value in result.scores.values())
    assert 0 < result.confidence_level <= 100


def test_missing_answers_rejected(prudent_answers):
    del prudent_answers["risk_tolerance"]
    prudent_answers["emergency_fund"] = ""

    with pytest.raises(InvalidInputError) as exc_info:
        validate_answers(prudent_answers)

    assert str(exc_info.value) == "Missing required answers: risk_tolerance, emergency_fund"
    assert exc_info.value.kind == ErrorKind.VALIDATION


def test_unknown_answer_rejected(prudent_answers):
    prudent_answers["salary_approach"] = "spend_it_all"

    with pytest.raises(InvalidInputError, match="Invalid answer 'spend_it_all' for salary_approach"):
        classify(prudent_answers)


def test_extra_answers_are_ignored(prudent_answers):
    prudent_answers["favourite_colour"] = "green"
    assert "favourite_colour" not in validate_answers(prudent_answers)


def test_personality_details_catalogue():
    assert set(PERSONALITY_TYPES) == set(PERSONALITY_TYPE_ORDER)
    details = get_personality_details("risk_averse")
    assert details["name"] == "The Safety-First Investor"
    assert details["color"] == "#64748B"
