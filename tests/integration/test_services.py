"""Integration tests for the service layer against a real session"""

import pytest
import uuid
from datetime import date, timedelta
from unittest.mock import MagicMock
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from finbridge.domain.challenges import build_challenges
from finbridge.domain.models import AlertDraft
from finbridge.domain.results import ErrorKind
from finbridge.infrastructure.database.repositories import ChallengeRepository
from finbridge.infrastructure.database.models import (
    PersonalityChallengeRecord,
    PersonalityProfileRecord,
    ResilienceScore,
    TransactionRecord,
)
from finbridge.services.alerts import SmartAlertsService
from finbridge.services.health import FinancialHealthService
from finbridge.services.personality import PersonalityProfilerService
from finbridge.utils.date_utils import utcnow


PRUDENT_ANSWERS = {
    "salary_approach": "save_immediately",
    "risk_tolerance": "guaranteed_returns",
    "planning_approach": "detailed_longterm",
    "purchase_decision": "sleep_on_it",
    "emergency_fund": "six_plus_months",
    "investment_knowledge": "basic_knowledge",
}

GROWTH_ANSWERS = {
    "salary_approach": "invest_opportunity",
    "risk_tolerance": "high_risk_reward",
    "planning_approach": "reactive_approach",
    "purchase_decision": "gut_feeling",
    "emergency_fund": "less_than_month",
    "investment_knowledge": "very_knowledgeable",
}


@pytest.fixture
def failing_db():
    """Session whose every query fails like a dropped connection"""
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    db.get.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    return db


# Financial health

def test_get_latest_materializes_score_once(db, seed, steady_saver_records):
    """First read calculates and stores; later reads return the stored row"""
    seed(*steady_saver_records)
    service = FinancialHealthService(db)

    first = service.get_latest("user_steady")
    assert first.success
    assert first.data.overall_score == 90
    assert first.data.literacy_score == 66
    assert first.data.investment_score == 80
    assert first.data.breakdown["literacy"].status == "good"

    second = service.get_latest("user_steady")
    assert second.data.id == first.data.id
    assert db.query(ResilienceScore).count() == 1


def test_user_without_records_gets_default_score(db):
    result = FinancialHealthService(db).calculate("user_new")

    assert result.success
    assert result.data.overall_score == 15
    assert result.data.debt_score == 100


def test_calculate_appends_history(db, seed, steady_saver_records):
    seed(*steady_saver_records)
    service = FinancialHealthService(db)

    service.calculate("user_steady")
    service.calculate("user_steady")

    history = service.get_history("user_steady", months=6)
    assert history.success
    assert len(history.data) == 2
    assert history.data[0].calculated_at <= history.data[1].calculated_at
    assert service.get_history("someone_else").data == []


def test_history_rejects_non_positive_months(db):
    result = FinancialHealthService(db).get_history("user_steady", months=0)

    assert not result.success
    assert result.error_kind == ErrorKind.VALIDATION


def test_breakdown_and_insights_reuse_latest_score(db, seed, steady_saver_records):
    seed(*steady_saver_records)
    service = FinancialHealthService(db)

    breakdown = service.get_breakdown("user_steady")
    insights = service.get_resilience_insights("user_steady")

    assert breakdown.data["overall_score"] == 90
    assert set(breakdown.data["breakdown"]) == {
        "literacy", "savings", "debt", "insurance", "emergency_fund", "investment"
    }
    assert insights.data["overall_resilience"]["level"] == "High"
    assert insights.data["risk_assessment"]["level"] == "Low"
    assert db.query(ResilienceScore).count() == 1


def test_storage_failure_surfaces_as_upstream_error(failing_db):
    result = FinancialHealthService(failing_db).calculate("user_steady")

    assert not result.success
    assert result.error_kind == ErrorKind.UPSTREAM_DATA
    assert "Failed to fetch user transactions" in result.error
    failing_db.rollback.assert_called_once()


# Personality profiler

def test_submit_assessment_stores_profile_and_challenges(db):
    service = PersonalityProfilerService(db)

    result = service.submit_assessment("user_a", PRUDENT_ANSWERS)

    assert result.success
    assert result.data.profile.personality_type == "prudent_saver"
    assert result.data.profile.assessment_scores["prudent_saver"] == 13
    assert [c.status for c in result.data.challenges] == ["pending", "pending"]
    assert db.query(PersonalityChallengeRecord).count() == 2


def test_reassessment_replaces_profile_and_only_pending_challenges(db):
    service = PersonalityProfilerService(db)
    first = service.submit_assessment("user_a", PRUDENT_ANSWERS).data
    started = first.challenges[0]
    service.update_challenge_progress(started.id, 40, "user_a")

    second = service.submit_assessment("user_a", GROWTH_ANSWERS)

    assert second.success
    assert db.query(PersonalityProfileRecord).filter_by(user_id="user_a").count() == 1
    assert service.get_profile("user_a").data.personality_type == "growth_seeker"

    challenges = service.list_challenges("user_a").data
    titles = {c.title for c in challenges}
    assert len(challenges) == 3
    assert started.title in titles
    assert {"Portfolio Diversification", "Risk Assessment Challenge"} <= titles
    assert "Emergency Fund Booster" not in titles


def test_invalid_assessment_changes_nothing(db):
    service = PersonalityProfilerService(db)
    answers = dict(PRUDENT_ANSWERS, risk_tolerance="yolo")

    result = service.submit_assessment("user_a", answers)

    assert not result.success
    assert result.error_kind == ErrorKind.VALIDATION
    assert db.query(PersonalityProfileRecord).count() == 0
    assert db.query(PersonalityChallengeRecord).count() == 0


def test_profile_missing(db):
    service = PersonalityProfilerService(db)

    assert service.get_profile("nobody").error_kind == ErrorKind.NOT_FOUND
    assert service.regenerate_challenges("nobody").error_kind == ErrorKind.NOT_FOUND
    assert service.get_behavioral_insights("nobody").error_kind == ErrorKind.NOT_FOUND


def test_regenerate_challenges_is_idempotent_for_pending(db):
    service = PersonalityProfilerService(db)
    service.submit_assessment("user_a", PRUDENT_ANSWERS)

    service.regenerate_challenges("user_a")
    result = service.regenerate_challenges("user_a")

    assert result.success
    assert len(result.data) == 2
    assert db.query(PersonalityChallengeRecord).count() == 2


def test_generate_challenges_unknown_type(db):
    result = PersonalityProfilerService(db).generate_challenges("user_a", "gambler")
    assert result.error_kind == ErrorKind.VALIDATION


def test_update_progress_clamps_and_completes(db):
    service = PersonalityProfilerService(db)
    challenge = service.submit_assessment("user_a", PRUDENT_ANSWERS).data.challenges[0]

    result = service.update_challenge_progress(challenge.id, 150, "user_a")

    assert result.success
    assert result.data.progress == 100
    assert result.data.status == "completed"


def test_update_progress_checks_ownership_and_existence(db):
    service = PersonalityProfilerService(db)
    challenge = service.submit_assessment("user_a", PRUDENT_ANSWERS).data.challenges[0]

    forbidden = service.update_challenge_progress(challenge.id, 50, "user_b")
    assert forbidden.error_kind == ErrorKind.AUTHORIZATION
    assert service.list_challenges("user_a").data[0].status == "pending"

    missing = service.update_challenge_progress(str(uuid.uuid4()), 50, "user_a")
    assert missing.error_kind == ErrorKind.NOT_FOUND

    malformed = service.update_challenge_progress("not-a-uuid", 50, "user_a")
    assert malformed.error_kind == ErrorKind.VALIDATION


def test_behavioral_insights_use_last_30_days(db, seed):
    today = utcnow().date()
    seed(
        TransactionRecord(user_id="user_a", transaction_date=today - timedelta(days=2), amount=10000, transaction_type="income"),
        TransactionRecord(user_id="user_a", transaction_date=today - timedelta(days=2), amount=6000, transaction_type="expense"),
        TransactionRecord(user_id="user_a", transaction_date=today - timedelta(days=90), amount=90000, transaction_type="expense"),
    )
    service = PersonalityProfilerService(db)
    service.submit_assessment("user_a", PRUDENT_ANSWERS)

    insights = service.get_behavioral_insights("user_a")

    assert insights.success
    assert insights.data["personality_alignment"]["score"] == 80
    assert insights.data["challenge_performance"]["total_challenges"] == 2


def test_personality_storage_failure(failing_db):
    result = PersonalityProfilerService(failing_db).submit_assessment("user_a", PRUDENT_ANSWERS)

    assert result.error_kind == ErrorKind.UPSTREAM_DATA
    failing_db.commit.assert_not_called()


# Smart alerts

def test_alert_lifecycle(db):
    service = SmartAlertsService(db)

    created = service.create_alert("user_a", AlertDraft(alert_type="bill", title="Electricity", amount=1800))
    assert created.success
    alert_id = created.data.id

    assert service.mark_read(alert_id, "user_b").error_kind == ErrorKind.AUTHORIZATION

    read = service.mark_read(alert_id, "user_a")
    assert read.data.is_read
    assert service.list_alerts("user_a", unread_only=True).data == []

    updated = service.update_alert(alert_id, "user_a", {"priority": "high", "id": "ignored"})
    assert updated.data.priority == "high"
    assert updated.data.id == alert_id

    assert service.delete_alert(alert_id, "user_a").success
    assert service.delete_alert(alert_id, "user_a").error_kind == ErrorKind.NOT_FOUND


def test_list_alerts_filters(db):
    service = SmartAlertsService(db)
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Rent", priority="high"))
    service.create_alert("user_a", AlertDraft(alert_type="goal", title="Trip", enabled=False))
    service.create_alert("user_b", AlertDraft(alert_type="bill", title="Other user"))

    assert len(service.list_alerts("user_a").data) == 2
    assert [a.title for a in service.list_alerts("user_a", alert_type="bill").data] == ["Rent"]
    assert [a.title for a in service.list_alerts("user_a", enabled=False).data] == ["Trip"]
    assert [a.title for a in service.list_alerts("user_a", priority="high").data] == ["Rent"]
    assert len(service.list_alerts("user_a", limit=1).data) == 1


def test_upcoming_alerts_window(db):
    today = date(2026, 6, 15)
    service = SmartAlertsService(db)
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Soon", due_date=today + timedelta(days=3)))
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Edge", due_date=today + timedelta(days=7)))
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Later", due_date=today + timedelta(days=10)))
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Muted", due_date=today, enabled=False))
    service.create_alert("user_a", AlertDraft(alert_type="bill", title="Undated"))

    upcoming = service.upcoming_alerts("user_a", today=today)

    assert [a.title for a in upcoming.data] == ["Soon", "Edge"]


def test_generate_automatic_alerts_stores_drafts(db, seed):
    today = utcnow().date()
    seed(TransactionRecord(user_id="user_a", transaction_date=today, amount=26000, transaction_type="expense"))
    service = SmartAlertsService(db)

    result = service.generate_automatic_alerts("user_a", today=today)

    assert result.success
    assert [a.alert_type for a in result.data] == ["budget"]
    assert result.data[0].priority == "high"
    assert len(service.list_alerts("user_a").data) == 1


def test_alert_settings_defaults_and_update(db):
    service = SmartAlertsService(db)

    defaults = service.get_settings("user_a").data
    assert defaults.budget_limit == 25000
    assert defaults.spending_spikes is False

    updated = service.update_settings("user_a", {"budget_limit": 40000, "budget_alerts": False})
    assert updated.data.budget_limit == 40000
    assert updated.data.budget_alerts is False
    assert service.get_settings("user_a").data.goal_progress is True


def test_replace_pending_takes_user_lock_on_postgres():
    """Concurrent regenerations for one user queue behind a transaction-scoped lock"""
    db = MagicMock()
    db.get_bind.return_value.dialect.name = "postgresql"

    ChallengeRepository(db).replace_pending("user_a", build_challenges("user_a", "prudent_saver"))

    statement, params = db.execute.call_args.args
    assert "pg_advisory_xact_lock(hashtext(:user_id))" in str(statement)
    assert params == {"user_id": "user_a"}

    call_names = [name for name, _, _ in db.mock_calls]
    assert call_names.index("execute") < call_names.index("query")


def test_regenerate_on_sqlite_skips_advisory_lock(db):
    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    engine = db.get_bind()
    event.listen(engine, "before_cursor_execute", capture)
    try:
        service = PersonalityProfilerService(db)
        service.submit_assessment("user_a", PRUDENT_ANSWERS)
        result = service.regenerate_challenges("user_a")
    finally:
        event.remove(engine, "before_cursor_execute", capture)

    assert result.success
    assert any(s.startswith("DELETE FROM personality_challenges") for s in statements)
    assert not any("pg_advisory" in s for s in statements)
