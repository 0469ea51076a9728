"""Unit tests for automatic smart-alert rules"""

from datetime import date, datetime, timedelta, timezone
from finbridge.domain.models import AlertSettings, Goal, Transaction
from finbridge.domain.alerts import (
    budget_alert,
    emergency_fund_alert,
    format_inr,
    generate_automatic_alerts,
    goal_alerts,
)

TODAY = date(2026, 6, 15)


def expense(amount, day=TODAY):
    return Transaction(user_id="u1", transaction_date=day, amount=amount, transaction_type="expense")


def goal(current_amount, target_amount=10000, target_date=None, goal_type="vacation", goal_name="Goa Trip"):
    return Goal(
        user_id="u1",
        goal_type=goal_type,
        goal_name=goal_name,
        target_amount=target_amount,
        current_amount=current_amount,
        target_date=target_date,
    )


def test_format_inr():
    assert format_inr(150000) == "₹150,000"


def test_budget_alert_thresholds():
    settings = AlertSettings(user_id="u1")

    assert budget_alert([expense(20000)], settings, TODAY) is None

    warning = budget_alert([expense(21000)], settings, TODAY)
    assert warning.priority == "medium"
    assert warning.description == "You've spent ₹21,000 (84%) of your monthly budget"

    over = budget_alert([expense(26000)], settings, TODAY)
    assert over.priority == "high"
    assert "(104%)" in over.description


def test_budget_alert_only_counts_current_month():
    settings = AlertSettings(user_id="u1")
    last_month = TODAY - timedelta(days=20)
    assert budget_alert([expense(30000, day=last_month)], settings, TODAY) is None


def test_goal_almost_there():
    drafts = goal_alerts([goal(8500)], TODAY)

    assert len(drafts) == 1
    assert drafts[0].title == "Goa Trip - Almost There!"
    assert drafts[0].amount == 1500
    assert "Just ₹1,500 more to go!" in drafts[0].description


def test_goal_time_running_out():
    drafts = goal_alerts([goal(2000, target_date=TODAY + timedelta(days=10))], TODAY)

    assert len(drafts) == 1
    assert drafts[0].priority == "high"
    assert drafts[0].description.startswith("Only 10 days left")


def test_goal_deadline_today_and_completed_goals_skipped():
    assert goal_alerts([goal(2000, target_date=TODAY)], TODAY) == []
    assert goal_alerts([goal(10000)], TODAY) == []
    assert goal_alerts([goal(0, target_amount=0)], TODAY) == []


def test_emergency_fund_alert():
    settings = AlertSettings(user_id="u1", emergency_fund_target=100000)

    assert emergency_fund_alert([goal(40000)], settings) is None

    low = emergency_fund_alert([goal(40000, goal_type="emergency_fund")], settings)
    assert low.alert_type == "emergency"
    assert low.amount == 60000

    assert emergency_fund_alert([goal(50000, goal_type="emergency_fund")], settings) is None


def test_generate_automatic_alerts_respects_toggles():
    transactions = [expense(26000)]
    goals = [goal(8500), goal(1000, goal_type="emergency_fund", goal_name="Rainy Day")]

    everything = generate_automatic_alerts(transactions, goals, AlertSettings(user_id="u1"), today=TODAY)
    assert [d.alert_type for d in everything] == ["budget", "goal", "emergency"]

    muted = AlertSettings(user_id="u1", budget_alerts=False, goal_progress=False, emergency_fund_low=False)
    assert generate_automatic_alerts(transactions, goals, muted, today=TODAY) == []


def test_default_today_follows_utc_clock(monkeypatch):
    """Budget month is the UTC month when no date is passed"""
    monkeypatch.setattr(
        "finbridge.domain.alerts.utcnow",
        lambda: datetime(2026, 7, 1, 0, 30, tzinfo=timezone.utc),
    )
    settings = AlertSettings(user_id="u1", goal_progress=False, emergency_fund_low=False)

    assert generate_automatic_alerts([expense(30000, day=date(2026, 6, 30))], [], settings) == []

    drafts = generate_automatic_alerts([expense(30000, day=date(2026, 7, 1))], [], settings)
    assert [d.alert_type for d in drafts] == ["budget"]
