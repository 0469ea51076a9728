"""Automatic smart-alert rules over transactions, goals and alert settings"""

from datetime import date
from typing import List, Optional

from finbridge.domain.health_score import round_half_up
from finbridge.domain.models import AlertDraft, AlertSettings, Goal, Transaction
from finbridge.utils.date_utils import utcnow

BUDGET_WARNING_RATIO = 0.8
GOAL_ALMOST_THERE_PERCENT = 80
GOAL_DEADLINE_DAYS = 30
GOAL_BEHIND_PERCENT = 50
EMERGENCY_FUND_LOW_RATIO = 0.5


def format_inr(amount: float) -> str:
    return f"₹{amount:,.0f}"


def budget_alert(transactions: List[Transaction], settings: AlertSettings, today: date) -> Optional[AlertDraft]:
    """Warn once this calendar month's expenses pass 80% of the budget limit"""
    monthly_expenses = sum(
        t.amount
        for t in transactions
        if t.transaction_type == "expense"
        and t.transaction_date.year == today.year
        and t.transaction_date.month == today.month
    )

    if monthly_expenses <= settings.budget_limit * BUDGET_WARNING_RATIO:
        return None

    percent = round_half_up(monthly_expenses / settings.budget_limit * 100) if settings.budget_limit else 100
    return AlertDraft(
        alert_type="budget",
        title="Budget Alert",
        description=f"You've spent {format_inr(monthly_expenses)} ({percent}%) of your monthly budget",
        priority="high" if monthly_expenses > settings.budget_limit else "medium",
        frequency="monthly",
    )


def goal_alerts(goals: List[Goal], today: date) -> List[AlertDraft]:
    """Nudges for goals that are nearly reached or running out of time"""
    drafts = []
    for goal in goals:
        if not goal.target_amount:
            continue

        progress = (goal.current_amount / goal.target_amount) * 100
        days_to_target = (goal.target_date - today).days if goal.target_date else None
        remaining = goal.target_amount - goal.current_amount

        if GOAL_ALMOST_THERE_PERCENT <= progress < 100:
            drafts.append(AlertDraft(
                alert_type="goal",
                title=f"{goal.goal_name} - Almost There!",
                description=(
                    f"You're {round_half_up(progress)}% towards your {goal.goal_name} goal. "
                    f"Just {format_inr(remaining)} more to go!"
                ),
                amount=remaining,
                priority="medium",
                frequency="weekly",
            ))

        # Zero days left is skipped; overdue goals (negative days) still alert
        if days_to_target and days_to_target <= GOAL_DEADLINE_DAYS and progress < GOAL_BEHIND_PERCENT:
            drafts.append(AlertDraft(
                alert_type="goal",
                title=f"{goal.goal_name} - Time Running Out",
                description=(
                    f"Only {days_to_target} days left to reach your {goal.goal_name} goal. "
                    "Consider increasing your contributions."
                ),
                priority="high",
                frequency="weekly",
            ))

    return drafts


def emergency_fund_alert(goals: List[Goal], settings: AlertSettings) -> Optional[AlertDraft]:
    emergency_goal = next((g for g in goals if g.goal_type == "emergency_fund"), None)
    if emergency_goal is None:
        return None
    if emergency_goal.current_amount >= settings.emergency_fund_target * EMERGENCY_FUND_LOW_RATIO:
        return None

    return AlertDraft(
        alert_type="emergency",
        title="Emergency Fund Low",
        description="Your emergency fund is below 50% of your target. Consider boosting your savings.",
        amount=settings.emergency_fund_target - emergency_goal.current_amount,
        priority="high",
        frequency="monthly",
    )


def generate_automatic_alerts(
    transactions: List[Transaction],
    goals: List[Goal],
    settings: AlertSettings,
    today: date | None = None,
) -> List[AlertDraft]:
    """Apply every rule the user has enabled, in budget, goal, emergency order"""
    if today is None:
        today = utcnow().date()

    drafts: List[AlertDraft] = []

    if settings.budget_alerts:
        alert = budget_alert(transactions, settings, today)
        if alert:
            drafts.append(alert)

    if settings.goal_progress:
        drafts.extend(goal_alerts(goals, today))

    if settings.emergency_fund_low:
        alert = emergency_fund_alert(goals, settings)
        if alert:
            drafts.append(alert)

    return drafts
