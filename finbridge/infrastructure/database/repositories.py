"""Data access layer for FinBridge entities"""

import functools
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finbridge.domain.exceptions import InvalidInputError, UpstreamDataError
from finbridge.domain.models import (
    Alert,
    AlertDraft,
    AlertSettings,
    Challenge,
    Goal,
    HealthScore,
    LessonProgress,
    PersonalityProfile,
    ScoreInputs,
    Transaction,
)
from finbridge.infrastructure.database.models import (
    AlertSettingsRecord,
    GoalRecord,
    PersonalityChallengeRecord,
    PersonalityProfileRecord,
    ResilienceScore,
    SmartAlertRecord,
    TransactionRecord,
    UserProgressRecord,
)
from finbridge.utils.date_utils import utcnow

ALERT_SETTINGS_FIELDS = (
    "bill_reminders",
    "investment_opportunities",
    "goal_progress",
    "market_updates",
    "emi_reminders",
    "budget_alerts",
    "emergency_fund_low",
    "spending_spikes",
    "budget_limit",
    "emergency_fund_target",
)

ALERT_UPDATABLE_FIELDS = (
    "alert_type",
    "title",
    "description",
    "amount",
    "due_date",
    "priority",
    "enabled",
    "frequency",
    "is_read",
)


def storage_call(action: str):
    """Translate SQLAlchemy failures into UpstreamDataError for the service layer"""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                raise UpstreamDataError(f"Failed to {action}: {e.__class__.__name__}") from e

        return wrapper

    return decorator


def parse_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidInputError(f"Invalid id format: {value}")


def _to_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


class ScoreInputsRepository:
    """Loads the transactions, goals and lesson progress the scorers read"""

    def __init__(self, db: Session):
        self.db = db

    @storage_call("fetch user transactions")
    def get_transactions(self, user_id: str, since: Optional[date] = None) -> List[Transaction]:
        query = self.db.query(TransactionRecord).filter(TransactionRecord.user_id == user_id)
        if since is not None:
            query = query.filter(TransactionRecord.transaction_date >= since)
        rows = query.order_by(TransactionRecord.transaction_date.desc()).all()
        return [
            Transaction(
                user_id=row.user_id,
                transaction_date=row.transaction_date,
                amount=float(row.amount),
                transaction_type=row.transaction_type,
                category=row.category,
                description=row.description or "",
            )
            for row in rows
        ]

    @storage_call("fetch user goals")
    def get_goals(self, user_id: str) -> List[Goal]:
        rows = self.db.query(GoalRecord).filter(GoalRecord.user_id == user_id).all()
        return [
            Goal(
                user_id=row.user_id,
                goal_type=row.goal_type,
                target_amount=float(row.target_amount or 0),
                current_amount=float(row.current_amount or 0),
                status=row.status,
                goal_name=row.goal_name or "",
                target_date=row.target_date,
            )
            for row in rows
        ]

    @storage_call("fetch user progress")
    def get_progress(self, user_id: str) -> List[LessonProgress]:
        rows = self.db.query(UserProgressRecord).filter(UserProgressRecord.user_id == user_id).all()
        return [
            LessonProgress(
                user_id=row.user_id,
                progress_status=row.progress_status,
                score=row.score,
                lesson_id=row.lesson_id,
            )
            for row in rows
        ]

    def load(self, user_id: str) -> ScoreInputs:
        """Fetch all three collections; empty collections are valid"""
        return ScoreInputs(
            transactions=self.get_transactions(user_id),
            goals=self.get_goals(user_id),
            progress=self.get_progress(user_id),
        )


class HealthScoreRepository:
    """Append-only store for calculated health scores"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_domain(row: ResilienceScore) -> HealthScore:
        return HealthScore(
            id=str(row.id),
            user_id=row.user_id,
            overall_score=row.overall_score,
            literacy_score=row.literacy_score,
            savings_score=row.savings_score,
            debt_score=row.debt_score,
            insurance_score=row.insurance_score,
            emergency_fund_score=row.emergency_fund_score,
            investment_score=row.investment_score,
            calculated_at=row.calculated_at,
        )

    @storage_call("store health score")
    def create_score(self, score: HealthScore) -> HealthScore:
        row = ResilienceScore(
            user_id=score.user_id,
            overall_score=score.overall_score,
            literacy_score=score.literacy_score,
            savings_score=score.savings_score,
            debt_score=score.debt_score,
            insurance_score=score.insurance_score,
            emergency_fund_score=score.emergency_fund_score,
            investment_score=score.investment_score,
            calculated_at=score.calculated_at or utcnow(),
        )
        self.db.add(row)
        self.db.flush()
        return self._to_domain(row)

    @storage_call("fetch latest health score")
    def get_latest(self, user_id: str) -> Optional[HealthScore]:
        row = (
            self.db.query(ResilienceScore)
            .filter(ResilienceScore.user_id == user_id)
            .order_by(ResilienceScore.calculated_at.desc())
            .first()
        )
        return self._to_domain(row) if row else None

    @storage_call("fetch health score history")
    def get_history(self, user_id: str, since: datetime) -> List[HealthScore]:
        rows = (
            self.db.query(ResilienceScore)
            .filter(ResilienceScore.user_id == user_id)
            .filter(ResilienceScore.calculated_at >= since)
            .order_by(ResilienceScore.calculated_at.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]


class PersonalityProfileRepository:
    """Single personality profile per user"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_domain(row: PersonalityProfileRecord) -> PersonalityProfile:
        return PersonalityProfile(
            id=str(row.id),
            user_id=row.user_id,
            personality_type=row.personality_type,
            assessment_answers=dict(row.assessment_answers),
            assessment_scores=dict(row.assessment_scores),
            confidence_level=row.confidence_level,
            completed_at=row.completed_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _get_row(self, user_id: str) -> Optional[PersonalityProfileRecord]:
        return (
            self.db.query(PersonalityProfileRecord)
            .filter(PersonalityProfileRecord.user_id == user_id)
            .first()
        )

    @storage_call("fetch personality profile")
    def get_profile(self, user_id: str) -> Optional[PersonalityProfile]:
        row = self._get_row(user_id)
        return self._to_domain(row) if row else None

    @storage_call("store personality profile")
    def upsert_profile(self, profile: PersonalityProfile) -> PersonalityProfile:
        """Insert, or fully replace the assessment fields of the existing row"""
        now = utcnow()
        row = self._get_row(profile.user_id)
        if row is None:
            row = PersonalityProfileRecord(user_id=profile.user_id, created_at=now)
            self.db.add(row)

        row.personality_type = profile.personality_type
        row.assessment_answers = dict(profile.assessment_answers)
        row.assessment_scores = dict(profile.assessment_scores)
        row.confidence_level = profile.confidence_level
        row.completed_at = now
        row.updated_at = now

        self.db.flush()
        return self._to_domain(row)


class ChallengeRepository:
    """Personalised challenges"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_domain(row: PersonalityChallengeRecord) -> Challenge:
        return Challenge(
            id=str(row.id),
            user_id=row.user_id,
            personality_type=row.personality_type,
            title=row.title,
            description=row.description or "",
            target_amount=float(row.target_amount or 0),
            duration_days=row.duration_days,
            difficulty=row.difficulty,
            status=row.status,
            progress=row.progress,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @storage_call("fetch challenges")
    def list_for_user(self, user_id: str) -> List[Challenge]:
        rows = (
            self.db.query(PersonalityChallengeRecord)
            .filter(PersonalityChallengeRecord.user_id == user_id)
            .order_by(PersonalityChallengeRecord.created_at.desc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @storage_call("fetch challenge")
    def get_by_id(self, challenge_id: str) -> Optional[Challenge]:
        row = self.db.get(PersonalityChallengeRecord, parse_id(challenge_id))
        return self._to_domain(row) if row else None

    def _lock_user(self, user_id: str) -> None:
        # Released on commit or rollback; SQLite already serialises writers
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:user_id))"),
                {"user_id": user_id},
            )

    @storage_call("replace pending challenges")
    def replace_pending(self, user_id: str, challenges: List[Challenge]) -> List[Challenge]:
        """
        Delete the user's pending challenges and insert `challenges`.

        Both steps run in the caller's transaction; in-progress and completed
        challenges are left untouched. Concurrent replacements for the same
        user are serialised by a transaction-scoped lock on PostgreSQL.
        """
        self._lock_user(user_id)
        (
            self.db.query(PersonalityChallengeRecord)
            .filter(PersonalityChallengeRecord.user_id == user_id)
            .filter(PersonalityChallengeRecord.status == "pending")
            .delete(synchronize_session=False)
        )

        now = utcnow()
        rows = [
            PersonalityChallengeRecord(
                user_id=user_id,
                personality_type=challenge.personality_type,
                title=challenge.title,
                description=challenge.description,
                target_amount=challenge.target_amount,
                duration_days=challenge.duration_days,
                difficulty=challenge.difficulty,
                status=challenge.status,
                progress=challenge.progress,
                created_at=now,
            )
            for challenge in challenges
        ]
        self.db.add_all(rows)
        self.db.flush()
        return [self._to_domain(row) for row in rows]

    @storage_call("update challenge progress")
    def update_progress(self, challenge_id: str, progress: float, status: str) -> Challenge:
        row = self.db.get(PersonalityChallengeRecord, parse_id(challenge_id))
        row.progress = progress
        row.status = status
        row.updated_at = utcnow()
        self.db.flush()
        return self._to_domain(row)


class AlertRepository:
    """Smart alerts and per-user alert settings"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_domain(row: SmartAlertRecord) -> Alert:
        return Alert(
            id=str(row.id),
            user_id=row.user_id,
            alert_type=row.alert_type,
            title=row.title,
            description=row.description or "",
            amount=_to_float(row.amount),
            due_date=row.due_date,
            priority=row.priority,
            enabled=row.enabled,
            frequency=row.frequency,
            is_read=row.is_read,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @storage_call("create alert")
    def create_alert(self, user_id: str, draft: AlertDraft) -> Alert:
        row = SmartAlertRecord(
            user_id=user_id,
            alert_type=draft.alert_type,
            title=draft.title,
            description=draft.description,
            amount=draft.amount,
            due_date=draft.due_date,
            priority=draft.priority,
            enabled=draft.enabled,
            frequency=draft.frequency,
            is_read=False,
            created_at=utcnow(),
        )
        self.db.add(row)
        self.db.flush()
        return self._to_domain(row)

    @storage_call("fetch alerts")
    def list_alerts(
        self,
        user_id: str,
        enabled: Optional[bool] = None,
        alert_type: Optional[str] = None,
        priority: Optional[str] = None,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Alert]:
        query = self.db.query(SmartAlertRecord).filter(SmartAlertRecord.user_id == user_id)
        if enabled is not None:
            query = query.filter(SmartAlertRecord.enabled == enabled)
        if alert_type:
            query = query.filter(SmartAlertRecord.alert_type == alert_type)
        if priority:
            query = query.filter(SmartAlertRecord.priority == priority)
        if unread_only:
            query = query.filter(SmartAlertRecord.is_read.is_(False))

        query = query.order_by(SmartAlertRecord.created_at.desc())
        if limit:
            query = query.limit(limit)
        return [self._to_domain(row) for row in query.all()]

    @storage_call("fetch alert")
    def get_by_id(self, alert_id: str) -> Optional[Alert]:
        row = self.db.get(SmartAlertRecord, parse_id(alert_id))
        return self._to_domain(row) if row else None

    @storage_call("update alert")
    def update_alert(self, alert_id: str, updates: Dict[str, Any]) -> Alert:
        row = self.db.get(SmartAlertRecord, parse_id(alert_id))
        for key, value in updates.items():
            if key in ALERT_UPDATABLE_FIELDS:
                setattr(row, key, value)
        row.updated_at = utcnow()
        self.db.flush()
        return self._to_domain(row)

    @storage_call("delete alert")
    def delete_alert(self, alert_id: str) -> Alert:
        row = self.db.get(SmartAlertRecord, parse_id(alert_id))
        alert = self._to_domain(row)
        self.db.delete(row)
        self.db.flush()
        return alert

    @storage_call("fetch upcoming alerts")
    def upcoming_alerts(self, user_id: str, start: date, end: date) -> List[Alert]:
        rows = (
            self.db.query(SmartAlertRecord)
            .filter(SmartAlertRecord.user_id == user_id)
            .filter(SmartAlertRecord.enabled.is_(True))
            .filter(SmartAlertRecord.due_date.isnot(None))
            .filter(SmartAlertRecord.due_date >= start)
            .filter(SmartAlertRecord.due_date <= end)
            .order_by(SmartAlertRecord.due_date.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def _get_settings_row(self, user_id: str) -> Optional[AlertSettingsRecord]:
        return self.db.query(AlertSettingsRecord).filter(AlertSettingsRecord.user_id == user_id).first()

    @staticmethod
    def _settings_to_domain(row: AlertSettingsRecord) -> AlertSettings:
        return AlertSettings(
            user_id=row.user_id,
            bill_reminders=row.bill_reminders,
            investment_opportunities=row.investment_opportunities,
            goal_progress=row.goal_progress,
            market_updates=row.market_updates,
            emi_reminders=row.emi_reminders,
            budget_alerts=row.budget_alerts,
            emergency_fund_low=row.emergency_fund_low,
            spending_spikes=row.spending_spikes,
            budget_limit=float(row.budget_limit),
            emergency_fund_target=float(row.emergency_fund_target),
        )

    @storage_call("fetch alert settings")
    def get_settings(self, user_id: str) -> AlertSettings:
        """Stored settings, or the column defaults when the user has none yet"""
        row = self._get_settings_row(user_id)
        return self._settings_to_domain(row) if row else AlertSettings(user_id=user_id)

    @storage_call("store alert settings")
    def upsert_settings(self, user_id: str, updates: Dict[str, Any]) -> AlertSettings:
        row = self._get_settings_row(user_id)
        if row is None:
            defaults = AlertSettings(user_id=user_id)
            row = AlertSettingsRecord(
                user_id=user_id,
                **{name: getattr(defaults, name) for name in ALERT_SETTINGS_FIELDS},
            )
            self.db.add(row)

        for key, value in updates.items():
            if key in ALERT_SETTINGS_FIELDS:
                setattr(row, key, value)
        row.updated_at = utcnow()
        self.db.flush()
        return self._settings_to_domain(row)
