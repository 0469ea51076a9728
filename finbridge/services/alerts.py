"""Smart alert operations"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from finbridge.config import settings
from finbridge.domain.alerts import generate_automatic_alerts
from finbridge.domain.exceptions import AuthorizationError, DomainException, NotFoundError
from finbridge.domain.models import Alert, AlertDraft, AlertSettings
from finbridge.domain.results import Result
from finbridge.infrastructure.database.repositories import AlertRepository, ScoreInputsRepository
from finbridge.services.common import fail
from finbridge.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class SmartAlertsService:
    """User alerts, alert preferences and rule-based alert generation"""

    def __init__(self, db: Session):
        self.db = db
        self.alerts = AlertRepository(db)
        self.inputs = ScoreInputsRepository(db)

    def _require_owned(self, alert_id: str, user_id: str) -> Alert:
        alert = self.alerts.get_by_id(alert_id)
        if alert is None:
            raise NotFoundError(f"Alert {alert_id} not found")
        if alert.user_id != user_id:
            raise AuthorizationError("Alert does not belong to this user")
        return alert

    def create_alert(self, user_id: str, draft: AlertDraft) -> Result[Alert]:
        try:
            alert = self.alerts.create_alert(user_id, draft)
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "creating alert", user_id, logger)
        return Result.ok(alert)

    def list_alerts(
        self,
        user_id: str,
        enabled: Optional[bool] = None,
        alert_type: Optional[str] = None,
        priority: Optional[str] = None,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> Result[List[Alert]]:
        try:
            alerts = self.alerts.list_alerts(
                user_id,
                enabled=enabled,
                alert_type=alert_type,
                priority=priority,
                unread_only=unread_only,
                limit=limit,
            )
        except DomainException as e:
            return fail(self.db, e, "fetching user alerts", user_id, logger)
        return Result.ok(alerts)

    def mark_read(self, alert_id: str, user_id: str) -> Result[Alert]:
        return self.update_alert(alert_id, user_id, {"is_read": True})

    def update_alert(self, alert_id: str, user_id: str, updates: Dict[str, Any]) -> Result[Alert]:
        try:
            self._require_owned(alert_id, user_id)
            alert = self.alerts.update_alert(alert_id, updates)
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "updating alert", user_id, logger)
        return Result.ok(alert)

    def delete_alert(self, alert_id: str, user_id: str) -> Result[Alert]:
        try:
            self._require_owned(alert_id, user_id)
            alert = self.alerts.delete_alert(alert_id)
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "deleting alert", user_id, logger)
        return Result.ok(alert)

    def upcoming_alerts(self, user_id: str, today: Optional[date] = None) -> Result[List[Alert]]:
        """Enabled alerts due between today and the end of the upcoming window"""
        if today is None:
            today = utcnow().date()
        window_end = today + timedelta(days=settings.upcoming_alert_window_days)

        try:
            alerts = self.alerts.upcoming_alerts(user_id, today, window_end)
        except DomainException as e:
            return fail(self.db, e, "fetching upcoming alerts", user_id, logger)
        return Result.ok(alerts)

    def generate_automatic_alerts(self, user_id: str, today: Optional[date] = None) -> Result[List[Alert]]:
        """Run the budget, goal and emergency-fund rules and store what they produce"""
        try:
            transactions = self.inputs.get_transactions(user_id)
            goals = self.inputs.get_goals(user_id)
            alert_settings = self.alerts.get_settings(user_id)

            drafts = generate_automatic_alerts(transactions, goals, alert_settings, today=today)
            created = [self.alerts.create_alert(user_id, draft) for draft in drafts]
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "generating automatic alerts", user_id, logger)

        logger.info("Automatic alerts generated", extra={"user_id": user_id, "count": len(created)})
        return Result.ok(created)

    def get_settings(self, user_id: str) -> Result[AlertSettings]:
        try:
            return Result.ok(self.alerts.get_settings(user_id))
        except DomainException as e:
            return fail(self.db, e, "fetching alert settings", user_id, logger)

    def update_settings(self, user_id: str, updates: Dict[str, Any]) -> Result[AlertSettings]:
        try:
            stored = self.alerts.upsert_settings(user_id, updates)
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "updating alert settings", user_id, logger)
        return Result.ok(stored)
