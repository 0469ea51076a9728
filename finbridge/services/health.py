"""Financial health score operations: calculate, latest, history, breakdown, insights"""

import logging
import time
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from finbridge.config import settings
from finbridge.domain.exceptions import DomainException, InvalidInputError
from finbridge.domain.health_score import calculate_health_score
from finbridge.domain.insights import get_resilience_insights, get_score_breakdown
from finbridge.domain.models import HealthScore
from finbridge.domain.results import Result
from finbridge.infrastructure.database.repositories import HealthScoreRepository, ScoreInputsRepository
from finbridge.infrastructure.observability.logging import log_score_calculated
from finbridge.infrastructure.observability.metrics import record_score, record_score_failure
from finbridge.services.common import fail
from finbridge.utils.date_utils import months_before, utcnow

logger = logging.getLogger(__name__)


class FinancialHealthService:
    """Scores users from their stored records and keeps the score history"""

    def __init__(self, db: Session):
        self.db = db
        self.inputs = ScoreInputsRepository(db)
        self.scores = HealthScoreRepository(db)

    def _calculate_and_store(self, user_id: str, today: Optional[date]) -> HealthScore:
        inputs = self.inputs.load(user_id)
        score = calculate_health_score(user_id, inputs, today=today)
        score.calculated_at = utcnow()
        stored = self.scores.create_score(score)
        stored.breakdown = get_score_breakdown(stored)
        return stored

    def calculate(self, user_id: str, today: Optional[date] = None) -> Result[HealthScore]:
        """
        Compute a fresh score and append it to the history.

        Flow:
        1. Load transactions, goals and lesson progress
        2. Score the six factors and combine them
        3. Persist a new history row
        4. Attach the per-factor breakdown
        """
        start_time = time.time()
        try:
            score = self._calculate_and_store(user_id, today)
            self.db.commit()
        except DomainException as e:
            record_score_failure()
            return fail(self.db, e, "calculating financial health score", user_id, logger)

        record_score(score.overall_score)
        log_score_calculated(user_id, score.overall_score, (time.time() - start_time) * 1000)
        return Result.ok(score)

    def get_latest(self, user_id: str) -> Result[HealthScore]:
        """Newest stored score; computes and stores one when the user has none yet"""
        try:
            latest = self.scores.get_latest(user_id)
        except DomainException as e:
            return fail(self.db, e, "fetching latest score", user_id, logger)

        if latest is None:
            logger.info("No stored score, calculating", extra={"user_id": user_id})
            return self.calculate(user_id)

        latest.breakdown = get_score_breakdown(latest)
        return Result.ok(latest)

    def get_history(self, user_id: str, months: Optional[int] = None) -> Result[List[HealthScore]]:
        """Scores calculated within the last `months` months, oldest first"""
        if months is None:
            months = settings.score_history_default_months

        try:
            if months < 1:
                raise InvalidInputError("months must be a positive integer")
            now = utcnow()
            since = datetime.combine(months_before(now.date(), months), now.timetz())
            history = self.scores.get_history(user_id, since)
        except DomainException as e:
            return fail(self.db, e, "fetching score history", user_id, logger)

        return Result.ok(history)

    def get_breakdown(self, user_id: str) -> Result[Dict[str, object]]:
        latest = self.get_latest(user_id)
        if not latest.success:
            return latest

        score = latest.data
        return Result.ok({
            "overall_score": score.overall_score,
            "calculated_at": score.calculated_at,
            "breakdown": score.breakdown,
        })

    def get_resilience_insights(self, user_id: str) -> Result[Dict[str, object]]:
        latest = self.get_latest(user_id)
        if not latest.success:
            return latest
        return Result.ok(get_resilience_insights(latest.data))
