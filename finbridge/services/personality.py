"""Personality assessment, challenge and behavioural insight operations"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

from sqlalchemy.orm import Session

from finbridge.domain.behavior import build_behavioral_insights
from finbridge.domain.challenges import apply_progress, build_challenges
from finbridge.domain.exceptions import AuthorizationError, DomainException, NotFoundError
from finbridge.domain.models import Challenge, PersonalityProfile
from finbridge.domain.personality import PERSONALITY_TYPES, classify, validate_answers
from finbridge.domain.results import Result
from finbridge.infrastructure.database.repositories import (
    ChallengeRepository,
    PersonalityProfileRepository,
    ScoreInputsRepository,
)
from finbridge.infrastructure.observability.logging import log_assessment_completed
from finbridge.infrastructure.observability.metrics import assessment_counter, challenge_progress_counter
from finbridge.services.common import fail
from finbridge.utils.date_utils import days_before, utcnow

logger = logging.getLogger(__name__)

INSIGHT_WINDOW_DAYS = 30


@dataclass
class AssessmentOutcome:
    """Stored profile plus the challenges generated for it"""

    profile: PersonalityProfile
    challenges: List[Challenge]


class PersonalityProfilerService:
    """Classifies users and manages their personalised challenges"""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = PersonalityProfileRepository(db)
        self.challenges = ChallengeRepository(db)
        self.inputs = ScoreInputsRepository(db)

    def _require_profile(self, user_id: str) -> PersonalityProfile:
        profile = self.profiles.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User personality profile not found. Please complete assessment first.")
        return profile

    def submit_assessment(self, user_id: str, answers: Mapping[str, str]) -> Result[AssessmentOutcome]:
        """
        Classify the answers, replace the user's profile and regenerate challenges.

        Profile upsert and challenge regeneration commit together, so a failure
        leaves both the previous profile and its pending challenges in place.
        """
        try:
            clean = validate_answers(answers)
            result = classify(clean)
            profile = self.profiles.upsert_profile(
                PersonalityProfile(
                    user_id=user_id,
                    personality_type=result.personality_type,
                    assessment_answers=clean,
                    assessment_scores=result.scores,
                    confidence_level=result.confidence_level,
                )
            )
            challenges = self.challenges.replace_pending(
                user_id, build_challenges(user_id, result.personality_type)
            )
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "creating/updating profile", user_id, logger)

        assessment_counter.labels(personality_type=profile.personality_type).inc()
        log_assessment_completed(user_id, profile.personality_type, profile.confidence_level, len(challenges))
        return Result.ok(AssessmentOutcome(profile=profile, challenges=challenges))

    def get_profile(self, user_id: str) -> Result[PersonalityProfile]:
        try:
            return Result.ok(self._require_profile(user_id))
        except DomainException as e:
            return fail(self.db, e, "fetching profile", user_id, logger)

    def list_personality_types(self) -> Result[Dict[str, Dict[str, object]]]:
        return Result.ok(PERSONALITY_TYPES)

    def generate_challenges(self, user_id: str, personality_type: str) -> Result[List[Challenge]]:
        """Atomically swap the user's pending challenges for the archetype's templates"""
        try:
            created = self.challenges.replace_pending(user_id, build_challenges(user_id, personality_type))
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "generating challenges", user_id, logger)

        logger.info(
            "Challenges generated",
            extra={"user_id": user_id, "personality_type": personality_type, "count": len(created)},
        )
        return Result.ok(created)

    def regenerate_challenges(self, user_id: str) -> Result[List[Challenge]]:
        try:
            profile = self._require_profile(user_id)
        except DomainException as e:
            return fail(self.db, e, "generating challenges", user_id, logger)
        return self.generate_challenges(user_id, profile.personality_type)

    def list_challenges(self, user_id: str) -> Result[List[Challenge]]:
        try:
            return Result.ok(self.challenges.list_for_user(user_id))
        except DomainException as e:
            return fail(self.db, e, "fetching challenges", user_id, logger)

    def update_challenge_progress(self, challenge_id: str, progress: float, user_id: str) -> Result[Challenge]:
        """Clamp progress, derive status, and only touch challenges the user owns"""
        try:
            progress, status = apply_progress(progress)
            challenge = self.challenges.get_by_id(challenge_id)
            if challenge is None:
                raise NotFoundError(f"Challenge {challenge_id} not found")
            if challenge.user_id != user_id:
                raise AuthorizationError("Challenge does not belong to this user")

            updated = self.challenges.update_progress(challenge_id, progress, status)
            self.db.commit()
        except DomainException as e:
            return fail(self.db, e, "updating challenge progress", user_id, logger)

        challenge_progress_counter.labels(status=updated.status).inc()
        return Result.ok(updated)

    def get_behavioral_insights(self, user_id: str) -> Result[Dict[str, object]]:
        """Insights from the profile, all challenges and the last 30 days of transactions"""
        try:
            profile = self._require_profile(user_id)
            challenges = self.challenges.list_for_user(user_id)
            since = days_before(utcnow().date(), INSIGHT_WINDOW_DAYS)
            transactions = self.inputs.get_transactions(user_id, since=since)
        except DomainException as e:
            return fail(self.db, e, "generating insights", user_id, logger)

        return Result.ok(build_behavioral_insights(profile, challenges, transactions))
