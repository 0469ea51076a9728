"""Personality profiler endpoints"""

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from finbridge.api.dependencies import get_personality_service, get_user_id
from finbridge.api.responses import envelope, failure_response
from finbridge.api.v1.schemas import (
    AssessmentRequest,
    AssessmentResultSchema,
    ChallengeProgressRequest,
    ChallengeSchema,
    Envelope,
    ErrorResponse,
    GeneratedChallengesSchema,
    PersonalityProfileSchema,
)
from finbridge.domain.models import PersonalityProfile
from finbridge.domain.personality import get_personality_details
from finbridge.services.personality import PersonalityProfilerService

router = APIRouter(
    prefix="/personality-profiler",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)


def _profile_payload(profile: PersonalityProfile) -> Dict[str, Any]:
    return {**asdict(profile), "personality_details": get_personality_details(profile.personality_type)}


@router.post("/assessment", response_model=Envelope[AssessmentResultSchema])
def submit_assessment(
    request_body: AssessmentRequest,
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    """
    Classify assessment answers into a money personality.

    Replaces any previous profile and swaps the user's pending challenges for
    the new archetype's challenges.
    """
    result = service.submit_assessment(user_id, request_body.answers)
    if not result.success:
        return failure_response(result)

    outcome = result.data
    return envelope({
        **_profile_payload(outcome.profile),
        "challenges_generated": len(outcome.challenges),
        "challenges": outcome.challenges,
    })


@router.get("/profile", response_model=Envelope[PersonalityProfileSchema])
def get_profile(
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    result = service.get_profile(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(_profile_payload(result.data))


@router.get("/types", response_model=Envelope[Dict[str, Dict[str, Any]]])
def list_personality_types(service: PersonalityProfilerService = Depends(get_personality_service)):
    """All archetypes and their characteristics"""
    return envelope(service.list_personality_types().data)


@router.get("/challenges", response_model=Envelope[List[ChallengeSchema]])
def list_challenges(
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    result = service.list_challenges(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.post("/challenges/generate", response_model=Envelope[GeneratedChallengesSchema])
def generate_challenges(
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    """Regenerate pending challenges from the stored personality profile"""
    result = service.regenerate_challenges(user_id)
    if not result.success:
        return failure_response(result)
    return envelope({"challenges_generated": len(result.data), "challenges": result.data})


@router.put(
    "/challenges/{challenge_id}/progress",
    response_model=Envelope[ChallengeSchema],
    responses={403: {"model": ErrorResponse}},
)
def update_challenge_progress(
    challenge_id: str,
    request_body: ChallengeProgressRequest,
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    result = service.update_challenge_progress(challenge_id, request_body.progress, user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.get("/insights", response_model=Envelope[Dict[str, Any]])
def get_behavioral_insights(
    user_id: str = Depends(get_user_id),
    service: PersonalityProfilerService = Depends(get_personality_service),
):
    """Personality alignment, spending trends, challenge performance and growth indicators"""
    result = service.get_behavioral_insights(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)
