"""Smart alert endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from finbridge.api.dependencies import get_alerts_service, get_user_id
from finbridge.api.responses import envelope, failure_response
from finbridge.api.v1.schemas import (
    AlertCreateRequest,
    AlertSchema,
    AlertSettingsSchema,
    AlertSettingsUpdateRequest,
    AlertUpdateRequest,
    Envelope,
    ErrorResponse,
)
from finbridge.domain.models import AlertDraft
from finbridge.services.alerts import SmartAlertsService

router = APIRouter(
    prefix="/alerts",
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Envelope[List[AlertSchema]])
def list_alerts(
    enabled: Optional[bool] = Query(None),
    alert_type: Optional[str] = Query(None, alias="type"),
    priority: Optional[str] = Query(None),
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.list_alerts(
        user_id,
        enabled=enabled,
        alert_type=alert_type,
        priority=priority,
        unread_only=unread_only,
        limit=limit,
    )
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.post("", response_model=Envelope[AlertSchema], status_code=201)
def create_alert(
    request_body: AlertCreateRequest,
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.create_alert(user_id, AlertDraft(**request_body.model_dump()))
    if not result.success:
        return failure_response(result)
    return envelope(result.data, message="Alert created successfully")


@router.get("/upcoming", response_model=Envelope[List[AlertSchema]])
def upcoming_alerts(
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    """Enabled alerts due in the next week"""
    result = service.upcoming_alerts(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.post("/generate", response_model=Envelope[List[AlertSchema]])
def generate_alerts(
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    """Create budget, goal and emergency-fund alerts from the user's data"""
    result = service.generate_automatic_alerts(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data, message=f"Generated {len(result.data)} alerts")


@router.get("/settings", response_model=Envelope[AlertSettingsSchema])
def get_alert_settings(
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.get_settings(user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.put("/settings", response_model=Envelope[AlertSettingsSchema])
def update_alert_settings(
    request_body: AlertSettingsUpdateRequest,
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.update_settings(user_id, request_body.model_dump(exclude_unset=True))
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.put("/{alert_id}", response_model=Envelope[AlertSchema])
def update_alert(
    alert_id: str,
    request_body: AlertUpdateRequest,
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.update_alert(alert_id, user_id, request_body.model_dump(exclude_unset=True))
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.put("/{alert_id}/read", response_model=Envelope[AlertSchema])
def mark_alert_read(
    alert_id: str,
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.mark_read(alert_id, user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data)


@router.delete("/{alert_id}", response_model=Envelope[AlertSchema])
def delete_alert(
    alert_id: str,
    user_id: str = Depends(get_user_id),
    service: SmartAlertsService = Depends(get_alerts_service),
):
    result = service.delete_alert(alert_id, user_id)
    if not result.success:
        return failure_response(result)
    return envelope(result.data, message="Alert deleted successfully")
