"""Dependency injection for FastAPI endpoints"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from finbridge.infrastructure.database.session import get_db
from finbridge.services.alerts import SmartAlertsService
from finbridge.services.health import FinancialHealthService
from finbridge.services.personality import PersonalityProfilerService


def get_user_id(
    x_user_id: Optional[str] = Header(None, description="Acting user identifier"),
    user_id: Optional[str] = Query(None, alias="userId"),
) -> str:
    """Acting user from the X-User-ID header, falling back to the userId query parameter"""
    resolved = x_user_id or user_id
    if not resolved:
        raise HTTPException(status_code=401, detail="User ID required")
    return resolved


def get_health_service(db: Session = Depends(get_db)) -> FinancialHealthService:
    return FinancialHealthService(db)


def get_personality_service(db: Session = Depends(get_db)) -> PersonalityProfilerService:
    return PersonalityProfilerService(db)


def get_alerts_service(db: Session = Depends(get_db)) -> SmartAlertsService:
    return SmartAlertsService(db)
