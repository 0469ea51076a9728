"""Failure handling shared by the service classes"""

import logging

from sqlalchemy.orm import Session

from finbridge.domain.exceptions import DomainException
from finbridge.domain.results import ErrorKind, Result
from finbridge.infrastructure.observability.metrics import storage_failures_counter


def fail(db: Session, error: DomainException, action: str, user_id: str, logger: logging.Logger) -> Result:
    """Roll back the unit of work, log by severity and wrap the error"""
    db.rollback()

    if error.kind is ErrorKind.UPSTREAM_DATA:
        storage_failures_counter.inc()
        logger.error(f"Error {action}: {error}", extra={"user_id": user_id})
    else:
        logger.warning(f"Rejected {action}: {error}", extra={"user_id": user_id, "error_kind": error.kind.value})

    return Result.fail(error)
