"""Structured JSON logging for production observability"""

import logging
import sys
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from finbridge.config import settings
from finbridge.utils.date_utils import utcnow


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_score_calculated(user_id: str, overall_score: int, duration_ms: float) -> None:
    """Log structured score outcome for analysis"""
    logging.getLogger("finbridge.scoring").info(
        "Health score calculated",
        extra={
            "user_id": user_id,
            "step": "health_score_complete",
            "overall_score": overall_score,
            "duration_ms": duration_ms,
        },
    )


def log_assessment_completed(user_id: str, personality_type: str, confidence_level: float, challenges: int) -> None:
    logging.getLogger("finbridge.personality").info(
        "Personality assessment completed",
        extra={
            "user_id": user_id,
            "step": "assessment_complete",
            "personality_type": personality_type,
            "confidence_level": round(confidence_level, 2),
            "challenges_generated": challenges,
        },
    )
