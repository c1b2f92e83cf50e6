"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from autovest.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    request_id: str,
    step: str,
    total_score: int,
    risk_profile: str,
    duration_ms: float,
    should_invest: bool | None = None,
) -> None:
    """Log structured scoring outcome for analysis"""
    extra: Dict[str, Any] = {
        "request_id": request_id,
        "step": step,
        "total_score": total_score,
        "risk_profile": risk_profile,
        "duration_ms": duration_ms,
    }
    if should_invest is not None:
        extra["investment_outcome"] = "invest" if should_invest else "hold"
    logging.info("Scoring completed", extra=extra)
