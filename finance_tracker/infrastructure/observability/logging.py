"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from finance_tracker.config import settings


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


def log_user_registered(request_id: str, user_id: str) -> None:
    logging.info(
        "User registered",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "user_registered",
        },
    )


def log_simulation_created(
    request_id: str,
    user_id: str,
    interest_type: str,
    period_months: int,
    projected_amount: float,
) -> None:
    """Log structured simulation outcome for analysis"""
    logging.info(
        "Simulation created",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "simulation_created",
            "interest_type": interest_type,
            "period_months": period_months,
            "projected_amount": projected_amount,
        },
    )
