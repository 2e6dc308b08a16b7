"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from forecast_engine.config import settings


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


def log_skipped_record(request_id: str, source: str, record_id: str, reason: str) -> None:
    """Log a source record the resolver could not use"""
    logging.warning(
        "Obligation source record skipped",
        extra={
            "request_id": request_id,
            "step": "resolve_obligations",
            "source": source,
            "record_id": record_id,
            "reason": reason,
        },
    )


def log_projection(
    request_id: str,
    months_ahead: int,
    obligation_count: int,
    skipped_count: int,
    duration_ms: float,
) -> None:
    """Log structured projection outcome"""
    logging.info(
        "Projection completed",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "months_ahead": months_ahead,
            "obligation_count": obligation_count,
            "skipped_count": skipped_count,
            "duration_ms": duration_ms,
        },
    )


def log_simulation(
    request_id: str,
    horizon_months: int,
    override_count: int,
    risk_level: str,
    duration_ms: float,
) -> None:
    """Log structured simulation outcome"""
    logging.info(
        "Simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulation_complete",
            "horizon_months": horizon_months,
            "override_count": override_count,
            "risk_level": risk_level,
            "duration_ms": duration_ms,
        },
    )
