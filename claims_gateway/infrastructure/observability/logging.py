"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "claims-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    request_id: str,
    claim_id: str,
    step: str,
    stage: str | None = None,
    is_viable: bool | None = None,
    duration_ms: float | None = None,
) -> None:
    """Log structured claim evaluation outcome for analysis"""
    extra: Dict[str, Any] = {
        "request_id": request_id,
        "claim_id": claim_id,
        "step": step,
    }
    if stage is not None:
        extra["stage"] = stage
    if is_viable is not None:
        extra["viability_outcome"] = "viable" if is_viable else "warning"
    if duration_ms is not None:
        extra["duration_ms"] = duration_ms

    logging.info("Claim evaluated", extra=extra)
