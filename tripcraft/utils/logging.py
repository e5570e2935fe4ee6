"""Structured logging for oracle calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredOracleLogger:
    """Structured logger for oracle calls."""

    def log_call(
        self,
        kind: str,
        outcome: str,
        latency_ms: float,
        cache_hit: bool = False,
        error_reason: str | None = None,
    ) -> None:
        """Log one oracle call with structured data."""
        log_data: dict[str, Any] = {
            "kind": kind,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "cache_hit": cache_hit,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Oracle call: {kind} - {outcome}"

        if outcome in ("success", "cache_hit"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
