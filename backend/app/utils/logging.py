"""Structured logging for tool dispatch."""

import logging
from typing import Any

from backend.app.orchestration.state import ToolContext

logger = logging.getLogger(__name__)


class StructuredToolLogger:
    """Structured logger for tool dispatch."""

    def log_attempt(
        self,
        ctx: ToolContext,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log tool dispatch outcome with structured data."""
        log_data: dict[str, Any] = {
            "session_id": str(ctx.session_id),
            "tool": ctx.tool_name,
            "call_id": ctx.call_id,
            "round": ctx.round,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Tool dispatch: {ctx.tool_name} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
