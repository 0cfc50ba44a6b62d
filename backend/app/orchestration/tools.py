"""Tool runner - dispatches one model tool call with logging and metrics."""

import asyncio
import json
import time
from datetime import UTC, datetime

from backend.app.models.llm import ChatMessage, ToolCallRequest
from backend.app.models.tools import JsonValue, ToolCallLog
from backend.app.orchestration.errors import ToolArgumentDecodingError, UnknownToolError
from backend.app.orchestration.state import SearchSession, ToolContext
from backend.app.tools.registry import ToolRegistry
from backend.app.utils.logging import StructuredToolLogger
from backend.app.utils.metrics import PrometheusToolMetrics

_tool_logger = StructuredToolLogger()
_tool_metrics = PrometheusToolMetrics()


def _summarize_input(arguments: str) -> dict[str, JsonValue]:
    try:
        data = json.loads(arguments) if arguments else {}
    except json.JSONDecodeError:
        return {"raw_length": len(arguments)}
    if not isinstance(data, dict):
        return {"raw_length": len(arguments)}
    return {k: v for k, v in data.items() if isinstance(v, str | int | float | bool)}


def _summarize_output(result: JsonValue) -> dict[str, JsonValue]:
    if isinstance(result, list):
        return {"count": len(result)}
    return {"count": 0 if result is None else 1}


def _error_payload(kind: str, message: str) -> str:
    return json.dumps({"error": kind, "message": message})


async def run_tool(
    *,
    call: ToolCallRequest,
    registry: ToolRegistry,
    session: SearchSession,
    timeout_seconds: float,
) -> ChatMessage:
    """Execute a model tool call and build the correlated tool message.

    Never raises for tool-level failures: unknown tools, bad arguments,
    handler errors and timeouts are serialized into the tool message so the
    model can recover. Appends a ToolCallLog to session.tool_calls.

    Args:
        call: Tool call as requested by the model
        registry: Registry to resolve the tool against
        session: Session to append the log entry to
        timeout_seconds: Hard timeout for the dispatch

    Returns:
        ChatMessage with role "tool" correlated to call.call_id
    """
    ctx = ToolContext(
        session_id=session.session_id,
        tool_name=call.tool_name,
        call_id=call.call_id,
        round=session.rounds,
    )
    started_at = datetime.now(UTC)
    start = time.monotonic()

    success = False
    error: str | None = None
    reason: str | None = None
    result: JsonValue = None

    try:
        result = await asyncio.wait_for(
            asyncio.to_thread(registry.dispatch, call.tool_name, call.arguments),
            timeout=timeout_seconds,
        )
        success = True
        content = json.dumps(result)
    except UnknownToolError as e:
        reason, error = "unknown_tool", str(e)
        content = _error_payload(reason, f"{error}. Available tools: {', '.join(registry.names)}")
    except ToolArgumentDecodingError as e:
        reason, error = "invalid_arguments", str(e)
        content = _error_payload(reason, error)
    except TimeoutError:
        reason, error = "timeout", f"Tool {call.tool_name} timed out after {timeout_seconds}s"
        content = _error_payload(reason, error)
    except Exception as e:
        reason, error = "execution_error", f"{type(e).__name__}: {e}"
        content = _error_payload(reason, f"Tool {call.tool_name} failed")

    finished_at = datetime.now(UTC)
    latency_ms = (time.monotonic() - start) * 1000

    if success:
        _tool_metrics.record_latency(call.tool_name, "success", latency_ms)
        _tool_logger.log_attempt(ctx, "success", latency_ms)
    else:
        _tool_metrics.record_latency(call.tool_name, "error", latency_ms)
        _tool_metrics.inc_error(call.tool_name, reason or "execution_error")
        _tool_logger.log_attempt(ctx, "error", latency_ms, error_reason=reason)

    session.tool_calls.append(
        ToolCallLog(
            name=call.tool_name,
            call_id=call.call_id,
            started_at=started_at,
            finished_at=finished_at,
            duration_ms=int((finished_at - started_at).total_seconds() * 1000),
            success=success,
            error=error,
            input_summary=_summarize_input(call.arguments),
            output_summary=_summarize_output(result) if success else {},
        )
    )

    return ChatMessage(
        role="tool",
        tool_call_id=call.call_id,
        name=call.tool_name,
        content=content,
    )
