"""Session state for one search orchestration."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from backend.app.models.llm import ChatMessage
from backend.app.models.tools import ToolCallLog
from backend.app.orchestration.errors import SearchCancelledError

SessionStatus = Literal[
    "awaiting_model",
    "tool_call_pending",
    "final_response_received",
    "failed",
    "cancelled",
]


@dataclass(frozen=True)
class ToolContext:
    """Context for a single tool dispatch, used for tracing."""

    session_id: UUID
    tool_name: str
    call_id: str
    round: int


@dataclass
class CancelToken:
    """Token for cancellation signaling."""

    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def throw_if_cancelled(self) -> None:
        """Raise SearchCancelledError if cancelled."""
        if self.cancelled:
            raise SearchCancelledError("search cancelled")


@dataclass
class SearchSession:
    """State of one orchestration session.

    Created per request and discarded afterwards; nothing here is shared
    across requests.
    """

    query: str
    session_id: UUID = field(default_factory=uuid4)
    org_id: int | None = None
    team_id: int | None = None
    user_id: int | None = None
    status: SessionStatus = "awaiting_model"
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    # Conversation history sent to the model (system prompt excluded)
    messages: list[ChatMessage] = field(default_factory=list)
    # One entry per dispatched tool call
    tool_calls: list[ToolCallLog] = field(default_factory=list)
    rounds: int = 0
    final_text: str | None = None

    def transition(self, status: SessionStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(UTC)
