"""Models package - re-exports for convenience."""

from backend.app.models.directory import MentionHistory, Project, Team, User
from backend.app.models.llm import (
    ChatMessage,
    FinalText,
    ModelRequest,
    ModelResponse,
    ToolCallRequest,
    ToolCallsRequested,
)
from backend.app.models.search import SearchRequest, SearchResponse
from backend.app.models.tools import (
    NameInput,
    ProjectNameInput,
    TeamNameInput,
    ToolCallLog,
    ToolInput,
    UserIdInput,
)

__all__ = [
    # Directory
    "User",
    "Team",
    "Project",
    "MentionHistory",
    # Model transport
    "ChatMessage",
    "ToolCallRequest",
    "ToolCallsRequested",
    "FinalText",
    "ModelResponse",
    "ModelRequest",
    # Search
    "SearchRequest",
    "SearchResponse",
    # Tools
    "ToolInput",
    "UserIdInput",
    "NameInput",
    "ProjectNameInput",
    "TeamNameInput",
    "ToolCallLog",
]
