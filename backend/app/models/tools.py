"""Tool input and tool call logging models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# JSON-serializable value type
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ToolInput(BaseModel):
    """Base for tool argument payloads.

    Unknown keys are rejected so a payload that does not map onto the declared
    input fails at dispatch instead of being silently dropped.
    """

    model_config = ConfigDict(extra="forbid")


class UserIdInput(ToolInput):
    userId: int = Field(..., description="Numeric user identifier")


class NameInput(ToolInput):
    name: str = Field(..., description="Full or partial user name or email")


class ProjectNameInput(ToolInput):
    projectName: str = Field(..., description="Full or partial project name")


class TeamNameInput(ToolInput):
    teamName: str = Field(..., description="Full or partial team name")


class ToolCallLog(BaseModel):
    """Log entry for a single tool call.

    Captures timing, success/failure, and small input/output summaries
    for observability without storing full payloads.
    """

    name: str = Field(..., description="Tool name (e.g. 'getUsersByName')")
    call_id: str | None = Field(None, description="Model-assigned call id")
    started_at: datetime = Field(..., description="UTC timestamp when call started")
    finished_at: datetime = Field(..., description="UTC timestamp when call finished")
    duration_ms: int = Field(..., description="Duration in milliseconds")
    success: bool = Field(..., description="True if call succeeded, False if error")
    error: str | None = Field(None, description="Error message if call failed")
    input_summary: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Small summary of inputs (key scalars only)",
    )
    output_summary: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Small summary of outputs (counts/aggregates only)",
    )
