"""Model transport contract - requests, conversation messages and tagged responses."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

MessageRole = Literal["user", "assistant", "tool"]


class ToolCallRequest(BaseModel):
    """A single tool invocation requested by the model."""

    call_id: str = Field(..., description="Model-assigned id used to correlate the tool response")
    tool_name: str
    arguments: str = Field("{}", description="Raw JSON argument payload as emitted by the model")


class ChatMessage(BaseModel):
    """One entry of the conversation history (the system prompt is sent separately)."""

    role: MessageRole
    content: str | None = None
    tool_calls: list[ToolCallRequest] = Field(default_factory=list)
    tool_call_id: str | None = None
    name: str | None = None


class ToolCallsRequested(BaseModel):
    """Model turn asking for one or more tool calls."""

    kind: Literal["tool_calls"] = "tool_calls"
    calls: list[ToolCallRequest] = Field(..., min_length=1)


class FinalText(BaseModel):
    """Model turn with a final textual answer."""

    kind: Literal["final_text"] = "final_text"
    text: str


ModelResponse = Annotated[ToolCallsRequested | FinalText, Field(discriminator="kind")]


class ModelRequest(BaseModel):
    """Everything the transport needs for one submission."""

    system_prompt: str
    messages: list[ChatMessage]
    tools: list[dict[str, Any]] = Field(default_factory=list)
