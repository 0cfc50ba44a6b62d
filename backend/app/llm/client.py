"""Chat model clients with tool calling.

Security: Reads API key from settings/environment only, never hardcoded.
Provides a deterministic stub when no key is present so the pipeline can run
offline.
"""

import json
import logging
import re
from typing import Any, Protocol

from openai import AsyncOpenAI, OpenAIError

from backend.app.config import Settings, get_settings
from backend.app.models.llm import (
    ChatMessage,
    FinalText,
    ModelRequest,
    ModelResponse,
    ToolCallRequest,
    ToolCallsRequested,
)
from backend.app.orchestration.errors import TransportError

logger = logging.getLogger(__name__)


class ChatModel(Protocol):
    """Protocol for chat model transports."""

    async def complete(self, request: ModelRequest) -> ModelResponse:
        """Submit system prompt, history and tool definitions.

        Args:
            request: Prompt, conversation history and tool definitions

        Returns:
            ToolCallsRequested or FinalText
        """
        ...


def to_openai_messages(system_prompt: str, messages: list[ChatMessage]) -> list[dict[str, Any]]:
    """Convert conversation history into chat completions message dicts."""
    out: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
    for msg in messages:
        if msg.role == "tool":
            out.append({"role": "tool", "tool_call_id": msg.tool_call_id, "content": msg.content or ""})
        elif msg.role == "assistant" and msg.tool_calls:
            out.append(
                {
                    "role": "assistant",
                    "content": msg.content,
                    "tool_calls": [
                        {
                            "id": tc.call_id,
                            "type": "function",
                            "function": {"name": tc.tool_name, "arguments": tc.arguments},
                        }
                        for tc in msg.tool_calls
                    ],
                }
            )
        else:
            out.append({"role": msg.role, "content": msg.content or ""})
    return out


class OpenAIChatModel:
    """OpenAI-backed chat model using function tools."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        base_url: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 2000,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            base_url: Optional OpenAI-compatible endpoint (e.g. a local Ollama server)
            temperature: Sampling temperature
            max_tokens: Completion token cap
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(self, request: ModelRequest) -> ModelResponse:
        """Call chat completions and map the reply onto the tagged response."""
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": to_openai_messages(request.system_prompt, request.messages),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if request.tools:
            kwargs["tools"] = request.tools
            kwargs["tool_choice"] = "auto"

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise TransportError(f"OpenAI API call failed: {type(e).__name__}") from e

        if not response.choices:
            raise TransportError("OpenAI returned no choices")

        message = response.choices[0].message
        if message.tool_calls:
            return ToolCallsRequested(
                calls=[
                    ToolCallRequest(
                        call_id=tc.id,
                        tool_name=tc.function.name,
                        arguments=tc.function.arguments or "{}",
                    )
                    for tc in message.tool_calls
                ]
            )

        return FinalText(text=message.content or "")


# Words that carry no name information in a search query
_STOPWORDS = frozenset(
    {
        "who", "what", "where", "which", "find", "show", "list", "get", "the", "and", "for",
        "with", "within", "from", "about", "user", "users", "team", "teams", "project",
        "projects", "member", "members", "organization", "relevant", "named", "called",
        "mentioned", "mentions", "all", "any", "are", "was", "has", "have",
    }
)
_MAX_STUB_CALLS = 5


class DeterministicStubModel:
    """Deterministic stand-in model for offline use (no API key required).

    First turn: one getUsersByName call per name-like word of the query.
    Next turn: answers with every user found, deduplicated, in call order.
    """

    async def complete(self, request: ModelRequest) -> ModelResponse:
        tool_messages = [m for m in request.messages if m.role == "tool"]
        if tool_messages:
            return FinalText(text=self._answer(tool_messages))

        query = next((m.content or "" for m in request.messages if m.role == "user"), "")
        terms = self._terms(query)
        if not terms:
            return FinalText(text=json.dumps({"items": []}))

        return ToolCallsRequested(
            calls=[
                ToolCallRequest(
                    call_id=f"stub-{i}",
                    tool_name="getUsersByName",
                    arguments=json.dumps({"name": term}),
                )
                for i, term in enumerate(terms)
            ]
        )

    def _terms(self, query: str) -> list[str]:
        # Scope clauses are appended after the query text; only the query part names people
        text = re.split(r" within organization ID | for team ID | relevant to user ID ", query)[0]
        terms: list[str] = []
        for word in re.findall(r"[A-Za-z][A-Za-z.'-]+", text):
            lowered = word.lower().strip(".'-")
            if len(lowered) < 3 or lowered in _STOPWORDS or lowered in terms:
                continue
            terms.append(lowered)
        return terms[:_MAX_STUB_CALLS]

    def _answer(self, tool_messages: list[ChatMessage]) -> str:
        seen: set[int] = set()
        items: list[dict[str, Any]] = []
        for msg in tool_messages:
            try:
                payload = json.loads(msg.content or "null")
            except json.JSONDecodeError:
                continue
            records = payload if isinstance(payload, list) else [payload]
            for record in records:
                if isinstance(record, dict) and "userId" in record and "email" in record:
                    if record["userId"] not in seen:
                        seen.add(record["userId"])
                        items.append(record)
        return json.dumps({"items": items})


def get_chat_model(settings: Settings | None = None) -> ChatModel:
    """Factory function to get appropriate chat model based on config.

    Returns:
        OpenAIChatModel if API key is configured, DeterministicStubModel otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info(f"Using OpenAI chat model {settings.openai_model}")
        return OpenAIChatModel(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    logger.warning("No OpenAI API key configured, using deterministic stub model")
    return DeterministicStubModel()
