"""Orchestration loop - relays messages between the model and the tool registry.

States: awaiting_model -> tool_call_pending -> awaiting_model (repeat)
        -> final_response_received (terminal)

The loop does not rank, filter or interpret tool output. It stops on the
first final text, or fails once the round budget is spent.
"""

import asyncio
import logging
from datetime import date

from backend.app.llm.client import ChatModel
from backend.app.models.llm import ChatMessage, FinalText, ModelRequest, ModelResponse, ToolCallsRequested
from backend.app.orchestration.decoder import format_instructions
from backend.app.orchestration.errors import RoundLimitExceededError, SearchError, TransportError
from backend.app.orchestration.prompts import build_system_prompt
from backend.app.orchestration.state import CancelToken, SearchSession
from backend.app.orchestration.tools import run_tool
from backend.app.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class OrchestrationLoop:
    """Drives one search session against a chat model."""

    def __init__(
        self,
        model: ChatModel,
        registry: ToolRegistry,
        *,
        max_rounds: int = 5,
        model_timeout_seconds: float = 30.0,
        tool_timeout_seconds: float = 4.0,
    ) -> None:
        """Initialize loop.

        Args:
            model: Chat model transport
            registry: Tools exposed to the model
            max_rounds: Maximum number of model submissions per session
            model_timeout_seconds: Timeout for each model call
            tool_timeout_seconds: Hard timeout for each tool dispatch
        """
        if max_rounds < 1:
            raise ValueError("max_rounds must be >= 1")
        self._model = model
        self._registry = registry
        self._max_rounds = max_rounds
        self._model_timeout = model_timeout_seconds
        self._tool_timeout = tool_timeout_seconds

    @property
    def model(self) -> ChatModel:
        return self._model

    async def run(
        self,
        session: SearchSession,
        user_message: str,
        cancel_token: CancelToken | None = None,
        *,
        today: date | None = None,
    ) -> str:
        """Run the session to a final answer.

        Args:
            session: Fresh session state (messages are appended to it)
            user_message: Contextualized query text
            cancel_token: Stops further submissions when cancelled
            today: Date rendered into the system prompt (default: today)

        Returns:
            Raw final text from the model

        Raises:
            TransportError: Model call failed or timed out
            RoundLimitExceededError: No final text within max_rounds submissions
            SearchCancelledError: Cancelled before completion
        """
        cancel_token = cancel_token or CancelToken()
        system_prompt = build_system_prompt(format_instructions(), today)
        tools = self._registry.definitions()
        session.messages.append(ChatMessage(role="user", content=user_message))

        try:
            while True:
                if session.rounds >= self._max_rounds:
                    raise RoundLimitExceededError(self._max_rounds)

                # Checked per submission only; tool calls of a round already answered still run
                cancel_token.throw_if_cancelled()
                session.rounds += 1
                session.transition("awaiting_model")

                response = await self._submit(
                    ModelRequest(system_prompt=system_prompt, messages=session.messages, tools=tools)
                )

                if isinstance(response, FinalText):
                    session.final_text = response.text
                    session.transition("final_response_received")
                    logger.info(
                        f"[search] session={session.session_id} final answer after "
                        f"{session.rounds} round(s), {len(session.tool_calls)} tool call(s)"
                    )
                    return response.text

                if isinstance(response, ToolCallsRequested):
                    session.transition("tool_call_pending")
                    await self._run_tool_calls(session, response)
                    continue

                raise TypeError(f"Unexpected model response: {type(response).__name__}")

        except SearchError:
            session.transition("cancelled" if cancel_token.cancelled else "failed")
            raise

    async def _submit(self, request: ModelRequest) -> ModelResponse:
        try:
            return await asyncio.wait_for(self._model.complete(request), timeout=self._model_timeout)
        except TransportError:
            raise
        except TimeoutError as e:
            raise TransportError(f"Model call timed out after {self._model_timeout}s") from e
        except Exception as e:
            logger.error(f"Model call failed: {type(e).__name__}: {e}")
            raise TransportError(f"Model call failed: {type(e).__name__}") from e

    async def _run_tool_calls(self, session: SearchSession, response: ToolCallsRequested) -> None:
        logger.info(
            f"[search] session={session.session_id} round={session.rounds} "
            f"tools={[c.tool_name for c in response.calls]}"
        )
        session.messages.append(ChatMessage(role="assistant", tool_calls=response.calls))

        # Independent calls; gather keeps the model's call order
        tool_messages = await asyncio.gather(
            *(
                run_tool(
                    call=call,
                    registry=self._registry,
                    session=session,
                    timeout_seconds=self._tool_timeout,
                )
                for call in response.calls
            )
        )
        session.messages.extend(tool_messages)
