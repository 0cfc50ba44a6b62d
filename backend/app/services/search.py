"""Search service - the inbound boundary of the search pipeline.

query + scope -> contextualizer -> orchestration loop -> decoder
-> scope filter -> first `limit` users
"""

import logging
from datetime import date

from backend.app.config import Settings, get_settings
from backend.app.directory.repository import EntityDirectory
from backend.app.directory.seed import build_seed_directory
from backend.app.llm.client import ChatModel, get_chat_model
from backend.app.models.directory import User
from backend.app.models.search import SearchRequest
from backend.app.orchestration.contextualizer import contextualize
from backend.app.orchestration.decoder import decode
from backend.app.orchestration.errors import SearchError
from backend.app.orchestration.loop import OrchestrationLoop
from backend.app.orchestration.scope import filter_by_scope
from backend.app.orchestration.state import CancelToken, SearchSession
from backend.app.tools.registry import ToolRegistry, build_tool_registry
from backend.app.utils.metrics import search_requests_total, search_rounds

logger = logging.getLogger(__name__)


class SearchService:
    """Resolves natural-language queries into scoped user lists."""

    def __init__(
        self,
        directory: EntityDirectory,
        model: ChatModel,
        settings: Settings | None = None,
        *,
        registry: ToolRegistry | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.directory = directory
        self.registry = registry or build_tool_registry(directory)
        self.loop = OrchestrationLoop(
            model,
            self.registry,
            max_rounds=self.settings.max_tool_rounds,
            model_timeout_seconds=self.settings.llm_timeout_seconds,
            tool_timeout_seconds=self.settings.tool_hard_timeout_ms / 1000,
        )

    async def search(
        self,
        query: str,
        limit: int | None = None,
        org_id: int | None = None,
        team_id: int | None = None,
        user_id: int | None = None,
        *,
        cancel_token: CancelToken | None = None,
        today: date | None = None,
    ) -> list[User]:
        """Run a search.

        Args:
            query: Free-text query
            limit: Maximum number of results (>= 0, default from settings)
            org_id: Organization scope hint; also enforced on the results
            team_id: Team scope hint (prompt only)
            user_id: User scope hint (prompt only)
            cancel_token: Optional cancellation token
            today: Date rendered into the system prompt

        Returns:
            At most `limit` scope-valid users, in the order the model emitted them

        Raises:
            pydantic.ValidationError: Invalid query or limit
            SearchError: Any terminal pipeline failure
        """
        request = SearchRequest(
            query=query,
            limit=self.settings.default_search_limit if limit is None else limit,
            org_id=org_id,
            team_id=team_id,
            user_id=user_id,
        )
        session = SearchSession(
            query=request.query,
            org_id=request.org_id,
            team_id=request.team_id,
            user_id=request.user_id,
        )

        prompt = contextualize(request.query, request.org_id, request.team_id, request.user_id)
        logger.info(f"[search] session={session.session_id} contextualized query: {prompt}")

        try:
            raw_text = await self.loop.run(session, prompt, cancel_token, today=today)
            decoded = decode(raw_text)
        except SearchError as e:
            search_requests_total.labels(outcome=type(e).__name__).inc()
            logger.error(f"[search] session={session.session_id} failed: {e}")
            raise
        finally:
            search_rounds.observe(session.rounds)

        logger.debug(f"[search] session={session.session_id} structured response: {decoded}")

        in_scope = filter_by_scope(decoded, request.org_id)
        results = in_scope[: request.limit]

        search_requests_total.labels(outcome="success").inc()
        logger.info(
            f"[search] session={session.session_id} returned {len(results)} of "
            f"{len(decoded)} decoded user(s)"
        )
        return results


def build_search_service(settings: Settings | None = None) -> SearchService:
    """Wire the seed directory and the configured chat model."""
    settings = settings or get_settings()
    return SearchService(
        directory=build_seed_directory(),
        model=get_chat_model(settings),
        settings=settings,
    )
