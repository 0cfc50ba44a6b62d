"""Unit tests for the search service pipeline."""

import json
from datetime import date

import pytest
from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.directory.repository import EntityDirectory
from backend.app.llm.client import DeterministicStubModel
from backend.app.models.llm import FinalText
from backend.app.orchestration.errors import OutputDecodingError, RoundLimitExceededError
from backend.app.services.search import SearchService, build_search_service
from tests.helpers import SEED_TODAY, ScriptedChatModel, final_users, tool_calls


def _user_json(directory: EntityDirectory, user_id: int) -> dict:
    return directory.get_user_by_user_id(user_id).model_dump(by_alias=True)


@pytest.fixture
def mars_model(directory: EntityDirectory) -> ScriptedChatModel:
    """Model that looks up the Mars project and lists its members."""
    return ScriptedChatModel(
        [
            tool_calls(("call-1", "getProjectMembersByProjectName", {"projectName": "Mars"})),
            final_users(*(_user_json(directory, uid) for uid in (3, 1, 2))),
        ]
    )


class TestSearch:
    """End-to-end pipeline with a scripted model."""

    @pytest.mark.asyncio
    async def test_mars_project_members(
        self, directory: EntityDirectory, mars_model: ScriptedChatModel, settings: Settings
    ) -> None:
        service = SearchService(directory, mars_model, settings)

        results = await service.search("who is on the Mars project", today=SEED_TODAY)

        assert [u.user_id for u in results] == [3, 1, 2]
        assert [u.name for u in results] == ["Robert Brown", "John Doe", "Jane Smith"]

    @pytest.mark.asyncio
    async def test_limit_truncates_in_model_order(
        self, directory: EntityDirectory, mars_model: ScriptedChatModel, settings: Settings
    ) -> None:
        service = SearchService(directory, mars_model, settings)

        results = await service.search("who is on the Mars project", limit=2)

        assert [u.user_id for u in results] == [3, 1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 1, 3, 10])
    async def test_result_count_never_exceeds_limit(
        self, directory: EntityDirectory, mars_model: ScriptedChatModel, settings: Settings, limit: int
    ) -> None:
        service = SearchService(directory, mars_model, settings)

        results = await service.search("Mars", limit=limit)

        assert len(results) == min(limit, 3)

    @pytest.mark.asyncio
    async def test_org_scope_drops_out_of_org_users(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        model = ScriptedChatModel(
            [final_users(*(_user_json(directory, uid) for uid in (7, 1, 26, 2)))]
        )
        service = SearchService(directory, model, settings)

        results = await service.search("everyone", org_id=10)

        assert [u.user_id for u in results] == [1, 2]

    @pytest.mark.asyncio
    async def test_scope_hints_reach_the_model(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        model = ScriptedChatModel([final_users()])
        service = SearchService(directory, model, settings)

        await service.search("john", org_id=10, team_id=1, user_id=2, today=date(2025, 1, 2))

        request = model.requests[0]
        assert request.messages[0].content == (
            "john within organization ID 10 for team ID 1 relevant to user ID 2"
        )
        assert "Today is 2025-01-02." in request.system_prompt

    @pytest.mark.asyncio
    async def test_fenced_final_answer_is_decoded(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        body = json.dumps({"users": [_user_json(directory, 5)]})
        model = ScriptedChatModel([FinalText(text=f"```json\n{body}\n```")])
        service = SearchService(directory, model, settings)

        [user] = await service.search("michael")

        assert user.email == "michael.wilson@techhub.com"


class TestSearchFailures:
    """Terminal failures propagate out of the service."""

    @pytest.mark.asyncio
    async def test_prose_answer_raises_output_decoding_error(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        model = ScriptedChatModel([FinalText(text="No user found.")])
        service = SearchService(directory, model, settings)

        with pytest.raises(OutputDecodingError) as exc_info:
            await service.search("nobody")

        assert exc_info.value.raw_text == "No user found."

    @pytest.mark.asyncio
    async def test_round_limit_from_settings(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        model = ScriptedChatModel([tool_calls(("c", "getUsersByName", {"name": "a"}))])
        service = SearchService(directory, model, settings)

        with pytest.raises(RoundLimitExceededError):
            await service.search("spin")

        assert len(model.requests) == settings.max_tool_rounds

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query_rejected(
        self, directory: EntityDirectory, settings: Settings, query: str
    ) -> None:
        model = ScriptedChatModel([final_users()])
        service = SearchService(directory, model, settings)

        with pytest.raises(ValidationError):
            await service.search(query)

        assert model.requests == []

    @pytest.mark.asyncio
    async def test_negative_limit_rejected(
        self, directory: EntityDirectory, settings: Settings
    ) -> None:
        service = SearchService(directory, ScriptedChatModel([final_users()]), settings)

        with pytest.raises(ValidationError):
            await service.search("john", limit=-1)


class TestOffline:
    """Pipeline wired with the deterministic stub model."""

    @pytest.mark.asyncio
    async def test_stub_model_end_to_end(self, directory: EntityDirectory, settings: Settings) -> None:
        service = SearchService(directory, DeterministicStubModel(), settings)

        results = await service.search("Who is John?", org_id=10)

        assert [u.user_id for u in results] == [1, 6]

    def test_build_search_service_without_api_key(self, settings: Settings) -> None:
        service = build_search_service(settings)

        assert isinstance(service.loop.model, DeterministicStubModel)
        assert len(service.directory.users) == 30
        assert len(service.registry) == 5


@pytest.mark.asyncio
async def test_default_limit_comes_from_settings(
    directory: EntityDirectory, mars_model: ScriptedChatModel, settings: Settings
) -> None:
    settings = settings.model_copy(update={"default_search_limit": 1})
    service = SearchService(directory, mars_model, settings)

    results = await service.search("Mars")

    assert [u.user_id for u in results] == [3]
