"""Unit tests for the tool registry."""

import json

import pytest

from backend.app.models.tools import NameInput, UserIdInput
from backend.app.orchestration.errors import (
    DecodingError,
    ToolArgumentDecodingError,
    UnknownToolError,
)
from backend.app.tools.registry import ToolDefinition, ToolRegistry

EXPECTED_TOOLS = [
    "getUserByUserId",
    "getUsersByName",
    "getProjectMembersByProjectName",
    "getTeamMembersByTeamName",
    "getMentionsByUser",
]


class TestDefinitions:
    """Tool declarations sent to the model."""

    def test_registry_exposes_fixed_tool_set(self, registry: ToolRegistry) -> None:
        assert registry.names == EXPECTED_TOOLS
        assert len(registry) == 5

    def test_definitions_use_function_tool_format(self, registry: ToolRegistry) -> None:
        definitions = registry.definitions()

        assert [d["function"]["name"] for d in definitions] == EXPECTED_TOOLS
        for d in definitions:
            assert d["type"] == "function"
            assert d["function"]["description"]
            assert d["function"]["parameters"]["type"] == "object"

    def test_input_schema_declares_camel_case_fields(self, registry: ToolRegistry) -> None:
        schema = registry.get("getProjectMembersByProjectName").input_schema

        assert schema["required"] == ["projectName"]
        assert schema["properties"]["projectName"]["type"] == "string"

    def test_duplicate_tool_name_rejected(self) -> None:
        tool = ToolDefinition(
            name="echo", description="Echo", input_model=NameInput, handler=lambda p: p.name
        )
        registry = ToolRegistry([tool])

        with pytest.raises(ValueError, match="already registered"):
            registry.register(tool)


class TestDispatch:
    """Dispatching raw payloads."""

    def test_get_users_by_name_matches_name_and_email(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getUsersByName", '{"name": "john"}')

        assert isinstance(result, list)
        names = [u["name"] for u in result]
        assert "John Doe" in names
        # matched through the email s.johnson@techhub.com
        assert "Sarah Johnson" in names

    def test_results_use_camel_case_keys(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getUserByUserId", {"userId": 1})

        assert result == {
            "userId": 1,
            "name": "John Doe",
            "email": "john@techhub.com",
            "teamId": 1,
            "orgId": 10,
        }

    def test_get_user_by_unknown_id_returns_null(self, registry: ToolRegistry) -> None:
        assert registry.dispatch("getUserByUserId", '{"userId": 999}') is None

    def test_project_members_in_declared_order(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getProjectMembersByProjectName", '{"projectName": "Mars"}')
        assert [u["userId"] for u in result] == [3, 1, 2]

    def test_team_members_by_team_name(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getTeamMembersByTeamName", '{"teamName": "beta"}')
        assert [u["userId"] for u in result] == [5, 6]

    def test_mentions_serialize_dates_as_iso(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getMentionsByUser", '{"userId": 2}')

        assert [m["mentionedUserId"] for m in result] == [5, 6]
        assert result[0]["occurredOn"] == "2025-06-09"
        json.dumps(result)  # JSON-ready

    def test_numeric_string_user_id_is_coerced(self, registry: ToolRegistry) -> None:
        result = registry.dispatch("getUserByUserId", '{"userId": "2"}')
        assert result["name"] == "Jane Smith"

    def test_empty_payload_reads_as_empty_object(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError, match="getUsersByName"):
            registry.dispatch("getUsersByName", "")


class TestDispatchErrors:
    """Payloads that cannot be mapped and unknown tools."""

    def test_unknown_tool(self, registry: ToolRegistry) -> None:
        with pytest.raises(UnknownToolError) as exc_info:
            registry.dispatch("deleteUser", '{"userId": 1}')
        assert exc_info.value.tool_name == "deleteUser"

    def test_malformed_json(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError, match="not valid JSON"):
            registry.dispatch("getUsersByName", '{"name": ')

    def test_payload_not_an_object(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError, match="JSON object"):
            registry.dispatch("getUsersByName", '["john"]')

    def test_missing_field(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError):
            registry.dispatch("getUserByUserId", '{"id": 1}')

    def test_wrong_type(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError):
            registry.dispatch("getUserByUserId", '{"userId": "one"}')

    def test_unexpected_extra_field(self, registry: ToolRegistry) -> None:
        with pytest.raises(ToolArgumentDecodingError):
            registry.dispatch("getUsersByName", '{"name": "john", "orgId": 10}')

    def test_argument_errors_are_decoding_errors(self, registry: ToolRegistry) -> None:
        with pytest.raises(DecodingError):
            registry.dispatch("getUserByUserId", "not json")

    def test_parse_arguments_returns_declared_input(self, registry: ToolRegistry) -> None:
        payload = registry.parse_arguments("getMentionsByUser", '{"userId": 26}')
        assert isinstance(payload, UserIdInput)
        assert payload.userId == 26
