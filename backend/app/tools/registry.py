"""Tool registry - named lookup tools exposed to the model.

Each tool binds a name, a description, a declared input model (pydantic) and a
handler. Payloads are validated against the input model at dispatch time.
"""

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from backend.app.directory.repository import EntityDirectory
from backend.app.models.tools import (
    JsonValue,
    NameInput,
    ProjectNameInput,
    TeamNameInput,
    ToolInput,
    UserIdInput,
)
from backend.app.orchestration.errors import ToolArgumentDecodingError, UnknownToolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDefinition:
    """A callable tool as declared to the model."""

    name: str
    description: str
    input_model: type[ToolInput]
    handler: Callable[[Any], Any]

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the declared input."""
        return self.input_model.model_json_schema()

    def to_openai(self) -> dict[str, Any]:
        """Function-tool definition in chat completions format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


def to_json_value(value: Any) -> JsonValue:
    """Convert a handler result into JSON-ready data (camelCase aliases)."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list | tuple):
        return [to_json_value(v) for v in value]
    return value


class ToolRegistry:
    """Registry keyed by tool name."""

    def __init__(self, tools: Iterable[ToolDefinition] = ()) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolDefinition) -> None:
        """Add a tool; names must be unique."""
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDefinition:
        """Look up a tool by name.

        Raises:
            UnknownToolError: No tool registered under this name
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def definitions(self) -> list[dict[str, Any]]:
        """All tool definitions in registration order."""
        return [tool.to_openai() for tool in self._tools.values()]

    def parse_arguments(self, name: str, arguments: str | Mapping[str, Any] | None) -> ToolInput:
        """Deserialize a raw argument payload against the tool's declared input.

        Raises:
            UnknownToolError: Tool not registered
            ToolArgumentDecodingError: Payload cannot be mapped to the input model
        """
        tool = self.get(name)

        if arguments is None or (isinstance(arguments, str) and not arguments.strip()):
            data: Any = {}
        elif isinstance(arguments, str):
            try:
                data = json.loads(arguments)
            except json.JSONDecodeError as e:
                raise ToolArgumentDecodingError(name, f"payload is not valid JSON ({e.msg})") from e
        else:
            data = dict(arguments)

        if not isinstance(data, dict):
            raise ToolArgumentDecodingError(name, "payload must be a JSON object")

        try:
            return tool.input_model.model_validate(data)
        except ValidationError as e:
            raise ToolArgumentDecodingError(name, str(e)) from e

    def dispatch(self, name: str, arguments: str | Mapping[str, Any] | None) -> JsonValue:
        """Validate the payload and invoke the tool's handler.

        Returns:
            JSON-ready handler result

        Raises:
            UnknownToolError: Tool not registered
            ToolArgumentDecodingError: Payload cannot be mapped to the input model
        """
        payload = self.parse_arguments(name, arguments)
        logger.debug(f"Calling {name} with {payload.model_dump()}")
        result = self._tools[name].handler(payload)
        return to_json_value(result)


def build_tool_registry(directory: EntityDirectory) -> ToolRegistry:
    """Build the fixed lookup tool set over a directory."""

    def get_user_by_user_id(payload: UserIdInput) -> Any:
        return directory.get_user_by_user_id(payload.userId)

    def get_users_by_name(payload: NameInput) -> Any:
        return directory.get_users_by_name(payload.name)

    def get_project_members_by_project_name(payload: ProjectNameInput) -> Any:
        return directory.get_project_members_by_project_name(payload.projectName)

    def get_team_members_by_team_name(payload: TeamNameInput) -> Any:
        return directory.get_team_members_by_team_name(payload.teamName)

    def get_mentions_by_user(payload: UserIdInput) -> Any:
        return directory.get_mentions_by_user(payload.userId)

    return ToolRegistry(
        [
            ToolDefinition(
                name="getUserByUserId",
                description="Get user by userId",
                input_model=UserIdInput,
                handler=get_user_by_user_id,
            ),
            ToolDefinition(
                name="getUsersByName",
                description="Get users whose name or email contains the given text",
                input_model=NameInput,
                handler=get_users_by_name,
            ),
            ToolDefinition(
                name="getProjectMembersByProjectName",
                description="Get project members by project name",
                input_model=ProjectNameInput,
                handler=get_project_members_by_project_name,
            ),
            ToolDefinition(
                name="getTeamMembersByTeamName",
                description="Get team members by team name",
                input_model=TeamNameInput,
                handler=get_team_members_by_team_name,
            ),
            ToolDefinition(
                name="getMentionsByUser",
                description="Get all mention history entries authored by the given user",
                input_model=UserIdInput,
                handler=get_mentions_by_user,
            ),
        ]
    )
