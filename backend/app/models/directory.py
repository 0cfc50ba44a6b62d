"""Directory entity models - users, teams, projects, mentions.

Wire names are camelCase to match what the model sees in tool results and
what it is asked to emit; Python attributes stay snake_case.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class DirectoryModel(BaseModel):
    """Base for immutable directory records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class User(DirectoryModel):
    """Identity record. user_id is the identity key across the directory."""

    user_id: int = Field(..., alias="userId", description="Unique user identifier")
    name: str = Field(..., description="Display name, e.g. 'John Doe'")
    email: str = Field(..., description="Work email address")
    team_id: int = Field(..., alias="teamId", description="Team the user belongs to")
    org_id: int = Field(..., alias="orgId", description="Organization the user belongs to")


class Team(DirectoryModel):
    """Team record; membership is derived from User.team_id."""

    team_id: int = Field(..., alias="teamId")
    name: str


class Project(DirectoryModel):
    """Project with an ordered list of member user ids."""

    name: str
    member_user_ids: tuple[int, ...] = Field(default_factory=tuple, alias="memberUserIds")


class MentionHistory(DirectoryModel):
    """Append-only log entry: user_id mentioned mentioned_user_id on a date."""

    user_id: int = Field(..., alias="userId")
    mentioned_user_id: int = Field(..., alias="mentionedUserId")
    occurred_on: date = Field(..., alias="occurredOn")
