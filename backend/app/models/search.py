"""Search request/response models."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.models.directory import User


class SearchRequest(BaseModel):
    """Inbound search request.

    org_id/team_id/user_id are scope hints: they are woven into the prompt and
    org_id is re-applied after decoding. They never pre-filter the directory.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    limit: Annotated[int, Field(ge=0)] = 5
    org_id: int | None = Field(None, alias="orgId")
    team_id: int | None = Field(None, alias="teamId")
    user_id: int | None = Field(None, alias="userId")

    @field_validator("query")
    @classmethod
    def validate_query_not_blank(cls, v: str) -> str:
        """Ensure the query carries some text."""
        if not v.strip():
            raise ValueError("query must not be blank")
        return v


class SearchResponse(BaseModel):
    """HTTP envelope for search results."""

    results: list[User] = Field(default_factory=list, description="Scope-valid users, in model order")
    count: int = Field(..., description="Number of results returned")
