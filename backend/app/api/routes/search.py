"""Search endpoint - GET /api/search."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from backend.app.models.search import SearchResponse
from backend.app.orchestration.errors import SearchError, TransportError
from backend.app.services.search import SearchService, build_search_service

router = APIRouter(prefix="/api", tags=["search"])
logger = logging.getLogger(__name__)


@lru_cache
def get_search_service() -> SearchService:
    """Process-wide search service (seed directory is read-only)."""
    return build_search_service()


@router.get("/search", response_model=SearchResponse, status_code=status.HTTP_200_OK)
async def search(
    service: Annotated[SearchService, Depends(get_search_service)],
    query: Annotated[str, Query(min_length=1)],
    limit: Annotated[int | None, Query(ge=0)] = None,
    org_id: Annotated[int | None, Query(alias="orgId")] = None,
    team_id: Annotated[int | None, Query(alias="teamId")] = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
) -> SearchResponse:
    """Search users with a natural-language query.

    Args:
        service: Search service
        query: Free-text query, e.g. "who is on the Mars project"
        limit: Maximum number of results (default from settings)
        org_id: Organization scope (enforced on results)
        team_id: Team scope hint
        user_id: User scope hint

    Returns:
        SearchResponse with scope-valid users

    Raises:
        HTTPException: 422 for a blank query, 503 if the model is unavailable,
            500 for other failures
    """
    logger.info(
        f"[GET /api/search] query={query!r}, limit={limit}, orgId={org_id}, "
        f"teamId={team_id}, userId={user_id}"
    )

    try:
        results = await service.search(
            query, limit=limit, org_id=org_id, team_id=team_id, user_id=user_id
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
    except TransportError as e:
        logger.error(f"[GET /api/search] model unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search model is unavailable",
        ) from e
    except SearchError as e:
        logger.error(f"[GET /api/search] failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred during the search operation",
        ) from e

    return SearchResponse(results=results, count=len(results))
