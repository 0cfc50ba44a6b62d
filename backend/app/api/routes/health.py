"""Health check endpoints.

- /health: liveness, always 200
- /healthz: component status (directory, tool registry, model transport)
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from backend.app.api.routes.search import get_search_service
from backend.app.llm.client import OpenAIChatModel
from backend.app.services.search import SearchService

router = APIRouter()


def check_directory(service: SearchService) -> tuple[bool, str]:
    """Check that the directory holds users.

    Returns:
        (is_ok, status_message)
    """
    count = len(service.directory.users)
    if count == 0:
        return (False, "empty")
    return (True, f"ok ({count} users)")


def check_tools(service: SearchService) -> tuple[bool, str]:
    """Check that tools are registered.

    Returns:
        (is_ok, status_message)
    """
    count = len(service.registry)
    if count == 0:
        return (False, "no tools registered")
    return (True, f"ok ({count} tools)")


def check_model(service: SearchService) -> tuple[bool, str]:
    """Report which model transport is wired.

    Returns:
        (is_ok, status_message)
    """
    model = service.loop.model
    if isinstance(model, OpenAIChatModel):
        return (True, f"openai:{model.model}")
    return (True, f"stub:{type(model).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(
    service: Annotated[SearchService, Depends(get_search_service)],
) -> dict[str, Any] | Response:
    """Component health check.

    Returns:
        200 with component status if directory and tools are ok
        503 otherwise
    """
    directory_ok, directory_status = check_directory(service)
    tools_ok, tools_status = check_tools(service)
    _, model_status = check_model(service)

    core_ok = directory_ok and tools_ok

    response_body = {
        "status": "ok" if core_ok else "degraded",
        "components": {
            "directory": directory_status,
            "tools": tools_status,
            "model": model_status,
        },
    }

    if not core_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
