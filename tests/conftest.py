"""Shared pytest fixtures for all test suites."""

import pytest

from backend.app.config import Settings
from backend.app.directory.repository import EntityDirectory
from backend.app.directory.seed import build_seed_directory
from backend.app.tools.registry import ToolRegistry, build_tool_registry
from tests.helpers import SEED_TODAY


@pytest.fixture
def directory() -> EntityDirectory:
    """Seed directory with mentions dated relative to a fixed day."""
    return build_seed_directory(today=SEED_TODAY)


@pytest.fixture
def registry(directory: EntityDirectory) -> ToolRegistry:
    """Fixed lookup tool set over the seed directory."""
    return build_tool_registry(directory)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment and .env files."""
    return Settings(
        _env_file=None,
        openai_api_key=None,
        max_tool_rounds=3,
        llm_timeout_seconds=1.0,
        tool_hard_timeout_ms=1000,
    )
