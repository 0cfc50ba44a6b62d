"""Unit tests for the query contextualizer."""

from backend.app.orchestration.contextualizer import contextualize


def test_no_hints_returns_query_unchanged() -> None:
    assert contextualize("find bob") == "find bob"


def test_org_hint_appends_org_clause() -> None:
    assert contextualize("find bob", org_id=1) == "find bob within organization ID 1"


def test_team_hint_only() -> None:
    assert contextualize("find bob", team_id=7) == "find bob for team ID 7"


def test_user_hint_only() -> None:
    assert contextualize("find bob", user_id=42) == "find bob relevant to user ID 42"


def test_all_hints_in_org_team_user_order() -> None:
    """Clauses follow org -> team -> user regardless of argument order."""
    result = contextualize("find bob", user_id=3, team_id=2, org_id=1)

    assert result == (
        "find bob within organization ID 1 for team ID 2 relevant to user ID 3"
    )
    assert result.index("organization") < result.index("team") < result.index("user")


def test_zero_is_a_present_hint() -> None:
    """Only None means absent."""
    assert contextualize("q", org_id=0) == "q within organization ID 0"


def test_contextualize_is_deterministic() -> None:
    first = contextualize("who is on Mars", org_id=10, team_id=1)
    second = contextualize("who is on Mars", org_id=10, team_id=1)
    assert first == second
