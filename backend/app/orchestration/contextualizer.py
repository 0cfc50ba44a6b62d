"""Query contextualizer - folds scope hints into the query text."""


def contextualize(
    query: str,
    org_id: int | None = None,
    team_id: int | None = None,
    user_id: int | None = None,
) -> str:
    """Append scope clauses for the hints that are present.

    Clauses always appear in org, team, user order so identical inputs give
    identical prompts.

    Example:
        >>> contextualize("find bob", org_id=1)
        'find bob within organization ID 1'
    """
    parts = [query]
    if org_id is not None:
        parts.append(f" within organization ID {org_id}")
    if team_id is not None:
        parts.append(f" for team ID {team_id}")
    if user_id is not None:
        parts.append(f" relevant to user ID {user_id}")
    return "".join(parts)
