"""Scope filter - re-validates decoded users against the declared org scope."""

import logging

from backend.app.models.directory import User
from backend.app.utils.metrics import search_scope_mismatch_total

logger = logging.getLogger(__name__)


def filter_by_scope(users: list[User], org_id: int | None = None) -> list[User]:
    """Keep users inside the declared organization, preserving order.

    The model's own claims about scope are not trusted. Out-of-scope users are
    dropped and reported, never treated as a request failure.

    Args:
        users: Decoded users in model order
        org_id: Declared organization scope (None = no restriction)

    Returns:
        Users whose org_id matches, in input order
    """
    if org_id is None:
        return list(users)

    in_scope = [u for u in users if u.org_id == org_id]

    dropped = len(users) - len(in_scope)
    if dropped:
        search_scope_mismatch_total.inc(dropped)
        logger.warning(
            f"Model returned {dropped} user(s) outside organization {org_id}",
            extra={
                "structured": {
                    "org_id": org_id,
                    "dropped_user_ids": [u.user_id for u in users if u.org_id != org_id],
                }
            },
        )

    return in_scope
