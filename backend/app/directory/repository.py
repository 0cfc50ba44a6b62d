"""In-memory entity directory over users, teams, projects and mentions.

Read-only after construction. Lookups are exact or case-insensitive substring
matches; no ranking.
"""

from collections.abc import Iterable

from backend.app.models.directory import MentionHistory, Project, Team, User


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


class EntityDirectory:
    """Immutable lookup surface used by the tool registry."""

    def __init__(
        self,
        users: Iterable[User],
        teams: Iterable[Team] = (),
        projects: Iterable[Project] = (),
        mentions: Iterable[MentionHistory] = (),
    ) -> None:
        self._users: tuple[User, ...] = tuple(users)
        self._teams: tuple[Team, ...] = tuple(teams)
        self._projects: tuple[Project, ...] = tuple(projects)
        self._mentions: tuple[MentionHistory, ...] = tuple(mentions)

        self._users_by_id: dict[int, User] = {}
        for user in self._users:
            if user.user_id in self._users_by_id:
                raise ValueError(f"Duplicate userId in directory: {user.user_id}")
            self._users_by_id[user.user_id] = user

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    @property
    def teams(self) -> tuple[Team, ...]:
        return self._teams

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._projects

    @property
    def mentions(self) -> tuple[MentionHistory, ...]:
        return self._mentions

    # Users

    def get_user_by_user_id(self, user_id: int) -> User | None:
        """Return the user with this id, or None."""
        return self._users_by_id.get(user_id)

    def get_users_by_name(self, name: str) -> list[User]:
        """Case-insensitive substring match on name OR email, directory order."""
        return [u for u in self._users if _contains(u.name, name) or _contains(u.email, name)]

    def get_users_by_team_id(self, team_id: int) -> list[User]:
        return [u for u in self._users if u.team_id == team_id]

    # Teams

    def get_team_name_by_id(self, team_id: int) -> str | None:
        for team in self._teams:
            if team.team_id == team_id:
                return team.name
        return None

    def get_team_members_by_team_name(self, team_name: str) -> list[User]:
        """Users of every team whose name contains team_name, in team order."""
        members: list[User] = []
        for team in self._teams:
            if _contains(team.name, team_name):
                members.extend(self.get_users_by_team_id(team.team_id))
        return members

    # Projects

    def find_member_ids_by_project_name(self, project_name: str) -> list[int]:
        """Member ids of the project with exactly this name; empty if none."""
        for project in self._projects:
            if project.name == project_name:
                return list(project.member_user_ids)
        return []

    def get_project_members_by_project_name(self, project_name: str) -> list[User]:
        """Members of every project whose name contains project_name.

        Matches are concatenated in project declaration order, members in
        their declared order. Ids with no matching user are skipped.
        """
        members: list[User] = []
        for project in self._projects:
            if not _contains(project.name, project_name):
                continue
            for member_id in project.member_user_ids:
                user = self._users_by_id.get(member_id)
                if user is not None:
                    members.append(user)
        return members

    # Mentions

    def get_mentions_by_user(self, user_id: int) -> list[MentionHistory]:
        """All mentions authored by user_id, log order."""
        return [m for m in self._mentions if m.user_id == user_id]
