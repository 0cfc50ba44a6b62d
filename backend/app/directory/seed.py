"""Seed data for the entity directory (dev/demo dataset)."""

from datetime import date, timedelta

from backend.app.directory.repository import EntityDirectory
from backend.app.models.directory import MentionHistory, Project, Team, User

# (userId, name, email, teamId, orgId)
SEED_USERS: list[tuple[int, str, str, int, int]] = [
    (1, "John Doe", "john@techhub.com", 1, 10),
    (2, "Jane Smith", "jane.s@techhub.com", 1, 10),
    (3, "Robert Brown", "robert.brown@techhub.com", 1, 10),
    (4, "Emily Davis", "emily.davis@techhub.com", 1, 10),
    (5, "Michael Wilson", "michael.wilson@techhub.com", 2, 10),
    (6, "Sarah Johnson", "s.johnson@techhub.com", 2, 10),
    (7, "David Lee", "david.lee@globalcorp.com", 3, 20),
    (8, "Lisa Chen", "lisa.chen@globalcorp.com", 3, 20),
    (9, "James Taylor", "j.taylor@globalcorp.com", 3, 20),
    (10, "Emma White", "emma.white@globalcorp.com", 3, 20),
    (11, "Daniel Kim", "daniel.kim@globalcorp.com", 4, 20),
    (12, "Olivia Brown", "olivia.br@globalcorp.com", 4, 20),
    (13, "William Garcia", "william.garcia@globalcorp.com", 4, 20),
    (14, "Sophia Martinez", "sophia.martinez@innovatesoft.net", 5, 30),
    (15, "Alexander Rodriguez", "alexander.rodriguez@innovatesoft.net", 5, 30),
    (16, "Isabella Lopez", "isabella.lopez@innovatesoft.net", 5, 30),
    (17, "Ethan Hernandez", "ethan.hernandez@innovatesoft.net", 5, 30),
    (18, "Mia Gonzalez", "mia.gonzalez@innovatesoft.net", 5, 30),
    (19, "Benjamin Perez", "benjamin.perez@innovatesoft.net", 5, 30),
    (20, "Ava Sanchez", "ava.sanchez@innovatesoft.org", 5, 30),
    (21, "Christopher Torres", "christopher.torres@datawave.org", 6, 40),
    (22, "Amelia Flores", "amelia.flores@datawave.org", 6, 40),
    (23, "Matthew Ramirez", "matthew@datawave.org", 6, 40),
    (24, "Evelyn Rivera", "evelyn@datawave.org", 6, 40),
    (25, "Andrew Morales", "andrew.morales@datawave.org", 6, 40),
    (26, "Charlotte Ortiz", "charlotte.ortiz@nexustech.io", 7, 50),
    (27, "Joseph Cruz", "joseph.cruz@nexustech.io", 7, 50),
    (28, "Abigail Reyes", "abigail.rey@nexustech.io", 7, 50),
    (29, "Ryan Phillips", "ryan@nexustech.io", 7, 50),
    (30, "Elizabeth Campbell", "elizabeth.cam@nexustech.io", 7, 50),
]

SEED_TEAMS: dict[int, str] = {1: "Alpha", 2: "Beta"}

SEED_PROJECTS: dict[str, list[int]] = {
    "Mars": [3, 1, 2],
    "Eagle Eye": [4, 5],
}

# (userId, mentionedUserId, days ago)
SEED_MENTIONS: list[tuple[int, int, int]] = [
    (1, 2, 1),
    (1, 3, 2),
    (1, 5, 2),
    (2, 5, 1),
    (2, 6, 14),
    (26, 26, 2),
    (26, 27, 2),
    (26, 28, 2),
]


def build_seed_directory(today: date | None = None) -> EntityDirectory:
    """Build the demo directory.

    Args:
        today: Reference date for mention timestamps (default: date.today())

    Returns:
        EntityDirectory populated with the seed dataset
    """
    today = today or date.today()

    users = [
        User(user_id=uid, name=name, email=email, team_id=team_id, org_id=org_id)
        for uid, name, email, team_id, org_id in SEED_USERS
    ]
    teams = [Team(team_id=tid, name=name) for tid, name in SEED_TEAMS.items()]
    projects = [
        Project(name=name, member_user_ids=tuple(member_ids))
        for name, member_ids in SEED_PROJECTS.items()
    ]
    mentions = [
        MentionHistory(
            user_id=uid,
            mentioned_user_id=mentioned,
            occurred_on=today - timedelta(days=days_ago),
        )
        for uid, mentioned, days_ago in SEED_MENTIONS
    ]

    return EntityDirectory(users=users, teams=teams, projects=projects, mentions=mentions)
