"""Task domain models.

Pure domain models for a case's task tree. Uses Pydantic for
serialization compatibility with storage and the API.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# Root tasks sit at depth 0. A node may be created at depth MAX_NESTING_DEPTH
# but not below it.
MAX_NESTING_DEPTH = 10


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(UTC)


class TaskStatus(str, Enum):
    """Status of a task (also used for cases)."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


TEAM_NAMES: dict[str, str] = {
    "PROPERTY_MANAGEMENT_DE": "Property Management - DE",
    "PROPERTY_MANAGEMENT_AT": "Property Management - AT",
    "GUEST_COMM_DE": "Guest Comm - DE",
    "GUEST_COMM_AT": "Guest Comm - AT",
    "GUEST_EXPERIENCE": "Guest Experience",
    "FINOPS": "FinOps",
}


def format_team(team: str | None) -> str:
    """Return the display name of a team code."""
    if not team:
        return "No Team"
    if team in TEAM_NAMES:
        return TEAM_NAMES[team]
    parts = team.split("_")
    last = parts[-1]
    if len(parts) > 1 and len(last) == 2 and last.isupper():
        return " ".join(p.capitalize() for p in parts[:-1]) + f" - {last}"
    return " ".join(p.capitalize() for p in parts)


class Task(BaseModel):
    """A node in a case's task tree.

    A task owns its subtasks exclusively; operations in this package
    return copies instead of sharing subtask lists between parents.
    ``team`` and ``assigned_to`` are carried through but never
    interpreted by the tree logic.
    """

    id: str
    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    team: str | None = None
    assigned_to: str | None = None
    subtasks: list["Task"] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
