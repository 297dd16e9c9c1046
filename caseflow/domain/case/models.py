"""Case domain models.

A case is the container that owns a list of root task trees. These are
pure data structures with no I/O or side effects.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from caseflow.domain.task.models import Task, TaskStatus, utc_now


class Case(BaseModel):
    """A support/work case with its hierarchical task list."""

    id: str = Field(description="Case identifier, e.g. 'TK-2847'")
    title: str = Field(min_length=1)
    description: str
    status: TaskStatus = TaskStatus.TODO
    team: str | None = None
    property_id: str | None = None
    reservation_id: str | None = None
    assigned_to: str | None = None
    tasks: list[Task] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CaseSummary(BaseModel):
    """Lightweight view of a case for listings."""

    id: str
    title: str
    status: TaskStatus
    team: str | None = None
    total_tasks: int = 0
    completed_tasks: int = 0
    progress_percent: int = 0
