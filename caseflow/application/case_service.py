"""Case application service.

Orchestrates case-level operations by combining domain functions.
All functions are pure - no I/O, no side effects.
"""

import random

from caseflow.domain.case import Case, CaseCreated, CaseSummary, TasksAttached
from caseflow.domain.shared import Err, Ok, Result
from caseflow.domain.task import (
    Task,
    TaskStatus,
    completion_percentage,
    count_all,
    count_by_status,
    utc_now,
)
from caseflow.domain.types import TaskId

MIN_DESCRIPTION_LENGTH = 10


def generate_case_id() -> str:
    """Return a random case id of the form ``TK-####``."""
    return f"TK-{random.randint(1000, 9999)}"


def create_case(
    title: str,
    description: str,
    team: str | None = None,
    property_id: str | None = None,
    reservation_id: str | None = None,
    assigned_to: str | None = None,
    case_id: str | None = None,
) -> Result[tuple[Case, CaseCreated], str]:
    """Create a new case with an empty task list.

    Args:
        title: Case title (required).
        description: Issue description, at least 10 characters.
        team: Responsible team code.
        property_id: Linked property; this or reservation_id is required.
        reservation_id: Linked reservation.
        assigned_to: Assignee user id.
        case_id: Explicit id; a random ``TK-####`` id is used otherwise.

    Returns:
        Ok((Case, CaseCreated)) on success, or
        Err(str) with validation error message.
    """
    if not title or not title.strip():
        return Err("Case title cannot be empty")

    if len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        return Err(f"Case description must be at least {MIN_DESCRIPTION_LENGTH} characters")

    if not property_id and not reservation_id:
        return Err("A case must be linked to a property or a reservation")

    if case_id is not None and (not case_id or "." in case_id):
        return Err("Case ID cannot be empty or contain '.'")

    case = Case(
        id=case_id or generate_case_id(),
        title=title.strip(),
        description=description.strip(),
        team=team,
        property_id=property_id,
        reservation_id=reservation_id,
        assigned_to=assigned_to,
    )

    event = CaseCreated(case_id=case.id, title=case.title, team=team)
    return Ok((case, event))


def add_tasks_to_case(case: Case, tasks: list[Task]) -> Result[tuple[Case, TasksAttached], str]:
    """Append root task trees to a case.

    Task ids must already belong to the case; they are not reassigned.

    Returns:
        Ok((updated_case, TasksAttached)), or Err(str) if a task id
        belongs to another case.
    """
    for task in tasks:
        try:
            TaskId.parse(task.id, case.id)
        except ValueError as e:
            return Err(str(e))

    updated = case.model_copy(
        update={"tasks": [*case.tasks, *tasks], "updated_at": utc_now()}
    )
    event = TasksAttached(case_id=case.id, task_ids=[t.id for t in tasks])
    return Ok((updated, event))


def get_case_summary(case: Case) -> CaseSummary:
    """Summarize a case and its task progress for listings."""
    return CaseSummary(
        id=case.id,
        title=case.title,
        status=case.status,
        team=case.team,
        total_tasks=count_all(case.tasks),
        completed_tasks=count_by_status(case.tasks, TaskStatus.DONE),
        progress_percent=completion_percentage(case.tasks),
    )
