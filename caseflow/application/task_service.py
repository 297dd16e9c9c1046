"""Task application service.

Orchestrates task lifecycle operations on a case by combining domain
functions. All functions are pure - no I/O, no side effects. Each one
returns the updated case together with a domain event, or an error
message when the change is refused; a refused change never touches the
case.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from caseflow.domain.case import Case
from caseflow.domain.shared import Err, Ok, Result
from caseflow.domain.task import (
    MAX_NESTING_DEPTH,
    Task,
    TaskAdded,
    TaskDeleted,
    TaskStatus,
    TaskStatusChanged,
    TaskUpdated,
    completion_percentage,
    count_all,
    delete_task_in_tree,
    depth_of,
    find_task,
    next_child_id,
    next_root_id,
    status_counts,
    transition_error,
    update_task_in_tree,
    utc_now,
    within_depth_limit,
)


class TreeStats(BaseModel):
    """Completion statistics for a task tree.

    Every node counts, groupings included.
    """

    total: int
    todo: int
    in_progress: int
    done: int
    cancelled: int
    progress_percent: int


class TaskUpdate(BaseModel):
    """Partial set of task fields to change.

    Only fields that were explicitly set are applied, so
    ``TaskUpdate(description=None)`` clears the description while
    ``TaskUpdate()`` changes nothing.
    """

    status: TaskStatus | None = None
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    assigned_to: str | None = None
    team: str | None = None

    model_config = {"extra": "forbid"}


def _touch(case: Case, tasks: list[Task], now: datetime) -> Case:
    return case.model_copy(update={"tasks": tasks, "updated_at": now})


def add_task(
    case: Case,
    title: str,
    description: str | None = None,
    team: str | None = None,
    assigned_to: str | None = None,
) -> Result[tuple[Case, TaskAdded], str]:
    """Add a root task to a case.

    The id is ``<caseId>.<n>`` where n is the current root count plus one.

    Returns:
        Ok((updated_case, TaskAdded)), or Err(str) if the title is blank.
    """
    if not title or not title.strip():
        return Err("Task title cannot be empty")

    now = utc_now()
    task = Task(
        id=next_root_id(case.id, len(case.tasks)),
        title=title.strip(),
        description=description or None,
        team=team,
        assigned_to=assigned_to or None,
        created_at=now,
        updated_at=now,
    )

    event = TaskAdded(case_id=case.id, task_id=task.id, title=task.title)
    return Ok((_touch(case, [*case.tasks, task], now), event))


def add_subtask(
    case: Case,
    parent_id: str,
    title: str,
    description: str | None = None,
    team: str | None = None,
    assigned_to: str | None = None,
) -> Result[tuple[Case, TaskAdded], str]:
    """Add a subtask under ``parent_id``.

    The id is ``<parentId>.<m>`` where m is the parent's current subtask
    count plus one. Creating a node deeper than MAX_NESTING_DEPTH is
    refused.

    Returns:
        Ok((updated_case, TaskAdded)), or Err(str) if the parent is
        missing, the title is blank, or the depth limit would be exceeded.
    """
    if not title or not title.strip():
        return Err("Task title cannot be empty")

    parent = find_task(case.tasks, parent_id)
    if parent is None:
        return Err(f"Task not found: {parent_id}")

    subtask_id = next_child_id(parent.id, len(parent.subtasks))
    try:
        depth = depth_of(subtask_id, case.id)
    except ValueError as e:
        return Err(str(e))
    if not within_depth_limit(depth):
        return Err(
            f"Maximum nesting depth ({MAX_NESTING_DEPTH}) exceeded: "
            f"cannot add a subtask under {parent_id}"
        )

    now = utc_now()
    subtask = Task(
        id=subtask_id,
        title=title.strip(),
        description=description or None,
        team=team,
        assigned_to=assigned_to or None,
        created_at=now,
        updated_at=now,
    )

    def append(node: Task) -> Task:
        return node.model_copy(
            update={"subtasks": [*node.subtasks, subtask], "updated_at": now}
        )

    tasks = update_task_in_tree(case.tasks, parent_id, append)
    event = TaskAdded(
        case_id=case.id,
        task_id=subtask.id,
        parent_id=parent_id,
        title=subtask.title,
    )
    return Ok((_touch(case, tasks, now), event))


def update_task(
    case: Case,
    task_id: str,
    updates: TaskUpdate,
    cancelled_satisfies_done: bool = False,
) -> Result[tuple[Case, TaskUpdated], str]:
    """Apply a partial update to a task and re-stamp ``updated_at``.

    A change to DONE goes through the status guard first; when subtasks
    are still open the whole update is refused and the message reports
    how many are blocking.

    Returns:
        Ok((updated_case, TaskUpdated)), or Err(str) if the task is
        missing, nothing was set, or the guard refuses the status.
    """
    changes = updates.model_dump(exclude_unset=True)
    if not changes:
        return Err("No fields to update")

    task = find_task(case.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            return Err("Task title cannot be empty")
        changes["title"] = title

    if "status" in changes:
        if changes["status"] is None:
            return Err("Task status cannot be empty")
        error = transition_error(task, changes["status"], cancelled_satisfies_done)
        if error:
            return Err(error)

    now = utc_now()

    def apply(node: Task) -> Task:
        return node.model_copy(update={**changes, "updated_at": now})

    tasks = update_task_in_tree(case.tasks, task_id, apply)
    event = TaskUpdated(case_id=case.id, task_id=task_id, changed_fields=sorted(changes))
    return Ok((_touch(case, tasks, now), event))


def update_task_status(
    case: Case,
    task_id: str,
    status: TaskStatus,
    cancelled_satisfies_done: bool = False,
) -> Result[tuple[Case, TaskStatusChanged], str]:
    """Change only the status of a task, enforcing the status guard.

    Returns:
        Ok((updated_case, TaskStatusChanged)), or Err(str) if the task is
        missing or the guard refuses the change.
    """
    task = find_task(case.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    result = update_task(
        case,
        task_id,
        TaskUpdate(status=status),
        cancelled_satisfies_done=cancelled_satisfies_done,
    )
    if isinstance(result, Err):
        return result

    updated_case, _ = result.value
    event = TaskStatusChanged(
        case_id=case.id,
        task_id=task_id,
        old_status=task.status,
        new_status=status,
    )
    return Ok((updated_case, event))


def delete_task(case: Case, task_id: str) -> Result[tuple[Case, TaskDeleted], str]:
    """Remove a task and its subtree from a case.

    Remaining ids are not renumbered.

    Returns:
        Ok((updated_case, TaskDeleted)), or Err(str) if the task is missing.
    """
    task = find_task(case.tasks, task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    tasks = delete_task_in_tree(case.tasks, task_id)
    event = TaskDeleted(
        case_id=case.id,
        task_id=task_id,
        removed_count=count_all([task]),
    )
    return Ok((_touch(case, tasks, utc_now()), event))


def get_tree_stats(tasks: list[Task]) -> TreeStats:
    """Calculate completion statistics for a task tree."""
    counts = status_counts(tasks)
    return TreeStats(
        total=count_all(tasks),
        todo=counts[TaskStatus.TODO],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        done=counts[TaskStatus.DONE],
        cancelled=counts[TaskStatus.CANCELLED],
        progress_percent=completion_percentage(tasks),
    )
