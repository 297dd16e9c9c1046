"""Task domain events.

Immutable records of changes to a case's task tree, returned by the
task service next to the updated case.
"""

from caseflow.domain.shared.events import DomainEvent

from .models import TaskStatus


class TaskAdded(DomainEvent):
    """A root task or subtask was created."""

    case_id: str
    task_id: str
    parent_id: str | None = None
    title: str


class TaskUpdated(DomainEvent):
    """Fields of a task were changed.

    ``changed_fields`` lists the names that were part of the update, including
    ``status`` when the update also moved the task.
    """

    case_id: str
    task_id: str
    changed_fields: list[str]


class TaskStatusChanged(DomainEvent):
    """A task moved from one status to another."""

    case_id: str
    task_id: str
    old_status: TaskStatus
    new_status: TaskStatus


class TaskDeleted(DomainEvent):
    """A task and its subtree were removed.

    ``removed_count`` includes the task itself.
    """

    case_id: str
    task_id: str
    removed_count: int
