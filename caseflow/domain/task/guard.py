"""Status transition guard.

A task may only move to DONE once its direct subtasks are DONE. The guard
is a predicate; refusing the write and reporting the blocking count is up
to the caller (see ``caseflow.application.task_service.update_task``).
"""

from .models import Task, TaskStatus


def blocking_subtasks(
    task: Task,
    cancelled_satisfies_done: bool = False,
) -> list[Task]:
    """Return the direct subtasks that keep ``task`` from being DONE.

    Args:
        task: The task to inspect.
        cancelled_satisfies_done: Treat CANCELLED subtasks as complete.

    Returns:
        Subtasks whose status is not DONE (nor CANCELLED when allowed),
        in their original order.
    """
    complete = {TaskStatus.DONE}
    if cancelled_satisfies_done:
        complete.add(TaskStatus.CANCELLED)
    return [s for s in task.subtasks if s.status not in complete]


def is_disallowed(
    task: Task,
    target_status: TaskStatus,
    cancelled_satisfies_done: bool = False,
) -> bool:
    """Check whether the guard forbids moving ``task`` to ``target_status``.

    Only DONE is ever guarded; every other target is allowed here.
    """
    if target_status != TaskStatus.DONE:
        return False
    return len(blocking_subtasks(task, cancelled_satisfies_done)) > 0


def transition_error(
    task: Task,
    target_status: TaskStatus,
    cancelled_satisfies_done: bool = False,
) -> str | None:
    """Return the refusal message for a guarded transition, or None."""
    if not is_disallowed(task, target_status, cancelled_satisfies_done):
        return None
    count = len(blocking_subtasks(task, cancelled_satisfies_done))
    noun = "subtask" if count == 1 else "subtasks"
    return f"Cannot mark task as DONE. {count} {noun} still incomplete."
