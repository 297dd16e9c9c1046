"""Pure task tree traversal combinators.

All functions in this module are pure - no I/O, no side effects.
They take a list of root tasks in and return data out; trees are never
mutated in place.
"""

from collections.abc import Callable
from typing import TypeVar

from .models import Task, TaskStatus

T = TypeVar("T")


# =============================================================================
# Fundamental Operations
# =============================================================================


def fold_tasks(
    tasks: list[Task],
    initial: T,
    f: Callable[[T, Task, int], T],
) -> T:
    """Fold over every task in depth-first order.

    Args:
        tasks: Root tasks of the tree
        initial: Starting accumulator value
        f: Function (accumulator, task, depth) -> new_accumulator

    Returns:
        Final accumulated value after visiting all tasks
    """

    def fold_node(acc: T, task: Task, depth: int) -> T:
        acc = f(acc, task, depth)
        for subtask in task.subtasks:
            acc = fold_node(acc, subtask, depth + 1)
        return acc

    result = initial
    for task in tasks:
        result = fold_node(result, task, 0)
    return result


def update_task_in_tree(
    tasks: list[Task],
    task_id: str,
    update: Callable[[Task], Task],
) -> list[Task]:
    """Replace the task with ``task_id`` by ``update(task)``.

    Only the branch leading to the task is copied; untouched siblings are
    carried over as they are. An unknown id leaves the tree unchanged.
    """
    result: list[Task] = []
    for task in tasks:
        if task.id == task_id:
            result.append(update(task))
        elif task.subtasks:
            result.append(
                task.model_copy(
                    update={"subtasks": update_task_in_tree(task.subtasks, task_id, update)}
                )
            )
        else:
            result.append(task)
    return result


def delete_task_in_tree(tasks: list[Task], task_id: str) -> list[Task]:
    """Remove the task with ``task_id`` and its whole subtree.

    Remaining siblings keep their ids; nothing is renumbered.
    """
    result: list[Task] = []
    for task in tasks:
        if task.id == task_id:
            continue
        if task.subtasks:
            task = task.model_copy(
                update={"subtasks": delete_task_in_tree(task.subtasks, task_id)}
            )
        result.append(task)
    return result


# =============================================================================
# Lookup
# =============================================================================


def find_path(tasks: list[Task], task_id: str) -> list[Task] | None:
    """Find a task and its ancestors.

    Returns:
        List of tasks from the root down to the match (inclusive),
        or None if no task has this id
    """
    for task in tasks:
        if task.id == task_id:
            return [task]
        sub_path = find_path(task.subtasks, task_id)
        if sub_path is not None:
            return [task, *sub_path]
    return None


def find_task(tasks: list[Task], task_id: str) -> Task | None:
    """Find a task anywhere in the tree by id."""
    path = find_path(tasks, task_id)
    return path[-1] if path else None


def count_levels(tasks: list[Task]) -> int:
    """Number of levels in the tree (0 for an empty tree)."""
    return fold_tasks(tasks, 0, lambda acc, _task, depth: max(acc, depth + 1))


# =============================================================================
# Aggregation
# =============================================================================


def count_all(tasks: list[Task]) -> int:
    """Count every task in the tree, roots included."""
    return sum(1 + count_all(task.subtasks) for task in tasks)


def count_by_status(tasks: list[Task], status: TaskStatus) -> int:
    """Count tasks with the given status anywhere in the tree."""
    return sum(
        (1 if task.status == status else 0) + count_by_status(task.subtasks, status)
        for task in tasks
    )


def status_counts(tasks: list[Task]) -> dict[TaskStatus, int]:
    """Count tasks per status in a single pass.

    Returns:
        Dict mapping every status to its count (zero included)
    """

    def count(
        acc: dict[TaskStatus, int],
        task: Task,
        depth: int,
    ) -> dict[TaskStatus, int]:
        acc[task.status] += 1
        return acc

    return fold_tasks(tasks, {status: 0 for status in TaskStatus}, count)


def completion_percentage(tasks: list[Task]) -> int:
    """Percentage of DONE tasks, rounded half up; 0 for an empty tree."""
    total = count_all(tasks)
    if total == 0:
        return 0
    done = count_by_status(tasks, TaskStatus.DONE)
    return (200 * done + total) // (2 * total)
