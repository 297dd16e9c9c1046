"""Hierarchical task identifier assignment.

Ids are positional: the n-th root task of case ``TK-5`` is ``TK-5.n`` and
the m-th subtask of ``TK-5.2`` is ``TK-5.2.m``. They are assigned once at
creation and never renumbered, so deleting an earlier sibling can make the
next assignment collide with a surviving id. Callers must pass the current
child count; nothing is reserved or tracked here.
"""

from caseflow.domain.types import TaskId

from .models import MAX_NESTING_DEPTH


def next_root_id(case_id: str, existing_root_count: int) -> str:
    """Return the id for a new root task of ``case_id``.

    Example:
        >>> next_root_id("TK-1", 2)
        'TK-1.3'
    """
    if existing_root_count < 0:
        raise ValueError("existing_root_count must not be negative")
    return f"{case_id}.{existing_root_count + 1}"


def next_child_id(parent_id: str, existing_child_count: int) -> str:
    """Return the id for a new subtask of ``parent_id``.

    Example:
        >>> next_child_id("TK-5.2", 1)
        'TK-5.2.2'
    """
    if existing_child_count < 0:
        raise ValueError("existing_child_count must not be negative")
    return f"{parent_id}.{existing_child_count + 1}"


def depth_of(task_id: str, case_id: str) -> int:
    """Nesting depth encoded in a task id (0 for root tasks)."""
    return TaskId.parse(task_id, case_id).depth


def within_depth_limit(depth: int) -> bool:
    """Check whether a node may be created at ``depth``."""
    return 0 <= depth <= MAX_NESTING_DEPTH
