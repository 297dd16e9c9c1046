"""Task domain - a case's hierarchical task tree.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Task state enumeration
    Task - Tree node owning its subtasks
    MAX_NESTING_DEPTH - Deepest level a task may be created at

Traversal and Aggregation:
    fold_tasks - Fundamental combinator
    find_task, find_path - Lookup by id
    update_task_in_tree, delete_task_in_tree - Copying edits
    count_all, count_by_status, status_counts, count_levels - Counting
    completion_percentage - Progress of a tree

Status Guard:
    blocking_subtasks, is_disallowed, transition_error

Identifiers:
    next_root_id, next_child_id, depth_of, within_depth_limit

Domain Events:
    TaskAdded, TaskUpdated, TaskStatusChanged, TaskDeleted
"""

from .events import TaskAdded, TaskDeleted, TaskStatusChanged, TaskUpdated
from .guard import blocking_subtasks, is_disallowed, transition_error
from .identifiers import depth_of, next_child_id, next_root_id, within_depth_limit
from .models import (
    MAX_NESTING_DEPTH,
    TEAM_NAMES,
    Task,
    TaskStatus,
    format_team,
    utc_now,
)
from .traversal import (
    completion_percentage,
    count_all,
    count_by_status,
    count_levels,
    delete_task_in_tree,
    find_path,
    find_task,
    fold_tasks,
    status_counts,
    update_task_in_tree,
)

__all__ = [
    # Models
    "MAX_NESTING_DEPTH",
    "TEAM_NAMES",
    "Task",
    "TaskStatus",
    "format_team",
    "utc_now",
    # Traversal - fundamental
    "fold_tasks",
    "update_task_in_tree",
    "delete_task_in_tree",
    # Traversal - lookup
    "find_path",
    "find_task",
    "count_levels",
    # Aggregation
    "count_all",
    "count_by_status",
    "status_counts",
    "completion_percentage",
    # Guard
    "blocking_subtasks",
    "is_disallowed",
    "transition_error",
    # Identifiers
    "next_root_id",
    "next_child_id",
    "depth_of",
    "within_depth_limit",
    # Events
    "TaskAdded",
    "TaskUpdated",
    "TaskStatusChanged",
    "TaskDeleted",
]
