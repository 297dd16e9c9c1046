"""Application service layer for caseflow.

Services orchestrate domain operations. Case and task services are pure
functions; the review service owns the single asynchronous generation call.

Services:
    case_service - Case creation, attaching tasks, summaries
    task_service - Task creation, updates, status changes, deletion, stats
    review_service - Draft generation, triage and commit

Example usage:
    >>> from caseflow.application import create_case, add_task
    >>> case, _ = create_case("WiFi down", "Guest reports no WiFi", property_id="P-1").value
    >>> case, event = add_task(case, "Call the guest").value
    >>> event.task_id == f"{case.id}.1"
    True
"""

from caseflow.application.case_service import (
    add_tasks_to_case,
    create_case,
    generate_case_id,
    get_case_summary,
)
from caseflow.application.ports import GenerationError, TaskGenerator
from caseflow.application.review_service import (
    ReviewSession,
    ReviewStep,
    commit_reviewed_draft,
)
from caseflow.application.task_service import (
    TaskUpdate,
    TreeStats,
    add_subtask,
    add_task,
    delete_task,
    get_tree_stats,
    update_task,
    update_task_status,
)

__all__ = [
    # Case service
    "create_case",
    "add_tasks_to_case",
    "generate_case_id",
    "get_case_summary",
    # Task service
    "add_task",
    "add_subtask",
    "update_task",
    "update_task_status",
    "delete_task",
    "get_tree_stats",
    "TaskUpdate",
    "TreeStats",
    # Review service
    "ReviewSession",
    "ReviewStep",
    "commit_reviewed_draft",
    # Ports
    "TaskGenerator",
    "GenerationError",
]
