"""Commit a reviewed draft tree into real tasks.

The accepted-only filter is applied top-down before recursing, so a node
is committed only if it and every ancestor up to the top-level list are
accepted. Ids are assigned among the kept siblings, not the original draft
positions.
"""

from datetime import datetime

from caseflow.domain.task.identifiers import next_child_id, next_root_id
from caseflow.domain.task.models import Task, TaskStatus, utc_now

from .models import GeneratedTask


def commit(
    drafts: list[GeneratedTask],
    case_id: str,
    existing_root_count: int = 0,
    now: datetime | None = None,
) -> list[Task]:
    """Convert the accepted part of a draft tree into tasks.

    Callers must check ``all_decided`` and ``any_accepted`` first; this
    function does not, and simply returns fewer (or no) tasks otherwise.

    Args:
        drafts: Top-level draft nodes after triage.
        case_id: Case the tasks will be attached to.
        existing_root_count: Root tasks the case already has; new root ids
            continue after them.
        now: Timestamp for created_at/updated_at (defaults to now).

    Returns:
        Independent task trees with status TODO and fresh ids.
    """
    stamp = now or utc_now()

    def build(draft: GeneratedTask, task_id: str) -> Task:
        kept = [d for d in draft.subtasks if d.accepted is True]
        return Task(
            id=task_id,
            title=draft.title,
            description=draft.description,
            team=draft.team,
            status=TaskStatus.TODO,
            subtasks=[build(d, next_child_id(task_id, i)) for i, d in enumerate(kept)],
            created_at=stamp,
            updated_at=stamp,
        )

    roots = [d for d in drafts if d.accepted is True]
    return [
        build(d, next_root_id(case_id, existing_root_count + i))
        for i, d in enumerate(roots)
    ]
