from datetime import UTC, datetime

from caseflow.domain.review import GeneratedTask
from caseflow.domain.task import Task, TaskStatus

STAMP = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_task(task_id: str, status: TaskStatus = TaskStatus.TODO, subtasks: list[Task] | None = None,
              title: str | None = None) -> Task:
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        status=status,
        subtasks=subtasks or [],
        created_at=STAMP,
        updated_at=STAMP,
    )


def make_draft(title: str, accepted: bool | None = None,
               subtasks: list[GeneratedTask] | None = None) -> GeneratedTask:
    return GeneratedTask(title=title, accepted=accepted, subtasks=subtasks or [])
