"""Case domain events."""

from caseflow.domain.shared.events import DomainEvent


class CaseCreated(DomainEvent):
    """A new case was opened."""

    case_id: str
    title: str
    team: str | None = None


class TasksAttached(DomainEvent):
    """Root tasks were appended to a case."""

    case_id: str
    task_ids: list[str]
