"""Draft review events."""

from caseflow.domain.shared.events import DomainEvent


class DraftGenerated(DomainEvent):
    """A generator produced a draft tree for a case."""

    case_id: str
    draft_count: int


class TasksCommitted(DomainEvent):
    """The accepted part of a draft was turned into tasks.

    ``dropped_count`` counts draft nodes that did not become tasks, and
    ``orphaned_count`` the accepted ones among them that were dropped
    because an ancestor was not accepted.
    """

    case_id: str
    task_ids: list[str]
    dropped_count: int = 0
    orphaned_count: int = 0
