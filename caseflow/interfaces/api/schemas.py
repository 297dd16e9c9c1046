"""Request/Response schemas for the caseflow API.

These Pydantic models define the API contract for request and response
bodies. Domain models are reused where they already are the contract.
"""

from typing import Optional

from pydantic import BaseModel, Field

from caseflow.application import TreeStats
from caseflow.domain.case import Case
from caseflow.domain.review import GeneratedTask
from caseflow.domain.task import Task, TaskStatus


# =============================================================================
# Case Schemas
# =============================================================================


class CreateCaseRequest(BaseModel):
    """Request to open a new case."""

    title: str
    description: str
    team: Optional[str] = None
    property_id: Optional[str] = None
    reservation_id: Optional[str] = None
    assigned_to: Optional[str] = None
    id: Optional[str] = None


class CaseResponse(BaseModel):
    """A case with the statistics of its task tree."""

    case: Case
    stats: TreeStats


# =============================================================================
# Task Schemas
# =============================================================================


class AddTaskRequest(BaseModel):
    """Request to add a root task, or a subtask when parent_id is set."""

    title: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    team: Optional[str] = None
    assigned_to: Optional[str] = None


class UpdateStatusRequest(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    """The affected task and the new statistics of the case's tree."""

    task: Task
    stats: TreeStats


class TreeResponse(BaseModel):
    tasks: list[Task]
    stats: TreeStats


class DeleteTaskResponse(BaseModel):
    removed_count: int
    stats: TreeStats


# =============================================================================
# Review Schemas
# =============================================================================


class GenerateDraftRequest(BaseModel):
    """Request a draft; the case description is used when omitted."""

    description: Optional[str] = None


class DraftResponse(BaseModel):
    drafts: list[GeneratedTask]


class CommitDraftRequest(BaseModel):
    """A draft tree with a decision on every node."""

    drafts: list[GeneratedTask] = Field(default_factory=list)


class CommitDraftResponse(BaseModel):
    """Tasks created from a reviewed draft."""

    task_ids: list[str]
    dropped_count: int
    orphaned_count: int
    case: Case


__all__ = [
    "CreateCaseRequest",
    "CaseResponse",
    "AddTaskRequest",
    "UpdateStatusRequest",
    "TaskResponse",
    "TreeResponse",
    "DeleteTaskResponse",
    "GenerateDraftRequest",
    "DraftResponse",
    "CommitDraftRequest",
    "CommitDraftResponse",
]
