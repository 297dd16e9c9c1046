"""FastAPI routes for caseflow.

Routes call the application services and persist through the case
repository held on ``app.state``. Service errors map to HTTP errors:
missing cases and tasks give 404, a refused DONE transition gives 409
with the number of blocking subtasks, an undecided or empty review gives
422 with the blocker code, and other validation errors give 400.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from caseflow import __version__
from caseflow.application import (
    ReviewSession,
    TaskGenerator,
    TaskUpdate,
    add_subtask,
    add_task,
    add_tasks_to_case,
    commit_reviewed_draft,
    create_case,
    delete_task,
    get_case_summary,
    get_tree_stats,
    update_task,
    update_task_status,
)
from caseflow.domain.case import Case, CaseSummary
from caseflow.domain.review import CommitBlocker
from caseflow.domain.shared import Err
from caseflow.domain.task import TaskStatus, blocking_subtasks, find_task
from caseflow.global_config import Settings, get_data_dir, get_global_config
from caseflow.infrastructure.ai import make_generator
from caseflow.infrastructure.storage import CaseRepository
from caseflow.interfaces.api.schemas import (
    AddTaskRequest,
    CaseResponse,
    CommitDraftRequest,
    CommitDraftResponse,
    CreateCaseRequest,
    DeleteTaskResponse,
    DraftResponse,
    GenerateDraftRequest,
    TaskResponse,
    TreeResponse,
    UpdateStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# =============================================================================
# Dependencies and Helpers
# =============================================================================


def get_repository(request: Request) -> CaseRepository:
    return request.app.state.repository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_generator(request: Request) -> TaskGenerator:
    return request.app.state.generator


def _load(repo: CaseRepository, case_id: str) -> Case:
    result = repo.get(case_id)
    if isinstance(result, Err):
        status = 404 if not repo.exists(case_id) else 500
        raise HTTPException(status_code=status, detail=result.error)
    return result.value


def _save(repo: CaseRepository, case: Case) -> None:
    result = repo.save(case)
    if isinstance(result, Err):
        logger.error(f"Failed to save case {case.id}: {result.error}")
        raise HTTPException(status_code=500, detail=result.error)


def _fail(error: str) -> HTTPException:
    status = 404 if error.startswith(("Task not found", "Case not found")) else 400
    return HTTPException(status_code=status, detail=error)


def _guard_refusal(
    case: Case,
    task_id: str,
    status: Optional[TaskStatus],
    error: str,
    settings: Settings,
) -> HTTPException:
    """409 for a refused DONE transition, otherwise the generic mapping."""
    task = find_task(case.tasks, task_id)
    if task is not None and status == TaskStatus.DONE:
        blocking = blocking_subtasks(task, settings.cancelled_satisfies_done)
        if blocking:
            return HTTPException(
                status_code=409,
                detail={"message": error, "blocking_count": len(blocking)},
            )
    return _fail(error)


def _task_response(case: Case, task_id: str) -> TaskResponse:
    return TaskResponse(task=find_task(case.tasks, task_id), stats=get_tree_stats(case.tasks))


# =============================================================================
# Cases
# =============================================================================


@router.get("/cases", response_model=list[CaseSummary])
def list_cases(repo: CaseRepository = Depends(get_repository)):
    """List all cases with task progress."""
    result = repo.list_all()
    if isinstance(result, Err):
        raise HTTPException(status_code=500, detail=result.error)
    return [get_case_summary(c) for c in result.value]


@router.post("/cases", response_model=Case, status_code=201)
def create_case_route(req: CreateCaseRequest, repo: CaseRepository = Depends(get_repository)):
    """Open a new case with no tasks."""
    if req.id and repo.exists(req.id):
        raise HTTPException(status_code=409, detail=f"Case already exists: {req.id}")

    result = create_case(
        title=req.title,
        description=req.description,
        team=req.team,
        property_id=req.property_id,
        reservation_id=req.reservation_id,
        assigned_to=req.assigned_to,
        case_id=req.id,
    )
    if isinstance(result, Err):
        raise HTTPException(status_code=400, detail=result.error)

    case, _ = result.value
    _save(repo, case)
    return case


@router.get("/cases/{case_id}", response_model=CaseResponse)
def get_case(case_id: str, repo: CaseRepository = Depends(get_repository)):
    case = _load(repo, case_id)
    return CaseResponse(case=case, stats=get_tree_stats(case.tasks))


@router.delete("/cases/{case_id}")
def delete_case(case_id: str, repo: CaseRepository = Depends(get_repository)):
    result = repo.delete(case_id)
    if isinstance(result, Err):
        raise _fail(result.error)
    return {"deleted": case_id}


# =============================================================================
# Tasks
# =============================================================================


@router.get("/cases/{case_id}/tasks", response_model=TreeResponse)
def get_tasks(case_id: str, repo: CaseRepository = Depends(get_repository)):
    case = _load(repo, case_id)
    return TreeResponse(tasks=case.tasks, stats=get_tree_stats(case.tasks))


@router.post("/cases/{case_id}/tasks", response_model=TaskResponse, status_code=201)
def add_task_route(
    case_id: str,
    req: AddTaskRequest,
    repo: CaseRepository = Depends(get_repository),
):
    """Add a root task, or a subtask under ``parent_id``."""
    case = _load(repo, case_id)

    if req.parent_id:
        result = add_subtask(case, req.parent_id, req.title, req.description, req.team, req.assigned_to)
    else:
        result = add_task(case, req.title, req.description, req.team, req.assigned_to)

    if isinstance(result, Err):
        raise _fail(result.error)

    updated, event = result.value
    _save(repo, updated)
    return _task_response(updated, event.task_id)


@router.patch("/cases/{case_id}/tasks/{task_id}", response_model=TaskResponse)
def update_task_route(
    case_id: str,
    task_id: str,
    updates: TaskUpdate,
    repo: CaseRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Apply a partial update; only the fields present in the body change."""
    case = _load(repo, case_id)

    result = update_task(case, task_id, updates, settings.cancelled_satisfies_done)
    if isinstance(result, Err):
        raise _guard_refusal(case, task_id, updates.status, result.error, settings)

    updated, _ = result.value
    _save(repo, updated)
    return _task_response(updated, task_id)


@router.put("/cases/{case_id}/tasks/{task_id}/status", response_model=TaskResponse)
def update_status_route(
    case_id: str,
    task_id: str,
    req: UpdateStatusRequest,
    repo: CaseRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    case = _load(repo, case_id)

    result = update_task_status(case, task_id, req.status, settings.cancelled_satisfies_done)
    if isinstance(result, Err):
        raise _guard_refusal(case, task_id, req.status, result.error, settings)

    updated, _ = result.value
    _save(repo, updated)
    return _task_response(updated, task_id)


@router.delete("/cases/{case_id}/tasks/{task_id}", response_model=DeleteTaskResponse)
def delete_task_route(
    case_id: str,
    task_id: str,
    repo: CaseRepository = Depends(get_repository),
):
    """Delete a task with its subtree."""
    case = _load(repo, case_id)

    result = delete_task(case, task_id)
    if isinstance(result, Err):
        raise _fail(result.error)

    updated, event = result.value
    _save(repo, updated)
    return DeleteTaskResponse(removed_count=event.removed_count, stats=get_tree_stats(updated.tasks))


# =============================================================================
# Review
# =============================================================================


@router.post("/cases/{case_id}/review/generate", response_model=DraftResponse)
async def generate_draft(
    case_id: str,
    req: GenerateDraftRequest,
    repo: CaseRepository = Depends(get_repository),
    generator: TaskGenerator = Depends(get_generator),
):
    """Generate an undecided draft task tree for a case."""
    case = _load(repo, case_id)

    session = ReviewSession(generator, case.id)
    session.start_generation(req.description or case.description, case.title, case.team)
    result = await session.wait()
    if isinstance(result, Err):
        raise HTTPException(status_code=502, detail=result.error)

    return DraftResponse(drafts=result.value)


@router.post("/cases/{case_id}/review/commit", response_model=CommitDraftResponse)
def commit_draft(
    case_id: str,
    req: CommitDraftRequest,
    repo: CaseRepository = Depends(get_repository),
):
    """Create tasks from a fully decided draft tree."""
    case = _load(repo, case_id)

    result = commit_reviewed_draft(req.drafts, case.id, existing_root_count=len(case.tasks))
    if isinstance(result, Err):
        error = result.error
        if isinstance(error, CommitBlocker):
            raise HTTPException(
                status_code=422,
                detail={"code": error.value, "message": error.message},
            )
        raise HTTPException(status_code=400, detail=error)

    tasks, event = result.value
    attached = add_tasks_to_case(case, tasks)
    if isinstance(attached, Err):
        raise HTTPException(status_code=400, detail=attached.error)

    updated, _ = attached.value
    _save(repo, updated)
    return CommitDraftResponse(
        task_ids=event.task_ids,
        dropped_count=event.dropped_count,
        orphaned_count=event.orphaned_count,
        case=updated,
    )


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    data_dir: Optional[Path] = None,
    generator: Optional[TaskGenerator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        data_dir: Where cases are stored (default: from settings).
        generator: Draft generator (default: the one selected in settings).
        settings: Settings to use (default: the saved global config).
    """
    settings = settings or get_global_config()

    app = FastAPI(
        title="caseflow",
        description="Case task trees with AI-drafted, human-reviewed breakdowns",
        version=__version__,
    )
    app.state.settings = settings
    app.state.repository = CaseRepository(data_dir or get_data_dir(settings))
    app.state.generator = generator or make_generator(settings)

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "caseflow", "version": __version__}

    return app
