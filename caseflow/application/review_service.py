"""Draft review application service.

Drives one triage session: an asynchronous generation call produces a
draft tree, the user accepts or rejects its nodes, and the accepted part is
committed into tasks for the case.

Generation is the only asynchronous step. It runs as an ``asyncio.Task`` so
callers hold a cancellable handle, but the session itself never cancels,
retries or times it out. A failed generation ends the session in FAILED
with no draft kept; ``restart()`` goes back to the description step.
"""

import asyncio
import logging
from enum import Enum

from caseflow.application.ports import TaskGenerator
from caseflow.domain.review import (
    CommitBlocker,
    DraftGenerated,
    DraftPath,
    GeneratedTask,
    TasksCommitted,
    accept_all,
    all_accepted,
    all_decided,
    all_rejected,
    any_accepted,
    commit,
    commit_blocker,
    count_drafts,
    find_draft,
    orphaned_acceptances,
    reject_all,
    reset_all,
    set_accepted,
)
from caseflow.domain.shared import Err, Ok, Result
from caseflow.domain.task import MAX_NESTING_DEPTH, Task, count_all, count_levels, fold_tasks

logger = logging.getLogger(__name__)


class ReviewStep(str, Enum):
    """Where a review session stands."""

    DESCRIBE = "describe"
    GENERATING = "generating"
    REVIEWING = "reviewing"
    COMMITTED = "committed"
    FAILED = "failed"


def commit_reviewed_draft(
    drafts: list[GeneratedTask],
    case_id: str,
    existing_root_count: int = 0,
) -> Result[tuple[list[Task], TasksCommitted], CommitBlocker | str]:
    """Check the commit preconditions, then commit the draft.

    Args:
        drafts: Reviewed draft tree.
        case_id: Case the tasks are for.
        existing_root_count: Root tasks the case already has.

    Returns:
        Ok((tasks, TasksCommitted)), Err(CommitBlocker) when the draft is
        not fully decided or nothing is accepted, or Err(str) when the
        committed tree would be nested too deep.
    """
    blocker = commit_blocker(drafts)
    if blocker is not None:
        return Err(blocker)

    orphans = orphaned_acceptances(drafts)
    if orphans:
        paths = ", ".join(".".join(str(i + 1) for i in path) for path in orphans)
        logger.warning(
            f"{len(orphans)} accepted draft task(s) under a rejected parent "
            f"will not be created: {paths}"
        )

    tasks = commit(drafts, case_id, existing_root_count=existing_root_count)
    if count_levels(tasks) > MAX_NESTING_DEPTH + 1:
        return Err(f"Maximum nesting depth ({MAX_NESTING_DEPTH}) exceeded by the accepted tasks")

    task_ids = fold_tasks(tasks, [], lambda acc, task, _depth: [*acc, task.id])
    event = TasksCommitted(
        case_id=case_id,
        task_ids=task_ids,
        dropped_count=count_drafts(drafts) - count_all(tasks),
        orphaned_count=len(orphans),
    )
    return Ok((tasks, event))


class ReviewSession:
    """A single generate-review-commit flow for one case.

    Example:
        session = ReviewSession(TemplateTaskGenerator(), case_id="TK-1042")
        session.start_generation("Guest reports the WiFi is down")
        await session.wait()
        session.accept_all()
        result = session.commit()
    """

    def __init__(self, generator: TaskGenerator, case_id: str) -> None:
        self._generator = generator
        self.case_id = case_id
        self.step = ReviewStep.DESCRIBE
        self.drafts: list[GeneratedTask] = []
        self.error: str | None = None
        self.events: list[DraftGenerated | TasksCommitted] = []
        self._handle: asyncio.Task[list[GeneratedTask]] | None = None
        self._abandoned = False

    # =========================================================================
    # Generation
    # =========================================================================

    def start_generation(
        self,
        description: str,
        title: str = "",
        team: str | None = None,
    ) -> asyncio.Task[list[GeneratedTask]]:
        """Start the generation call and return its handle.

        Must be called from a running event loop, in the DESCRIBE step.
        """
        if self.step != ReviewStep.DESCRIBE:
            raise RuntimeError(f"Cannot start generation in step '{self.step.value}'")

        self.step = ReviewStep.GENERATING
        self.error = None
        self._abandoned = False
        self._handle = asyncio.create_task(self._generate(description, title, team))
        return self._handle

    async def _generate(
        self,
        description: str,
        title: str,
        team: str | None,
    ) -> list[GeneratedTask]:
        logger.info(f"Generating draft tasks for case {self.case_id}")
        try:
            drafts = await self._generator.generate(description, title, team)
        except Exception as e:
            if self._abandoned:
                logger.info(f"Discarding failed generation for abandoned case {self.case_id}")
                self.step = ReviewStep.DESCRIBE
                return []
            logger.error(f"Draft generation failed for case {self.case_id}: {e}")
            self.drafts = []
            self.error = str(e) or e.__class__.__name__
            self.step = ReviewStep.FAILED
            return []

        if self._abandoned:
            logger.info(f"Discarding generated draft for abandoned case {self.case_id}")
            self.step = ReviewStep.DESCRIBE
            return []

        self.drafts = reset_all(drafts)
        self.step = ReviewStep.REVIEWING
        self.events.append(DraftGenerated(case_id=self.case_id, draft_count=count_drafts(self.drafts)))
        logger.info(f"Generated {count_drafts(self.drafts)} draft tasks for case {self.case_id}")
        return self.drafts

    async def wait(self) -> Result[list[GeneratedTask], str]:
        """Wait for the generation call to settle.

        Returns:
            Ok(drafts) when the draft is ready for review, or Err(str) if
            generation failed, was cancelled, or was never started.
        """
        if self._handle is None:
            return Err("Generation has not been started")

        try:
            await self._handle
        except asyncio.CancelledError:
            if not self._handle.cancelled():
                raise
            if self.step == ReviewStep.GENERATING:
                self.step = ReviewStep.FAILED
                self.error = "Generation cancelled"
                self.drafts = []

        if self.step == ReviewStep.FAILED:
            return Err(self.error or "Generation failed")
        if self._abandoned:
            return Err("Review session was abandoned")
        return Ok(self.drafts)

    def abandon(self) -> None:
        """Walk away from the session.

        A pending result is discarded when it arrives and the session goes
        back to DESCRIBE; with nothing pending it goes back at once.
        """
        self._abandoned = True
        self.drafts = []
        if self._handle is None or self._handle.done():
            self.step = ReviewStep.DESCRIBE
            self.error = None

    def cancel(self) -> bool:
        """Cancel a pending generation call.

        Returns:
            True if a pending call was cancelled.
        """
        if self._handle is None or self._handle.done():
            return False
        self._handle.cancel()
        self.step = ReviewStep.FAILED
        self.error = "Generation cancelled"
        self.drafts = []
        return True

    def restart(self) -> None:
        """Return to the description step, dropping any draft."""
        if self._handle is not None and not self._handle.done():
            raise RuntimeError("Cannot restart while generation is running")
        self.step = ReviewStep.DESCRIBE
        self.drafts = []
        self.error = None
        self._handle = None
        self._abandoned = False

    # =========================================================================
    # Review
    # =========================================================================

    def _require_reviewing(self) -> None:
        if self.step != ReviewStep.REVIEWING:
            raise RuntimeError(f"No draft to review in step '{self.step.value}'")

    def set_accepted(self, path: DraftPath, value: bool | None) -> Result[GeneratedTask, str]:
        """Accept (True), reject (False) or clear (None) a single node."""
        self._require_reviewing()
        if find_draft(self.drafts, path) is None:
            return Err(f"No draft task at path {list(path)}")
        self.drafts = set_accepted(self.drafts, path, value)
        return Ok(find_draft(self.drafts, path))

    def accept_all(self) -> None:
        """Toggle bulk acceptance."""
        self._require_reviewing()
        self.drafts = accept_all(self.drafts)

    def reject_all(self) -> None:
        """Toggle bulk rejection."""
        self._require_reviewing()
        self.drafts = reject_all(self.drafts)

    def reset_all(self) -> None:
        """Clear every decision."""
        self._require_reviewing()
        self.drafts = reset_all(self.drafts)

    @property
    def all_accepted(self) -> bool:
        return all_accepted(self.drafts)

    @property
    def all_rejected(self) -> bool:
        return all_rejected(self.drafts)

    @property
    def all_decided(self) -> bool:
        return all_decided(self.drafts)

    @property
    def any_accepted(self) -> bool:
        return any_accepted(self.drafts)

    @property
    def blocker(self) -> CommitBlocker | None:
        return commit_blocker(self.drafts)

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(
        self,
        existing_root_count: int = 0,
    ) -> Result[tuple[list[Task], TasksCommitted], CommitBlocker | str]:
        """Commit the accepted part of the draft and close the session.

        On Err the session stays in REVIEWING so the user can fix their
        decisions.
        """
        self._require_reviewing()
        result = commit_reviewed_draft(self.drafts, self.case_id, existing_root_count)
        if isinstance(result, Err):
            return result

        tasks, event = result.value
        self.events.append(event)
        self.step = ReviewStep.COMMITTED
        self.drafts = []
        logger.info(f"Committed {len(event.task_ids)} tasks to case {self.case_id}")
        return result
