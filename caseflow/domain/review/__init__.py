"""Review domain - triage of AI-drafted task trees.

Key Types:
    GeneratedTask - Draft node with a tri-state ``accepted`` flag
    DraftPath - Child indices from the top-level list
    CommitBlocker - Why a draft cannot be committed yet

State Machine:
    set_accepted, accept_all, reject_all, reset_all
    all_accepted, all_rejected, all_decided, any_accepted
    commit_blocker, orphaned_acceptances

Commit:
    commit - Prune to the accepted subtree and assign task ids
"""

from .commit import commit
from .events import DraftGenerated, TasksCommitted
from .models import DraftPath, GeneratedTask
from .state import (
    CommitBlocker,
    accept_all,
    all_accepted,
    all_decided,
    all_rejected,
    any_accepted,
    commit_blocker,
    count_draft_levels,
    count_drafts,
    find_draft,
    orphaned_acceptances,
    reject_all,
    reset_all,
    set_accepted,
    walk_drafts,
)

__all__ = [
    # Models
    "GeneratedTask",
    "DraftPath",
    "CommitBlocker",
    # Walking
    "walk_drafts",
    "find_draft",
    "count_drafts",
    "count_draft_levels",
    # Mutations
    "set_accepted",
    "accept_all",
    "reject_all",
    "reset_all",
    # Predicates
    "all_accepted",
    "all_rejected",
    "all_decided",
    "any_accepted",
    "commit_blocker",
    "orphaned_acceptances",
    # Commit
    "commit",
    # Events
    "DraftGenerated",
    "TasksCommitted",
]
