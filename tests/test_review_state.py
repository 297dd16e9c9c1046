from datetime import UTC, datetime

import pytest

from caseflow.domain.review import (
    CommitBlocker,
    GeneratedTask,
    accept_all,
    all_accepted,
    all_decided,
    all_rejected,
    any_accepted,
    commit,
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
from caseflow.domain.task import TaskStatus, count_all

from .factories import make_draft


def _drafts(a=None, a1=None, a2=None, b=None):
    return [
        make_draft("A", a, [make_draft("A.1", a1), make_draft("A.2", a2)]),
        make_draft("B", b),
    ]


def _flags(drafts):
    return [d.accepted for _, d in walk_drafts(drafts)]


# =============================================================================
# Walking
# =============================================================================


def test_walk_is_depth_first_with_paths():
    assert [(p, d.title) for p, d in walk_drafts(_drafts())] == [
        ((0,), "A"),
        ((0, 0), "A.1"),
        ((0, 1), "A.2"),
        ((1,), "B"),
    ]
    assert count_drafts(_drafts()) == 4
    assert count_draft_levels(_drafts()) == 2


def test_find_draft():
    drafts = _drafts()
    assert find_draft(drafts, (0, 1)).title == "A.2"
    assert find_draft(drafts, (2,)) is None
    assert find_draft(drafts, (0, 5)) is None
    assert find_draft(drafts, ()) is None


def test_subtasks_null_parses_as_empty():
    draft = GeneratedTask.model_validate({"title": "x", "subtasks": None, "priority": "high"})
    assert draft.subtasks == []
    assert draft.accepted is None


# =============================================================================
# Mutations
# =============================================================================


def test_set_accepted_touches_only_one_node():
    drafts = _drafts()
    updated = set_accepted(drafts, (0, 1), True)
    assert _flags(updated) == [None, None, True, None]
    # Input left untouched
    assert _flags(drafts) == [None, None, None, None]


def test_set_accepted_does_not_cascade():
    updated = set_accepted(_drafts(a1=True, a2=True), (0,), False)
    assert _flags(updated) == [False, True, True, None]


def test_set_accepted_invalid_path_is_noop():
    drafts = _drafts()
    assert set_accepted(drafts, (5,), True) == drafts
    assert set_accepted(drafts, (0, 9), True) == drafts
    assert set_accepted(drafts, (), True) == drafts


def test_accept_all_toggles():
    accepted = accept_all(_drafts(a=False))
    assert _flags(accepted) == [True, True, True, True]
    assert all_accepted(accepted)

    cleared = accept_all(accepted)
    assert _flags(cleared) == [None, None, None, None]


def test_reject_all_toggles():
    rejected = reject_all(_drafts(b=True))
    assert all_rejected(rejected)
    assert _flags(reject_all(rejected)) == [None] * 4


def test_reset_all():
    assert _flags(reset_all(_drafts(True, False, True, False))) == [None] * 4


# =============================================================================
# Predicates
# =============================================================================


def test_all_decided_sees_every_depth():
    assert not all_decided(_drafts(True, True, None, False))
    assert all_decided(_drafts(True, True, False, False))


def test_any_accepted_ignores_ancestors():
    drafts = _drafts(a=False, a1=True, a2=False, b=False)
    assert any_accepted(drafts)
    assert not all_accepted(drafts)
    assert not all_rejected(drafts)


def test_predicates_on_empty_tree():
    assert not all_accepted([])
    assert not all_rejected([])
    assert not all_decided([])
    assert not any_accepted([])
    assert commit_blocker([]) is CommitBlocker.NONE_ACCEPTED


def test_commit_blocker():
    assert commit_blocker(_drafts(True, None, True, True)) is CommitBlocker.UNDECIDED
    assert commit_blocker(_drafts(False, False, False, False)) is CommitBlocker.NONE_ACCEPTED
    assert commit_blocker(_drafts(True, False, False, False)) is None
    assert "accept or reject" in CommitBlocker.UNDECIDED.message
    assert "at least one" in CommitBlocker.NONE_ACCEPTED.message


def test_orphaned_acceptances():
    assert orphaned_acceptances(_drafts(False, True, False, True)) == [(0, 0)]
    assert orphaned_acceptances(_drafts(True, True, False, True)) == []


# =============================================================================
# Commit
# =============================================================================


def test_commit_prunes_rejected_branches():
    tasks = commit(_drafts(True, True, False, False), "TK-1")

    assert len(tasks) == 1
    root = tasks[0]
    assert (root.id, root.title) == ("TK-1.1", "A")
    assert [(t.id, t.title) for t in root.subtasks] == [("TK-1.1.1", "A.1")]
    assert count_all(tasks) == 2


def test_commit_drops_accepted_children_of_rejected_parent():
    tasks = commit(_drafts(False, True, True, True), "TK-1")
    assert [(t.id, t.title) for t in tasks] == [("TK-1.1", "B")]
    assert tasks[0].subtasks == []


def test_commit_numbers_kept_siblings_contiguously():
    drafts = [
        make_draft("A", False),
        make_draft("B", True, [make_draft("B.1", False), make_draft("B.2", True)]),
        make_draft("C", True),
    ]
    tasks = commit(drafts, "TK-9")
    assert [t.id for t in tasks] == ["TK-9.1", "TK-9.2"]
    assert [t.title for t in tasks] == ["B", "C"]
    assert [(t.id, t.title) for t in tasks[0].subtasks] == [("TK-9.1.1", "B.2")]


def test_commit_continues_after_existing_roots():
    tasks = commit([make_draft("New", True)], "TK-1", existing_root_count=2)
    assert tasks[0].id == "TK-1.3"


def test_commit_sets_status_and_shared_timestamp():
    now = datetime(2024, 1, 1, tzinfo=UTC)
    drafts = [GeneratedTask(title="A", description="d", team="FINOPS", accepted=True,
                            subtasks=[make_draft("A.1", True)])]
    (task,) = commit(drafts, "TK-1", now=now)
    assert task.status == TaskStatus.TODO
    assert task.description == "d"
    assert task.team == "FINOPS"
    assert task.created_at == task.updated_at == now
    assert task.subtasks[0].created_at == now


@pytest.mark.parametrize("flags", [(None, True, True, True), (False, False, False, False)])
def test_commit_without_preconditions_returns_partial(flags):
    # Undecided and rejected nodes are simply skipped
    tasks = commit(_drafts(*flags), "TK-1")
    assert all(t.title == "B" for t in tasks)
