import pytest

from caseflow.application import (
    TaskUpdate,
    add_subtask,
    add_task,
    delete_task,
    get_tree_stats,
    update_task,
    update_task_status,
)
from caseflow.domain.shared import Err, Ok
from caseflow.domain.task import MAX_NESTING_DEPTH, TaskStatus, find_task

from .factories import make_task


def _with_tree(case):
    return case.model_copy(update={"tasks": [
        make_task("TK-1.1", subtasks=[
            make_task("TK-1.1.1", TaskStatus.DONE),
            make_task("TK-1.1.2", TaskStatus.IN_PROGRESS),
        ]),
        make_task("TK-1.2"),
    ]})


def test_add_task_assigns_next_root_id(case):
    result = add_task(case, "Call the guest", team="GUEST_COMM_DE")
    assert isinstance(result, Ok)
    updated, event = result.value
    assert event.task_id == "TK-1.1"
    assert updated.tasks[0].team == "GUEST_COMM_DE"

    updated, event = add_task(updated, "Reset the router").value
    assert event.task_id == "TK-1.2"
    assert case.tasks == []


def test_add_task_rejects_blank_title(case):
    assert add_task(case, "   ") == Err("Task title cannot be empty")


def test_add_subtask(case):
    case = _with_tree(case)
    updated, event = add_subtask(case, "TK-1.1", "Check the logs").value
    assert event.task_id == "TK-1.1.3"
    assert event.parent_id == "TK-1.1"
    assert [t.id for t in find_task(updated.tasks, "TK-1.1").subtasks][-1] == "TK-1.1.3"


def test_add_subtask_missing_parent(case):
    assert add_subtask(case, "TK-1.7", "x") == Err("Task not found: TK-1.7")


def test_add_subtask_depth_limit(case):
    parent_id = None
    for _ in range(MAX_NESTING_DEPTH + 1):
        if parent_id is None:
            case, event = add_task(case, "level").value
        else:
            case, event = add_subtask(case, parent_id, "level").value
        parent_id = event.task_id

    result = add_subtask(case, parent_id, "too deep")
    assert isinstance(result, Err)
    assert "Maximum nesting depth (10)" in result.error


def test_add_subtask_depth_from_assigned_id(case):
    case = _with_tree(case)
    case, event = add_subtask(case, "TK-1.1.2", "Nested").value
    assert event.task_id == "TK-1.1.2.1"

    stray = case.model_copy(update={"tasks": [*case.tasks, make_task("TK-9.1")]})
    result = add_subtask(stray, "TK-9.1", "Nested")
    assert isinstance(result, Err)
    assert "does not belong to case" in result.error


def test_status_guard_refuses_and_leaves_case(case):
    case = _with_tree(case)
    result = update_task_status(case, "TK-1.1", TaskStatus.DONE)
    assert result == Err("Cannot mark task as DONE. 1 subtask still incomplete.")
    assert find_task(case.tasks, "TK-1.1").status == TaskStatus.TODO


def test_status_change_after_children_done(case):
    case = _with_tree(case)
    case, _ = update_task_status(case, "TK-1.1.2", TaskStatus.DONE).value
    case, event = update_task_status(case, "TK-1.1", TaskStatus.DONE).value
    assert event.old_status == TaskStatus.TODO
    assert event.new_status == TaskStatus.DONE
    assert find_task(case.tasks, "TK-1.1").status == TaskStatus.DONE


def test_cancelled_children_with_setting(case):
    case = _with_tree(case)
    case, _ = update_task_status(case, "TK-1.1.2", TaskStatus.CANCELLED).value
    assert isinstance(update_task_status(case, "TK-1.1", TaskStatus.DONE), Err)
    assert isinstance(
        update_task_status(case, "TK-1.1", TaskStatus.DONE, cancelled_satisfies_done=True), Ok
    )


def test_update_task_partial(case):
    case = _with_tree(case)
    updated, event = update_task(case, "TK-1.2", TaskUpdate(title=" New title ", assigned_to="u-7")).value
    task = find_task(updated.tasks, "TK-1.2")
    assert task.title == "New title"
    assert task.assigned_to == "u-7"
    assert task.updated_at > find_task(case.tasks, "TK-1.2").updated_at
    assert event.changed_fields == ["assigned_to", "title"]


def test_update_task_guarded_update_changes_nothing(case):
    case = _with_tree(case)
    result = update_task(case, "TK-1.1", TaskUpdate(status=TaskStatus.DONE, title="Other"))
    assert isinstance(result, Err)


@pytest.mark.parametrize("updates, error", [
    (TaskUpdate(), "No fields to update"),
    (TaskUpdate(title="   "), "Task title cannot be empty"),
    (TaskUpdate(status=None), "Task status cannot be empty"),
])
def test_update_task_errors(case, updates, error):
    assert update_task(_with_tree(case), "TK-1.2", updates) == Err(error)


def test_update_unknown_task(case):
    assert update_task(case, "TK-1.9", TaskUpdate(title="x")) == Err("Task not found: TK-1.9")


def test_delete_task_keeps_ids(case):
    case = _with_tree(case)
    updated, event = delete_task(case, "TK-1.1").value
    assert event.removed_count == 3
    assert [t.id for t in updated.tasks] == ["TK-1.2"]

    # Positional ids are not renumbered, so the next root reuses a live id
    _, added = add_task(updated, "Another").value
    assert added.task_id == "TK-1.2"


def test_delete_unknown_task(case):
    assert isinstance(delete_task(case, "TK-1.1"), Err)


def test_tree_stats(case):
    stats = get_tree_stats(_with_tree(case).tasks)
    assert stats.total == 4
    assert (stats.todo, stats.in_progress, stats.done, stats.cancelled) == (2, 1, 1, 0)
    assert stats.progress_percent == 25
