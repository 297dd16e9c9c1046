from caseflow.domain.task import (
    TaskStatus,
    completion_percentage,
    count_all,
    count_by_status,
    count_levels,
    delete_task_in_tree,
    find_path,
    find_task,
    fold_tasks,
    status_counts,
    update_task_in_tree,
)

from .factories import make_task


def _tree():
    return [
        make_task("TK-1.1", TaskStatus.DONE, [
            make_task("TK-1.1.1", TaskStatus.DONE),
            make_task("TK-1.1.2", TaskStatus.IN_PROGRESS, [
                make_task("TK-1.1.2.1", TaskStatus.CANCELLED),
            ]),
        ]),
        make_task("TK-1.2"),
    ]


def test_counts_include_every_level():
    tasks = _tree()
    assert count_all(tasks) == 5
    assert count_by_status(tasks, TaskStatus.DONE) == 2
    assert count_by_status(tasks, TaskStatus.CANCELLED) == 1
    assert count_by_status(tasks, TaskStatus.TODO) == 1


def test_counts_on_empty_tree():
    assert count_all([]) == 0
    assert count_by_status([], TaskStatus.DONE) == 0
    assert completion_percentage([]) == 0
    assert count_levels([]) == 0


def test_status_counts_has_every_status():
    counts = status_counts(_tree())
    assert counts == {
        TaskStatus.TODO: 1,
        TaskStatus.IN_PROGRESS: 1,
        TaskStatus.DONE: 2,
        TaskStatus.CANCELLED: 1,
    }
    assert sum(counts.values()) == count_all(_tree())


def test_completion_percentage_rounds():
    assert completion_percentage(_tree()) == 40
    # 1 of 3 -> 33.3, 2 of 3 -> 66.7
    assert completion_percentage([make_task("a", TaskStatus.DONE), make_task("b"), make_task("c")]) == 33
    assert completion_percentage([make_task("a", TaskStatus.DONE), make_task("b", TaskStatus.DONE),
                                  make_task("c")]) == 67
    # 1 of 8 -> 12.5 rounds half up
    tasks = [make_task("a", TaskStatus.DONE)] + [make_task(str(i)) for i in range(7)]
    assert completion_percentage(tasks) == 13


def test_completion_percentage_cancelled_is_not_done():
    tasks = [make_task("a", TaskStatus.CANCELLED), make_task("b", TaskStatus.DONE)]
    assert completion_percentage(tasks) == 50


def test_fold_visits_depth_first_with_depth():
    visited = fold_tasks(_tree(), [], lambda acc, task, depth: [*acc, (task.id, depth)])
    assert visited == [
        ("TK-1.1", 0),
        ("TK-1.1.1", 1),
        ("TK-1.1.2", 1),
        ("TK-1.1.2.1", 2),
        ("TK-1.2", 0),
    ]


def test_find_path_and_depth():
    tasks = _tree()
    path = find_path(tasks, "TK-1.1.2.1")
    assert [t.id for t in path] == ["TK-1.1", "TK-1.1.2", "TK-1.1.2.1"]
    assert len(find_path(tasks, "TK-1.2")) == 1
    assert find_task(tasks, "TK-9") is None
    assert find_path(tasks, "TK-9") is None
    assert count_levels(tasks) == 3


def test_update_task_in_tree_copies():
    tasks = _tree()
    updated = update_task_in_tree(
        tasks, "TK-1.1.2", lambda t: t.model_copy(update={"status": TaskStatus.DONE})
    )
    assert find_task(updated, "TK-1.1.2").status == TaskStatus.DONE
    assert find_task(tasks, "TK-1.1.2").status == TaskStatus.IN_PROGRESS
    # Untouched sibling is reused
    assert updated[1] is tasks[1]


def test_update_unknown_id_leaves_tree_unchanged():
    tasks = _tree()
    assert update_task_in_tree(tasks, "nope", lambda t: t.model_copy(update={"title": "x"})) == tasks


def test_delete_removes_subtree_without_renumbering():
    tasks = _tree()
    remaining = delete_task_in_tree(tasks, "TK-1.1.1")
    assert [t.id for t in remaining[0].subtasks] == ["TK-1.1.2"]
    assert count_all(remaining) == 4
    assert count_all(tasks) == 5

    assert [t.id for t in delete_task_in_tree(tasks, "TK-1.1")] == ["TK-1.2"]
