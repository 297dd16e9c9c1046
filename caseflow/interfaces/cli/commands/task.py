"""Task management CLI commands.

Commands for building and progressing a case's task tree.
"""

from typing import Optional

import typer
from pydantic import ValidationError

from caseflow.application import (
    TaskUpdate,
    add_subtask,
    add_task,
    delete_task,
    get_tree_stats,
    update_task,
    update_task_status,
)
from caseflow.domain.shared import Err
from caseflow.domain.task import TaskStatus, count_all, find_task
from caseflow.interfaces.cli.common import (
    cancelled_satisfies_done,
    case_option,
    load_case,
    print_error,
    print_success,
    print_task_tree,
    save_case,
)

app = typer.Typer(help="Task management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    parent: Optional[str] = typer.Option(
        None, "--parent", "-p", help="Parent task ID (omit for a root task)"
    ),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Task details"),
    team: Optional[str] = typer.Option(None, "--team", help="Responsible team code"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee user ID"),
    case: case_option = None,
) -> None:
    """Add a task, or a subtask when --parent is given.

    Example:
        caseflow task add "Call the guest" -c TK-1042
        caseflow task add "Leave a voicemail" --parent TK-1042.1
    """
    loaded = load_case(case)

    if parent:
        result = add_subtask(loaded, parent, title, description, team, assignee)
    else:
        result = add_task(loaded, title, description, team, assignee)

    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    updated, event = result.value
    save_case(updated)
    print_success(f"Added {event.task_id}: {event.title}")


@app.command("update")
def update(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New details"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="New assignee"),
    team: Optional[str] = typer.Option(None, "--team", help="New team code"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="New status"),
    case: case_option = None,
) -> None:
    """Update fields of a task.

    Only the options given are changed.
    """
    loaded = load_case(case)

    given = {
        "title": title,
        "description": description,
        "assigned_to": assignee,
        "team": team,
        "status": status,
    }
    changes = {k: v for k, v in given.items() if v is not None}
    if not changes:
        print_error("Nothing to update. Pass at least one of --title, --description, "
                    "--assignee, --team, --status.")
        raise typer.Exit(1)

    try:
        task_update = TaskUpdate(**changes)
    except ValidationError as e:
        error = e.errors()[0]
        print_error(f"Invalid value for {error['loc'][0]}: {error['msg']}")
        raise typer.Exit(1)

    result = update_task(
        loaded,
        task_id,
        task_update,
        cancelled_satisfies_done=cancelled_satisfies_done(),
    )
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    updated, event = result.value
    save_case(updated)
    print_success(f"Updated {task_id}: {', '.join(event.changed_fields)}")


@app.command("status")
def status(
    task_id: str = typer.Argument(..., help="Task ID"),
    new_status: TaskStatus = typer.Argument(..., help="TODO, IN_PROGRESS, DONE or CANCELLED"),
    case: case_option = None,
) -> None:
    """Change the status of a task.

    A task cannot be marked DONE while any of its subtasks is not DONE.
    """
    loaded = load_case(case)

    result = update_task_status(
        loaded,
        task_id,
        new_status,
        cancelled_satisfies_done=cancelled_satisfies_done(),
    )
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    updated, event = result.value
    save_case(updated)
    print_success(f"{task_id}: {event.old_status.value} -> {event.new_status.value}")


@app.command("delete")
def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    case: case_option = None,
) -> None:
    """Delete a task together with its subtasks."""
    loaded = load_case(case)

    task = find_task(loaded.tasks, task_id)
    if task is None:
        print_error(f"Task not found: {task_id}")
        raise typer.Exit(1)

    if not yes:
        extra = count_all(task.subtasks)
        suffix = f" and {extra} subtask(s)" if extra else ""
        typer.confirm(f"Delete {task_id}{suffix}?", abort=True)

    result = delete_task(loaded, task_id)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    updated, event = result.value
    save_case(updated)
    print_success(f"Deleted {event.removed_count} task(s)")


@app.command("tree")
def tree(case: case_option = None) -> None:
    """Show the task tree with completion progress."""
    loaded = load_case(case)

    if not loaded.tasks:
        typer.echo(f"{loaded.id} has no tasks.")
        typer.echo(f"Add some with: caseflow review run -c {loaded.id}")
        return

    stats = get_tree_stats(loaded.tasks)
    print_task_tree(f"{loaded.id}: {loaded.title} ({stats.progress_percent}%)", loaded.tasks)
    typer.echo(f"{stats.done}/{stats.total} done")
