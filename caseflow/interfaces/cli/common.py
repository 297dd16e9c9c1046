"""Shared utilities for caseflow CLI commands.

- Case detection and repository access
- Formatted output helpers (error, success, info)
- Task tree and draft tree rendering
"""

import os
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree as RichTree

from caseflow.domain.case import Case
from caseflow.domain.review import DraftPath, GeneratedTask
from caseflow.domain.shared import Err
from caseflow.domain.task import Task, TaskStatus, format_team
from caseflow.global_config import (
    get_data_dir,
    get_global_config,
    get_last_case_id,
    save_last_case_id,
)
from caseflow.infrastructure.storage import CaseRepository

CASE_ENV = "CASEFLOW_CASE"

console = Console()

# Reusable case option for CLI commands
case_option = Annotated[Optional[str], typer.Option(
    "--case", "-c",
    help="Case ID (or set CASEFLOW_CASE env var)",
    envvar=CASE_ENV,
)]

STATUS_MARKS = {
    TaskStatus.TODO: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.DONE: "[x]",
    TaskStatus.CANCELLED: "[-]",
}

DECISION_MARKS = {None: "?", True: "+", False: "-"}


def get_case_id(explicit_case: str | None = None) -> str:
    """Get the case ID, raising an error if not found.

    Resolution order:
    1. Explicit case parameter (from -c/--case CLI option)
    2. CASEFLOW_CASE environment variable
    3. The last case used

    Raises:
        typer.Exit: If no case can be determined.
    """
    if explicit_case:
        return explicit_case

    env_case = os.environ.get(CASE_ENV)
    if env_case:
        return env_case

    last_case = get_last_case_id()
    if last_case:
        return last_case

    print_error("No case specified.")
    typer.echo("")
    typer.echo("Specify a case using one of:")
    typer.echo("  1. Use -c/--case option: caseflow task tree -c TK-1042")
    typer.echo("  2. Set CASEFLOW_CASE env var: export CASEFLOW_CASE=TK-1042")
    typer.echo("")
    typer.echo("List available cases with: caseflow case list")
    raise typer.Exit(1)


def get_repository() -> CaseRepository:
    """Case repository rooted at the configured data directory."""
    return CaseRepository(get_data_dir())


def cancelled_satisfies_done() -> bool:
    """Whether CANCELLED subtasks count as complete (from settings)."""
    return get_global_config().cancelled_satisfies_done


def load_case(case_id: str | None) -> Case:
    """Resolve and load a case, exiting with an error if it cannot be read."""
    resolved = get_case_id(case_id)
    result = get_repository().get(resolved)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    save_last_case_id(resolved)
    return result.value


def save_case(case: Case) -> None:
    """Persist a case, exiting with an error if it cannot be written."""
    result = get_repository().save(case)
    if isinstance(result, Err):
        print_error(f"Failed to save case: {result.error}")
        raise typer.Exit(1)
    save_last_case_id(case.id)


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message."""
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def draft_label(path: DraftPath) -> str:
    """Display label for a draft node: 'Task 2' or 'Subtask 2.1'."""
    number = ".".join(str(i + 1) for i in path)
    return f"Task {number}" if len(path) == 1 else f"Subtask {number}"


def parse_draft_path(label: str) -> DraftPath:
    """Parse a 1-based dotted number like '2.1' into a draft path."""
    try:
        path = tuple(int(part) - 1 for part in label.strip().split("."))
    except ValueError:
        raise typer.BadParameter(f"Invalid draft number: {label!r}") from None
    if not path or any(i < 0 for i in path):
        raise typer.BadParameter(f"Invalid draft number: {label!r}")
    return path


def _task_label(task: Task) -> str:
    label = f"{STATUS_MARKS[task.status]} {task.id}  {task.title}"
    if task.team:
        label += f"  ({format_team(task.team)})"
    if task.assigned_to:
        label += f"  @{task.assigned_to}"
    return label


def print_task_tree(title: str, tasks: list[Task]) -> None:
    """Render a task tree."""
    root = RichTree(escape(title))

    def add(branch: RichTree, nodes: list[Task]) -> None:
        for task in nodes:
            add(branch.add(escape(_task_label(task)), highlight=False), task.subtasks)

    add(root, tasks)
    console.print(root)


def print_draft_tree(drafts: list[GeneratedTask]) -> None:
    """Render a draft tree with each node's decision."""
    root = RichTree("Draft tasks")

    def add(branch: RichTree, nodes: list[GeneratedTask], prefix: DraftPath) -> None:
        for index, draft in enumerate(nodes):
            path = prefix + (index,)
            label = f"{DECISION_MARKS[draft.accepted]} {draft_label(path)}: {draft.title}"
            if draft.team:
                label += f"  ({format_team(draft.team)})"
            add(branch.add(escape(label), highlight=False), draft.subtasks, path)

    add(root, drafts, ())
    console.print(root)


__all__ = [
    "case_option",
    "cancelled_satisfies_done",
    "console",
    "draft_label",
    "get_case_id",
    "get_repository",
    "load_case",
    "parse_draft_path",
    "print_draft_tree",
    "print_error",
    "print_header",
    "print_info",
    "print_separator",
    "print_success",
    "print_task_tree",
    "print_warning",
    "save_case",
]
