"""Case management CLI commands.

Commands for creating, listing, showing and deleting cases.
"""

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from caseflow.application import create_case, get_case_summary, get_tree_stats
from caseflow.domain.shared import Err
from caseflow.domain.task import format_team
from caseflow.interfaces.cli.common import (
    case_option,
    console,
    get_case_id,
    get_repository,
    load_case,
    print_error,
    print_header,
    print_info,
    print_success,
    print_task_tree,
    save_case,
)

app = typer.Typer(help="Case management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("create")
def create(
    title: str = typer.Option(..., "--title", "-t", help="Case title"),
    description: str = typer.Option(
        ..., "--description", "-d", help="Issue description (at least 10 characters)"
    ),
    team: Optional[str] = typer.Option(None, "--team", help="Responsible team code"),
    property_id: Optional[str] = typer.Option(None, "--property", help="Linked property ID"),
    reservation_id: Optional[str] = typer.Option(
        None, "--reservation", help="Linked reservation ID"
    ),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee user ID"),
    case_id: Optional[str] = typer.Option(
        None, "--id", help="Explicit case ID (default: random TK-####)"
    ),
) -> None:
    """Create a new case with no tasks.

    Example:
        caseflow case create -t "WiFi down" -d "Guest reports no WiFi since noon" --property P-12
    """
    repo = get_repository()
    if case_id and repo.exists(case_id):
        print_error(f"Case already exists: {case_id}")
        raise typer.Exit(1)

    result = create_case(
        title=title,
        description=description,
        team=team,
        property_id=property_id,
        reservation_id=reservation_id,
        assigned_to=assignee,
        case_id=case_id,
    )
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    case, _event = result.value
    # Random ids may collide with a stored case
    while case_id is None and repo.exists(case.id):
        case, _event = create_case(
            title=title,
            description=description,
            team=team,
            property_id=property_id,
            reservation_id=reservation_id,
            assigned_to=assignee,
        ).value

    save_case(case)
    print_success(f"Created case {case.id}: {case.title}")
    print_info(f"Next: caseflow review run -c {case.id}")


@app.command("list")
def list_cases() -> None:
    """List all cases with their task progress."""
    result = get_repository().list_all()
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    cases = result.value
    if not cases:
        typer.echo("No cases found.")
        typer.echo("Create one with: caseflow case create")
        return

    table = Table(title="Cases")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Team")
    table.add_column("Tasks", justify="right")
    table.add_column("Progress", justify="right")

    for case in cases:
        summary = get_case_summary(case)
        table.add_row(
            summary.id,
            escape(summary.title),
            summary.status.value,
            format_team(summary.team),
            f"{summary.completed_tasks}/{summary.total_tasks}",
            f"{summary.progress_percent}%",
        )

    console.print(table)


@app.command("show")
def show(case: case_option = None) -> None:
    """Show case details and its task tree."""
    loaded = load_case(case)
    stats = get_tree_stats(loaded.tasks)

    print_header(f"{loaded.id}: {loaded.title}")
    typer.echo(f"Status:      {loaded.status.value}")
    typer.echo(f"Team:        {format_team(loaded.team)}")
    if loaded.property_id:
        typer.echo(f"Property:    {loaded.property_id}")
    if loaded.reservation_id:
        typer.echo(f"Reservation: {loaded.reservation_id}")
    if loaded.assigned_to:
        typer.echo(f"Assignee:    {loaded.assigned_to}")
    typer.echo("")
    typer.echo(loaded.description)
    typer.echo("")
    typer.echo(
        f"Progress: {stats.progress_percent}% "
        f"({stats.done}/{stats.total} done, {stats.in_progress} in progress, "
        f"{stats.cancelled} cancelled)"
    )
    typer.echo("")

    if loaded.tasks:
        print_task_tree("Tasks", loaded.tasks)
    else:
        typer.echo("No tasks yet.")


@app.command("delete")
def delete(
    case: case_option = None,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a case and all of its tasks."""
    case_id = get_case_id(case)
    if not yes:
        typer.confirm(f"Delete case {case_id} and all of its tasks?", abort=True)

    result = get_repository().delete(case_id)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    print_success(f"Deleted case {case_id}")
