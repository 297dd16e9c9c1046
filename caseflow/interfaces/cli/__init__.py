"""CLI interface for caseflow using Typer.

Usage:
    caseflow case create ...   # Open a case
    caseflow review run        # Draft, triage and create tasks
    caseflow task tree         # Show the task tree
    caseflow task status ID DONE

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (case, task, review, config)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from caseflow import __version__
from caseflow.global_config import get_global_config

# Import command groups
from caseflow.interfaces.cli.commands import case, config, review, task
from caseflow.interfaces.cli.common import case_option

# Create the main Typer application
app = typer.Typer(
    name="caseflow",
    help="Case task trees with AI-drafted, human-reviewed breakdowns",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"caseflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """caseflow - Break cases into hierarchical task trees.

    Draft a task breakdown for a case, accept or reject each proposed
    task, and track the committed tasks to completion.
    """
    level = "DEBUG" if verbose else get_global_config().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(case.app, name="case")
app.add_typer(task.app, name="task")
app.add_typer(review.app, name="review")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("tree")
def tree(case: case_option = None) -> None:
    """Show the task tree (shortcut for 'task tree')."""
    task.tree(case=case)


@app.command("cases")
def cases() -> None:
    """List cases (shortcut for 'case list')."""
    case.list_cases()
