"""CLI command groups for caseflow.

Each module provides a Typer app registered on the main app with
app.add_typer():
- case: Case management (create, list, show, delete)
- task: Task tree management (add, update, status, delete, tree)
- review: Draft generation and triage (run, draft, commit)
- config: Settings (show, set, unset)
"""

from caseflow.interfaces.cli.commands import case, config, review, task

__all__ = ["case", "task", "review", "config"]
