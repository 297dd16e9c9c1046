"""Draft review CLI commands.

Generate a draft task tree for a case, triage it and create the accepted
tasks. Decisions come from interactive prompts, a JSON decisions file, or
``--accept-all``.

A decisions file maps 1-based draft numbers to a decision; ``"*"`` sets
every node first:

    {"*": "accept", "2": "reject", "1.3": false}
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import TypeAdapter, ValidationError

from caseflow.application import (
    ReviewSession,
    add_tasks_to_case,
    commit_reviewed_draft,
)
from caseflow.domain.case import Case
from caseflow.domain.review import CommitBlocker, GeneratedTask, walk_drafts
from caseflow.domain.shared import Err, Result
from caseflow.global_config import get_global_config
from caseflow.infrastructure.ai import make_generator
from caseflow.interfaces.cli.common import (
    case_option,
    draft_label,
    load_case,
    parse_draft_path,
    print_draft_tree,
    print_error,
    print_info,
    print_success,
    print_task_tree,
    print_warning,
    save_case,
)

app = typer.Typer(help="Draft review commands")

_drafts_adapter = TypeAdapter(list[GeneratedTask])

DECISION_VALUES: dict[Any, bool | None] = {
    True: True,
    False: False,
    None: None,
    "accept": True,
    "reject": False,
    "clear": None,
}


# =============================================================================
# Helpers
# =============================================================================


async def _generate(
    session: ReviewSession,
    description: str,
    title: str,
    team: str | None,
) -> Result[list[GeneratedTask], str]:
    session.start_generation(description, title, team)
    return await session.wait()


def _generate_or_exit(case: Case, description: str | None) -> ReviewSession:
    """Run the generation call for a case and return the session in review."""
    session = ReviewSession(make_generator(get_global_config()), case.id)
    print_info(f"Generating draft tasks for {case.id}...")

    result = asyncio.run(_generate(session, description or case.description, case.title, case.team))
    if isinstance(result, Err):
        print_error(f"Generation failed: {result.error}")
        raise typer.Exit(1)
    return session


def _load_decisions(path: Path) -> dict[str, bool | None]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Cannot read decisions file {path}: {e}")
        raise typer.Exit(1)

    if not isinstance(raw, dict):
        print_error("Decisions file must contain a JSON object")
        raise typer.Exit(1)

    decisions: dict[str, bool | None] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            value = value.lower()
        if not (value is None or isinstance(value, (bool, str))) or value not in DECISION_VALUES:
            print_error(f"Invalid decision for {key}: {value!r} (use accept, reject or clear)")
            raise typer.Exit(1)
        decisions[key] = DECISION_VALUES[value]
    return decisions


def _apply_decisions(session: ReviewSession, decisions: dict[str, bool | None]) -> None:
    if "*" in decisions:
        for path, _draft in list(walk_drafts(session.drafts)):
            session.set_accepted(path, decisions["*"])

    for key, value in decisions.items():
        if key == "*":
            continue
        result = session.set_accepted(parse_draft_path(key), value)
        if isinstance(result, Err):
            print_error(f"{result.error} (draft number {key})")
            raise typer.Exit(1)


def _prompt_decisions(session: ReviewSession) -> None:
    typer.echo("Answer a (accept), r (reject), A (accept all) or R (reject all).")
    for path, draft in list(walk_drafts(session.drafts)):
        while True:
            answer = typer.prompt(f"{draft_label(path)}: {draft.title}", default="a").strip()
            if answer in ("a", "r", "A", "R"):
                break
            print_warning(f"Unknown answer: {answer!r}")

        if answer == "A":
            if not session.all_accepted:
                session.accept_all()
            return
        if answer == "R":
            if not session.all_rejected:
                session.reject_all()
            return
        session.set_accepted(path, answer == "a")


def _attach_or_exit(
    case: Case,
    result: Result[tuple[list, Any], CommitBlocker | str],
) -> None:
    """Report a commit result and save the committed tasks into the case."""
    if isinstance(result, Err):
        error = result.error
        print_error(error.message if isinstance(error, CommitBlocker) else error)
        raise typer.Exit(1)

    tasks, event = result.value
    if event.orphaned_count:
        print_warning(
            f"{event.orphaned_count} accepted task(s) under a rejected parent were not created"
        )

    attached = add_tasks_to_case(case, tasks)
    if isinstance(attached, Err):
        print_error(attached.error)
        raise typer.Exit(1)

    updated, _ = attached.value
    save_case(updated)
    print_success(f"Created {len(event.task_ids)} task(s) in {case.id}")
    print_task_tree(f"{updated.id}: {updated.title}", updated.tasks)


# =============================================================================
# Commands
# =============================================================================


@app.command("run")
def run(
    case: case_option = None,
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Describe the work (default: the case description)"
    ),
    decisions: Optional[Path] = typer.Option(
        None, "--decisions", help="JSON file with a decision per draft number"
    ),
    accept_all: bool = typer.Option(False, "--accept-all", help="Accept every draft task"),
) -> None:
    """Generate draft tasks, review them and create the accepted ones.

    Example:
        caseflow review run -c TK-1042
        caseflow review run -c TK-1042 --decisions decisions.json
    """
    loaded = load_case(case)
    session = _generate_or_exit(loaded, description)
    print_draft_tree(session.drafts)

    if accept_all:
        session.accept_all()
    elif decisions is not None:
        _apply_decisions(session, _load_decisions(decisions))
    else:
        _prompt_decisions(session)

    print_draft_tree(session.drafts)
    _attach_or_exit(loaded, session.commit(existing_root_count=len(loaded.tasks)))


@app.command("draft")
def draft(
    case: case_option = None,
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Describe the work (default: the case description)"
    ),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the draft to this file"),
) -> None:
    """Generate a draft without creating tasks.

    Edit the ``accepted`` flags in the written file, then create the tasks
    with ``caseflow review commit``.
    """
    loaded = load_case(case)
    session = _generate_or_exit(loaded, description)

    payload = json.dumps(
        [d.model_dump(mode="json") for d in session.drafts],
        indent=2,
        ensure_ascii=False,
    )
    session.abandon()

    if out is None:
        typer.echo(payload)
        return

    out.write_text(payload + "\n", encoding="utf-8")
    print_success(f"Draft written to {out}")
    print_info(f"Next: set \"accepted\" on each task, then caseflow review commit {out}")


@app.command("commit")
def commit(
    draft_file: Path = typer.Argument(..., help="Reviewed draft JSON file"),
    case: case_option = None,
) -> None:
    """Create tasks from a reviewed draft file."""
    loaded = load_case(case)

    try:
        drafts = _drafts_adapter.validate_json(draft_file.read_bytes())
    except OSError as e:
        print_error(f"Cannot read draft file {draft_file}: {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        print_error(f"Invalid draft file {draft_file}: {e}")
        raise typer.Exit(1)

    result = commit_reviewed_draft(drafts, loaded.id, existing_root_count=len(loaded.tasks))
    _attach_or_exit(loaded, result)
