import json

import pytest
from typer.testing import CliRunner

from caseflow.interfaces.cli import app

runner = CliRunner()


def invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


@pytest.fixture
def leak_case(caseflow_home):
    result = invoke(
        "case", "create",
        "--title", "Leak",
        "--description", "Water leak under the bathroom sink",
        "--property", "P-1",
        "--id", "TK-1042",
    )
    assert result.exit_code == 0, result.output
    return "TK-1042"


def test_version():
    result = invoke("--version")
    assert result.exit_code == 0
    assert "caseflow version" in result.output


def test_case_create_validation(caseflow_home):
    result = invoke("case", "create", "-t", "Leak", "-d", "short", "--property", "P-1")
    assert result.exit_code == 1
    assert "at least 10 characters" in result.output


def test_case_create_duplicate(leak_case):
    result = invoke("case", "create", "-t", "Leak", "-d", "Another long description",
                    "--property", "P-1", "--id", leak_case)
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_case_list_and_show(leak_case):
    result = invoke("case", "list")
    assert result.exit_code == 0
    assert "TK-1042" in result.output

    result = invoke("case", "show", "-c", leak_case)
    assert result.exit_code == 0
    assert "Water leak under the bathroom sink" in result.output
    assert "No tasks yet." in result.output


def test_case_list_empty(caseflow_home):
    result = invoke("case", "list")
    assert result.exit_code == 0
    assert "No cases found." in result.output


def test_no_case_specified(caseflow_home):
    result = invoke("task", "tree")
    assert result.exit_code == 1
    assert "No case specified." in result.output


def test_review_accept_all_then_guarded_status(leak_case):
    result = invoke("review", "run", "-c", leak_case, "--accept-all")
    assert result.exit_code == 0, result.output
    assert "Created 6 task(s)" in result.output

    # The last case is remembered
    result = invoke("task", "tree")
    assert result.exit_code == 0
    assert "TK-1042.1.2" in result.output

    result = invoke("task", "status", "TK-1042.1", "DONE")
    assert result.exit_code == 1
    assert "Cannot mark task as DONE. 2 subtasks still incomplete." in result.output

    for task_id in ("TK-1042.1.1", "TK-1042.1.2", "TK-1042.1"):
        result = invoke("task", "status", task_id, "DONE")
        assert result.exit_code == 0, result.output

    result = invoke("case", "show")
    assert "Progress: 50%" in result.output


def test_review_with_decisions_file(leak_case, tmp_path):
    decisions = tmp_path / "decisions.json"
    decisions.write_text(json.dumps({"*": "reject", "1": "accept", "1.2": True}), encoding="utf-8")

    result = invoke("review", "run", "-c", leak_case, "--decisions", str(decisions))
    assert result.exit_code == 0, result.output
    assert "Created 2 task(s)" in result.output

    result = invoke("task", "tree", "-c", leak_case)
    assert "TK-1042.1.1" in result.output
    assert "TK-1042.2" not in result.output


def test_review_undecided_is_blocked(leak_case, tmp_path):
    decisions = tmp_path / "decisions.json"
    decisions.write_text(json.dumps({"1": "accept"}), encoding="utf-8")

    result = invoke("review", "run", "-c", leak_case, "--decisions", str(decisions))
    assert result.exit_code == 1
    assert "accept or reject each task" in result.output


def test_review_bad_decision_value(leak_case, tmp_path):
    decisions = tmp_path / "decisions.json"
    decisions.write_text(json.dumps({"1": "maybe"}), encoding="utf-8")

    result = invoke("review", "run", "-c", leak_case, "--decisions", str(decisions))
    assert result.exit_code == 1
    assert "Invalid decision" in result.output


def test_review_interactive(leak_case):
    # Task 1, Subtask 1.1, Subtask 1.2, Task 2, Task 3, Task 4
    result = invoke("review", "run", "-c", leak_case, input="a\n\nr\nr\nx\nr\nr\n")
    assert result.exit_code == 0, result.output
    assert "Unknown answer" in result.output
    assert "Created 2 task(s)" in result.output


def test_review_interactive_reject_all(leak_case):
    result = invoke("review", "run", "-c", leak_case, input="R\n")
    assert result.exit_code == 1
    assert "accept at least one item" in result.output


def test_review_draft_then_commit(leak_case, tmp_path):
    draft_file = tmp_path / "draft.json"
    result = invoke("review", "draft", "-c", leak_case, "--out", str(draft_file))
    assert result.exit_code == 0, result.output

    drafts = json.loads(draft_file.read_text(encoding="utf-8"))
    assert all(d["accepted"] is None for d in drafts)
    for index, draft in enumerate(drafts):
        draft["accepted"] = index == 1
        for sub in draft["subtasks"]:
            sub["accepted"] = True
    draft_file.write_text(json.dumps(drafts), encoding="utf-8")

    result = invoke("review", "commit", str(draft_file), "-c", leak_case)
    assert result.exit_code == 0, result.output
    assert "Created 1 task(s)" in result.output
    assert "not created" in result.output


def test_task_add_update_delete(leak_case):
    result = invoke("task", "add", "Call the guest", "-c", leak_case, "--team", "GUEST_COMM_DE")
    assert result.exit_code == 0, result.output
    assert "Added TK-1042.1" in result.output

    result = invoke("task", "add", "Leave a voicemail", "--parent", "TK-1042.1", "-c", leak_case)
    assert "Added TK-1042.1.1" in result.output

    result = invoke("task", "update", "TK-1042.1.1", "--assignee", "u-7", "-c", leak_case)
    assert result.exit_code == 0, result.output
    assert "assigned_to" in result.output

    result = invoke("task", "update", "TK-1042.1.1", "-c", leak_case)
    assert result.exit_code == 1

    result = invoke("task", "update", "TK-1042.1.1", "--title", "", "-c", leak_case)
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid value for title" in result.output

    result = invoke("task", "delete", "TK-1042.1", "--yes", "-c", leak_case)
    assert result.exit_code == 0
    assert "Deleted 2 task(s)" in result.output

    result = invoke("task", "delete", "TK-1042.1", "--yes", "-c", leak_case)
    assert result.exit_code == 1


def test_case_option_from_env(leak_case, monkeypatch):
    monkeypatch.setenv("CASEFLOW_CASE", leak_case)
    result = invoke("task", "add", "From env")
    assert result.exit_code == 0, result.output
    assert "Added TK-1042.1" in result.output


def test_config_set_and_show(caseflow_home):
    result = invoke("config", "set", "cancelled_satisfies_done", "true")
    assert result.exit_code == 0, result.output

    result = invoke("config", "show")
    assert "cancelled_satisfies_done = True" in result.output

    result = invoke("config", "set", "generator", "gpt")
    assert result.exit_code == 1

    result = invoke("config", "set", "nope", "1")
    assert result.exit_code == 1
    assert "Unknown setting" in result.output

    result = invoke("config", "unset", "cancelled_satisfies_done")
    assert result.exit_code == 0
    assert "cancelled_satisfies_done = False" in invoke("config", "show").output
