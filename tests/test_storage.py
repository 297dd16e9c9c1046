import json

from caseflow.application import add_task
from caseflow.domain.shared import Err, Ok
from caseflow.global_config import (
    Settings,
    get_config_dir,
    get_data_dir,
    get_global_config,
    get_last_case_id,
    save_global_config,
    save_last_case_id,
)
from caseflow.infrastructure.storage import CaseRepository, JsonStorage


def test_json_storage_roundtrip_and_missing(tmp_path):
    storage = JsonStorage()
    path = tmp_path / "nested" / "data.json"

    assert isinstance(storage.save_json(path, {"a": [1, 2]}), Ok)
    assert storage.load_json(path) == Ok({"a": [1, 2]})
    assert not path.with_suffix(".json.tmp").exists()
    assert isinstance(storage.load_json(tmp_path / "missing.json"), Err)


def test_json_storage_invalid_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{oops", encoding="utf-8")
    assert isinstance(JsonStorage().load_json(path), Err)


def test_repository_save_and_get(tmp_path, case):
    repo = CaseRepository(tmp_path)
    case, _ = add_task(case, "Call the guest").value

    assert isinstance(repo.save(case), Ok)
    assert (tmp_path / "cases" / "TK-1.json").exists()

    loaded = repo.get("TK-1")
    assert isinstance(loaded, Ok)
    assert loaded.value == case


def test_repository_missing_case(tmp_path):
    repo = CaseRepository(tmp_path)
    assert repo.get("TK-404") == Err("Case not found: TK-404")
    assert not repo.exists("TK-404")
    assert isinstance(repo.delete("TK-404"), Err)


def test_repository_list_skips_invalid(tmp_path, case, caplog):
    repo = CaseRepository(tmp_path)
    assert repo.list_all() == Ok([])

    repo.save(case)
    repo.save(case.model_copy(update={"id": "TK-0"}))
    (tmp_path / "cases" / "TK-bad.json").write_text(json.dumps({"id": 1}), encoding="utf-8")

    result = repo.list_all()
    assert [c.id for c in result.value] == ["TK-0", "TK-1"]
    assert "TK-bad.json" in caplog.text


def test_repository_delete(tmp_path, case):
    repo = CaseRepository(tmp_path)
    repo.save(case)
    assert isinstance(repo.delete(case.id), Ok)
    assert not repo.exists(case.id)


# =============================================================================
# Settings
# =============================================================================


def test_settings_defaults(caseflow_home):
    settings = get_global_config()
    assert settings == Settings()
    assert get_config_dir() == caseflow_home
    assert get_data_dir(settings) == caseflow_home / "data"


def test_settings_roundtrip(caseflow_home, tmp_path):
    save_global_config(Settings(generator="ollama", cancelled_satisfies_done=True,
                                data_dir=str(tmp_path / "cases")))
    settings = get_global_config()
    assert settings.generator == "ollama"
    assert settings.cancelled_satisfies_done
    assert get_data_dir(settings) == tmp_path / "cases"


def test_invalid_settings_fall_back_to_defaults(caseflow_home):
    caseflow_home.mkdir(parents=True)
    (caseflow_home / "config.json").write_text('{"generator": "gpt"}', encoding="utf-8")
    assert get_global_config() == Settings()


def test_last_case_id(caseflow_home):
    assert get_last_case_id() is None
    save_last_case_id("TK-7")
    assert get_last_case_id() == "TK-7"
