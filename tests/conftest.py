import pytest

from caseflow.domain.case import Case


@pytest.fixture
def case():
    return Case(
        id="TK-1",
        title="WiFi down",
        description="Guest reports the WiFi has been down since noon",
        property_id="P-12",
    )


@pytest.fixture
def caseflow_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("CASEFLOW_HOME", str(home))
    monkeypatch.delenv("CASEFLOW_CASE", raising=False)
    return home
