"""Tests for the terminal front end, run against a temporary storage file."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from detox_navigator import cli
from detox_navigator.config import get_config


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    path = tmp_path / "navigator.json"
    monkeypatch.setenv("DETOX_STORAGE_PATH", str(path))
    monkeypatch.setenv("SUMMARY_TIMEZONE", "UTC")
    monkeypatch.setenv("ENVIRONMENT", "production")
    # Leave the process-wide structlog setup alone
    monkeypatch.setattr(cli, "configure_logging", lambda config: None)
    get_config.cache_clear()
    yield path
    get_config.cache_clear()


def stored_blob(path: Path) -> dict:
    return json.loads(json.loads(path.read_text("utf-8"))["home_detox_navigator_v1"])


def test_add_client_and_entry_persist_between_runs(isolated_storage: Path) -> None:
    assert cli.main(["add-client", "J.D."]) == 0
    assert cli.main(["add-entry", "--bp", "130/80", "--ciwa", "16"]) == 0

    blob = stored_blob(isolated_storage)
    assert [c["name"] for c in blob["clients"]] == ["J.D."]
    assert blob["entries"][0]["bp"] == "130/80"
    assert blob["entries"][0]["ciwa"] == 16
    assert blob["selectedClientId"] == blob["clients"][0]["id"]


def test_blank_client_name_fails(isolated_storage: Path) -> None:
    assert cli.main(["add-client", "   "]) == 1
    assert not isolated_storage.exists()


def test_add_entry_without_client_fails() -> None:
    assert cli.main(["add-entry", "--notes", "intake"]) == 1


def test_summary_prints_report(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["add-client", "J.D."])
    cli.main(["add-entry", "--hr", "88"])
    capsys.readouterr()

    assert cli.main(["summary"]) == 0

    out = capsys.readouterr().out
    assert "Home Detox Summary" in out
    assert "Vitals: HR 88" in out


def test_summary_without_client_fails() -> None:
    assert cli.main(["summary"]) == 1


def test_copy_writes_summary_file(tmp_path: Path) -> None:
    target = tmp_path / "summary.txt"
    cli.main(["add-client", "J.D."])
    cli.main(["add-entry", "--meds", "librium 25mg"])

    assert cli.main(["copy", str(target)]) == 0

    text = target.read_text("utf-8")
    assert text.startswith("Home Detox Summary\nClient: J.D.\n")
    assert "Meds: librium 25mg" in text


def test_select_switches_client(isolated_storage: Path) -> None:
    cli.main(["add-client", "A"])
    cli.main(["add-client", "B"])
    first_id = stored_blob(isolated_storage)["clients"][0]["id"]

    assert cli.main(["select", first_id]) == 0

    assert stored_blob(isolated_storage)["selectedClientId"] == first_id


def test_clients_and_timeline_render(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["add-client", "A"])
    cli.main(["add-entry", "--ciwa", "12"])
    capsys.readouterr()

    assert cli.main(["clients"]) == 0
    assert cli.main(["timeline"]) == 0

    out = capsys.readouterr().out
    assert "active" in out
    assert "watch" in out
