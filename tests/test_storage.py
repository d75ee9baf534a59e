import json
import logging
from datetime import date

import pytest

from teamroping.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidSnapshotException,
)
from teamroping.models.competition import EventSettings
from teamroping.storage import (
    backup_filename,
    load_snapshot,
    restore_from_file,
    save_snapshot,
)


def test_backup_filename():
    settings = EventSettings(event_name="Copa do  Laço")
    assert (
        backup_filename(settings, today=date(2025, 6, 14))
        == "backup_competicao_Copa_do_Laço_2025-06-14.json"
    )


def test_save_and_load(competition, tmp_path):
    competition.generate_pairs()
    competition.record_qualifying_run(competition.pairs[0].id, 0, "SAT")
    path = tmp_path / "event.json"

    save_snapshot(competition, path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["settings"]["event_name"] == "Copa do Laço"
    assert raw["pairs"][0]["qualifying_runs"][0] == "SAT"
    assert "export_date" in raw

    loaded = load_snapshot(path)
    assert [p.id for p in loaded.pairs] == [p.id for p in competition.pairs]
    assert loaded.pairs[0].disqualified


def test_non_ascii_is_written_verbatim(competition, tmp_path):
    path = save_snapshot(competition, tmp_path / "event.json")
    assert "Copa do Laço" in path.read_text(encoding="utf-8")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileLoadException):
        load_snapshot(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(FileLoadException):
        load_snapshot(path)


def test_load_malformed_snapshot(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(InvalidSnapshotException):
        load_snapshot(path)


def test_save_to_directory_fails(competition, tmp_path):
    with pytest.raises(FileSaveException):
        save_snapshot(competition, tmp_path)


def test_restore_from_file(competition, tmp_path):
    path = save_snapshot(competition, tmp_path / "event.json")
    competition.reset()
    assert competition.competitors == {}

    restore_from_file(competition, path)
    assert set(competition.competitors) == {"ana", "bia", "caio", "davi", "edu"}
    assert competition.settings.event_name == "Copa do Laço"


def test_missing_file_is_logged_without_traceback(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="teamroping"):
        with pytest.raises(FileLoadException):
            load_snapshot(tmp_path / "missing.json")
    assert "Error loading competition" in caplog.text
    assert all(record.exc_info is None for record in caplog.records)
