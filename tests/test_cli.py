import json

import pytest

from teamroping.cli import main, parse_lock_target, parse_round


@pytest.fixture
def snapshot(tmp_path):
    return str(tmp_path / "event.json")


def _run(snapshot, *args):
    return main(["-f", snapshot, *args])


def _pair_ids(snapshot):
    with open(snapshot, encoding="utf-8") as f:
        return [pair["id"] for pair in json.load(f)["pairs"]]


def _add(snapshot, name, role, handicap):
    return _run(snapshot, "add-competitor", name, "--role", role, "--handicap", handicap)


def _setup_event(snapshot):
    assert _run(snapshot, "init", "--name", "Copa Teste", "--date", "2025-06-14") == 0
    assert _add(snapshot, "Ana Lima", "head", "1") == 0
    assert _add(snapshot, "Davi Rocha", "heel", "1.5") == 0
    assert _run(snapshot, "--seed", "3", "generate") == 0
    (pair_id,) = _pair_ids(snapshot)
    return pair_id


def test_parse_round():
    assert parse_round("1") == 0
    assert parse_lock_target("final") is None
    assert parse_lock_target("3") == 2


def test_round_zero_is_a_usage_error(snapshot):
    with pytest.raises(SystemExit) as excinfo:
        _run(snapshot, "lock", "0")
    assert excinfo.value.code == 2


def test_full_event(snapshot, capsys):
    pair_id = _setup_event(snapshot)

    assert _run(snapshot, "record", pair_id, "1", "9,2") == 0
    assert _run(snapshot, "record-final", pair_id, "9.0") == 0
    capsys.readouterr()

    assert _run(snapshot, "standings") == 0
    out = capsys.readouterr().out
    assert "Copa Teste" in out
    assert "14/06/2025" in out
    assert "Ana Lima / Davi Rocha" in out
    assert "avg 9.100" in out


def test_over_limit_needs_authorization(snapshot, capsys):
    pair_id = _setup_event(snapshot)
    capsys.readouterr()

    _run(snapshot, "record", pair_id, "1", "16")
    assert "SAT" in capsys.readouterr().out

    _run(snapshot, "record", pair_id, "1", "16", "--authorize")
    assert "16.000" in capsys.readouterr().out


def test_locked_round_fails(snapshot):
    pair_id = _setup_event(snapshot)
    assert _run(snapshot, "lock", "1") == 0
    assert _run(snapshot, "record", pair_id, "1", "9.2") == 1
    assert _run(snapshot, "unlock", "1") == 0
    assert _run(snapshot, "record", pair_id, "1", "9.2") == 0


def test_init_refuses_to_overwrite(snapshot):
    assert _run(snapshot, "init") == 0
    assert _run(snapshot, "init") == 1
    assert _run(snapshot, "init", "--force") == 0


def test_missing_file_is_reported(snapshot):
    assert _run(snapshot, "competitors") == 1


def test_rules_listing(snapshot, capsys):
    _run(snapshot, "init", "--max-handicap", "120")
    capsys.readouterr()
    assert _run(snapshot, "rules") == 0
    out = capsys.readouterr().out
    assert "HC <=   3.5: 1 qualifying, 2 total" in out
    assert "Warning: Maximum handicap 120" in out


def test_snapshot_without_settings_is_reported(snapshot):
    with open(snapshot, "w", encoding="utf-8") as f:
        json.dump({"settings": None, "competitors": []}, f)
    assert _run(snapshot, "pairs") == 1


def test_add_rule_rejects_nan(snapshot):
    _run(snapshot, "init")
    assert _run(snapshot, "add-rule", "nan", "9") == 1
    with open(snapshot, encoding="utf-8") as f:
        thresholds = [rule["threshold"] for rule in json.load(f)["handicap_rules"]]
    assert thresholds == [3.5, 4.5, 6.5, 100.0]
