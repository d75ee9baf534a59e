import pytest

from conftest import make_pair
from teamroping.controllers import RunEntry, RunLedger, coerce_entry, parse_raw_time
from teamroping.exceptions import InvalidRunTimeException, RoundNotFoundException
from teamroping.models.run_time import RunTime


@pytest.fixture
def ledger():
    return RunLedger()


# ========== RunLedger ==========


def test_sat_in_qualifying_disqualifies(ledger):
    pair = make_pair("p1", "a", "b", runs=2)
    ledger.set_qualifying_run(pair, 0, RunTime.numeric(9.0))
    assert not pair.disqualified

    ledger.set_qualifying_run(pair, 1, RunTime.sat())
    assert pair.disqualified


def test_clearing_the_last_sat_reinstates(ledger):
    pair = make_pair("p1", "a", "b", runs=2)
    ledger.set_qualifying_run(pair, 0, RunTime.sat())
    ledger.set_qualifying_run(pair, 1, RunTime.sat())

    ledger.set_qualifying_run(pair, 0, RunTime.unset())
    assert pair.disqualified

    ledger.set_qualifying_run(pair, 1, RunTime.numeric(10.5))
    assert not pair.disqualified


def test_qualifying_write_keeps_disqualification_from_final_sat(ledger):
    pair = make_pair("p1", "a", "b", runs=1)
    ledger.set_final_run(pair, RunTime.sat())
    ledger.set_qualifying_run(pair, 0, RunTime.numeric(8.0))
    assert pair.disqualified


def test_final_sat_disqualifies_and_final_write_never_reinstates(ledger):
    pair = make_pair("p1", "a", "b", runs=1)
    ledger.set_final_run(pair, RunTime.sat())
    assert pair.disqualified

    ledger.set_final_run(pair, RunTime.numeric(7.5))
    assert pair.disqualified
    assert pair.final_run == RunTime.numeric(7.5)


def test_final_write_does_not_clear_qualifying_disqualification(ledger):
    pair = make_pair("p1", "a", "b", runs=1)
    ledger.set_qualifying_run(pair, 0, RunTime.sat())
    ledger.set_final_run(pair, RunTime.numeric(9.0))
    assert pair.disqualified


@pytest.mark.parametrize("round_index", [-1, 2, 5])
def test_missing_round_is_rejected(ledger, round_index):
    pair = make_pair("p1", "a", "b", runs=2)
    with pytest.raises(RoundNotFoundException):
        ledger.set_qualifying_run(pair, round_index, RunTime.numeric(9.0))
    assert not any(run.is_set for run in pair.qualifying_runs)


# ========== Raw entry parsing ==========


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, RunTime.unset()),
        ("", RunTime.unset()),
        ("   ", RunTime.unset()),
        ("SAT", RunTime.sat()),
        ("sat", RunTime.sat()),
        ("9.2", RunTime.numeric(9.2)),
        ("9,2", RunTime.numeric(9.2)),
        (" 12 ", RunTime.numeric(12)),
        (11, RunTime.numeric(11)),
        (0, RunTime.numeric(0)),
    ],
)
def test_parse_raw_time(raw, expected):
    assert parse_raw_time(raw) == expected


@pytest.mark.parametrize("raw", ["fast", "9.2s", True, "-1", "nan"])
def test_parse_raw_time_rejects_garbage(raw):
    with pytest.raises(InvalidRunTimeException):
        parse_raw_time(raw)


def test_over_limit_without_authorization_becomes_sat():
    assert coerce_entry("16", 15, authorized=False) == RunTime.sat()


def test_over_limit_with_authorization_is_kept():
    assert coerce_entry("16", 15, authorized=True) == RunTime.numeric(16)


def test_time_at_the_limit_is_not_over():
    assert coerce_entry(15, 15, authorized=False) == RunTime.numeric(15)


# ========== RunEntry ==========


def test_entry_override_toggle():
    entry = RunEntry(time_limit=15)
    assert entry.enter("16.2") == RunTime.sat()

    assert entry.toggle_over_limit() is True
    assert entry.enter("16.2") == RunTime.numeric(16.2)


def test_entry_initialises_override_from_stored_over_limit_time():
    entry = RunEntry(time_limit=15, value=RunTime.numeric(17))
    assert entry.allow_over_limit is True
    assert RunEntry(time_limit=15, value=RunTime.numeric(12)).allow_over_limit is False


def test_clearing_entry_drops_override():
    entry = RunEntry(time_limit=15, value=RunTime.numeric(17))
    assert entry.clear() == RunTime.unset()
    assert entry.allow_over_limit is False
    assert entry.enter(17) == RunTime.sat()


def test_final_entry_is_always_authorized():
    entry = RunEntry(time_limit=15, always_authorized=True)
    assert entry.enter(40) == RunTime.numeric(40)
    assert entry.toggle_over_limit() is False
    entry.clear()
    assert entry.is_authorized


def test_override_cannot_change_while_round_locked():
    entry = RunEntry(time_limit=15)
    assert entry.toggle_over_limit(locked=True) is False
    assert entry.allow_over_limit is False


def test_mark_sat():
    entry = RunEntry(time_limit=15, value=RunTime.numeric(9))
    assert entry.mark_sat() == RunTime.sat()
