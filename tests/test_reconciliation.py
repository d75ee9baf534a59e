import random

from conftest import make_competitor, make_pair, times
from teamroping.controllers import HandicapRuleTable, reconcile_pairs
from teamroping.controllers.reconciliation import resize_runs
from teamroping.models.enums import Modality
from teamroping.models.run_time import RunTime


def _by_key(pairs):
    return {p.key: p for p in pairs}


def test_resize_runs():
    runs = times(9.0, 10.0, "SAT")
    assert resize_runs(runs, 2) == times(9.0, 10.0)
    assert resize_runs(runs, 3) == runs
    assert resize_runs(runs, 5) == times(9.0, 10.0, "SAT", None, None)
    assert resize_runs(runs, 5) is not runs


def test_matched_pairs_keep_id_times_and_flags(roster, rule_table, rng):
    existing = make_pair("kept", "ana", "davi", runs=1)
    existing.qualifying_runs = times("SAT")
    existing.final_run = RunTime.numeric(8.5)
    existing.disqualified = True

    pairs = _by_key(reconcile_pairs([existing], roster, 7, rule_table, rng=rng))

    kept = pairs[("ana", "davi")]
    assert kept.id == "kept"
    assert kept.qualifying_runs == times("SAT")
    assert kept.final_run == RunTime.numeric(8.5)
    assert kept.disqualified is True


def test_quota_growth_appends_empty_slots(roster, rng):
    existing = make_pair("p", "ana", "davi", runs=1)  # combined 2.5
    existing.qualifying_runs = times(9.1)
    table = HandicapRuleTable.from_pairs([(3.0, 3), (100, 4)])

    kept = _by_key(reconcile_pairs([existing], roster, 7, table, rng=rng))[("ana", "davi")]
    assert kept.qualifying_runs == times(9.1, None, None)


def test_quota_shrink_truncates_the_tail(roster, rng):
    existing = make_pair("p", "ana", "davi", runs=3)
    existing.qualifying_runs = times(9.1, 9.2, 9.3)
    table = HandicapRuleTable.from_pairs([(3.0, 1), (100, 4)])

    kept = _by_key(reconcile_pairs([existing], roster, 7, table, rng=rng))[("ana", "davi")]
    assert kept.qualifying_runs == times(9.1)


def test_snapshots_and_handicap_are_refreshed(roster, rule_table, rng):
    existing = make_pair("p", "ana", "davi", runs=1, head_hc=0.5, heel_hc=0.5)
    assert existing.combined_handicap == 1.0

    kept = _by_key(reconcile_pairs([existing], roster, 7, rule_table, rng=rng))[
        ("ana", "davi")
    ]
    assert kept.combined_handicap == 2.5
    assert kept.header.handicap == 1.0
    assert kept.heeler.handicap == 1.5
    assert kept.header.modality is Modality.HEAD


def test_new_and_dropped_pairs(rule_table, rng):
    roster = [
        make_competitor("h", 1.0, Modality.HEAD),
        make_competitor("e", 1.0, Modality.HEEL),
        make_competitor("n", 1.0, Modality.HEEL),
    ]
    existing = make_pair("p", "h", "e", runs=1)
    existing.qualifying_runs = times(9.0)
    gone = make_pair("gone", "h", "left", runs=1)

    pairs = _by_key(reconcile_pairs([existing, gone], roster, 7, rule_table, rng=rng))

    assert set(pairs) == {("h", "e"), ("h", "n")}
    assert pairs[("h", "e")].qualifying_runs == times(9.0)
    fresh = pairs[("h", "n")]
    assert fresh.qualifying_runs == times(None)
    assert fresh.final_run == RunTime.unset()
    assert fresh.disqualified is False


def test_pairs_above_new_max_handicap_are_dropped(roster, rule_table):
    existing = make_pair("p", "caio", "edu", runs=3, head_hc=3.0, heel_hc=2.5)
    pairs = reconcile_pairs([existing], roster, 5.0, rule_table, rng=random.Random(1))
    assert ("caio", "edu") not in _by_key(pairs)
    assert all(p.combined_handicap <= 5.0 for p in pairs)
