import pytest

from conftest import make_pair, times
from teamroping.controllers import (
    all_qualifying_done,
    final_average,
    final_call_order,
    qualified_for_final,
    qualifying_average,
    qualifying_round_count,
    rank_pairs,
)
from teamroping.models.run_time import RunTime


def _scored(pid, qualifying, final=None, disqualified=False):
    pair = make_pair(pid, f"{pid}-head", f"{pid}-heel", runs=len(qualifying))
    pair.qualifying_runs = times(*qualifying)
    pair.final_run = RunTime.from_json(final)
    pair.disqualified = disqualified
    return pair


def test_worked_example(rule_table):
    # Combined handicap 4.0 needs two qualifying runs
    runs = rule_table.required_runs(4.0)
    pair = make_pair("p1", "h", "e", runs=runs, head_hc=2, heel_hc=2)
    assert pair.run_count == 2

    pair.qualifying_runs = times(9.2, 9.8)
    assert qualifying_average(pair) == pytest.approx(9.5)

    pair.final_run = RunTime.numeric(9.0)
    assert final_average(pair) == pytest.approx((9.2 + 9.8 + 9.0) / 3)


@pytest.mark.parametrize(
    "qualifying, disqualified",
    [
        ((9.0, None), False),
        ((9.0, "SAT"), True),
        ((9.0, 10.0), True),
        ((), False),
    ],
)
def test_averages_undefined(qualifying, disqualified):
    pair = _scored("p", qualifying, final=9.0, disqualified=disqualified)
    assert qualifying_average(pair) is None
    assert final_average(pair) is None


def test_final_average_needs_numeric_final():
    assert final_average(_scored("p", (9.0, 10.0))) is None
    assert final_average(_scored("p", (9.0, 10.0), final="SAT")) is None


def test_call_order_is_slowest_first_and_stable():
    fast = _scored("fast", (8.0,))
    tie_a = _scored("tie-a", (10.0,))
    slow = _scored("slow", (12.0,))
    tie_b = _scored("tie-b", (9.0, 11.0))
    incomplete = _scored("incomplete", (9.0, None))
    out = _scored("out", (7.0,), disqualified=True)

    pairs = [fast, tie_a, incomplete, slow, out, tie_b]
    assert [p.id for p in qualified_for_final(pairs)] == ["fast", "tie-a", "slow", "tie-b"]
    assert [p.id for p in final_call_order(pairs)] == ["slow", "tie-a", "tie-b", "fast"]


def test_rank_is_fastest_first_and_stable():
    first = _scored("first", (8.0,), final=8.0)
    tie_a = _scored("tie-a", (10.0,), final=10.0)
    tie_b = _scored("tie-b", (9.0,), final=11.0)
    no_final = _scored("no-final", (7.0,))
    pairs = [tie_a, no_final, tie_b, first]

    ranked = rank_pairs(pairs)
    assert [(r.position, r.pair.id) for r in ranked] == [
        (1, "first"),
        (2, "tie-a"),
        (3, "tie-b"),
    ]
    assert ranked[0].average == pytest.approx(8.0)


def test_rank_of_nothing():
    assert rank_pairs([]) == []
    assert final_call_order([]) == []


def test_qualifying_round_count():
    assert qualifying_round_count([]) == 0
    pairs = [
        _scored("a", (None,)),
        _scored("b", (None, None, None)),
        _scored("c", (None, None)),
    ]
    assert qualifying_round_count(pairs) == 3


def test_all_qualifying_done():
    done = _scored("done", (9.0, 9.5))
    out = _scored("out", ("SAT", None), disqualified=True)
    assert all_qualifying_done([done, out])
    assert not all_qualifying_done([done, _scored("open", (9.0, None))])
