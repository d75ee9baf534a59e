import logging

import pytest

from teamroping.controllers.rule_table import HandicapRuleTable
from teamroping.exceptions import (
    DuplicateThresholdException,
    EmptyRuleTableException,
    InvalidRuleException,
)


@pytest.mark.parametrize(
    "combined, expected",
    [(0.0, 1), (3.5, 1), (4.0, 2), (4.5, 2), (5.0, 3), (6.5, 3), (7.0, 4), (100, 4)],
)
def test_required_runs_uses_smallest_threshold_at_or_above(rule_table, combined, expected):
    assert rule_table.required_runs(combined) == expected


def test_above_every_threshold_falls_back_to_largest_rule():
    table = HandicapRuleTable.from_pairs([(3.5, 1), (5.0, 3)])
    assert table.required_runs(9.0) == 3


def test_rules_are_order_independent():
    table = HandicapRuleTable.from_pairs([(6.5, 3), (3.5, 1), (4.5, 2)])
    assert [r.threshold for r in table.rules] == [3.5, 4.5, 6.5]
    assert table.required_runs(4.0) == 2


def test_empty_table_falls_back_to_one_run_and_logs(caplog):
    table = HandicapRuleTable()
    with caplog.at_level(logging.ERROR, logger="teamroping"):
        assert table.required_runs(5.0) == 1
    assert "empty" in caplog.text
    with pytest.raises(EmptyRuleTableException):
        table.check_configured()


def test_duplicate_threshold_rejected_without_change(rule_table):
    with pytest.raises(DuplicateThresholdException):
        rule_table.add_rule(4.5, 5)
    assert rule_table.required_runs(4.5) == 2
    assert len(rule_table) == 4


@pytest.mark.parametrize(
    "threshold, runs", [(0, 1), (-1.5, 2), (3.0, 0), (3.0, -1), (3.0, 1.5)]
)
def test_invalid_rules_rejected(threshold, runs):
    table = HandicapRuleTable()
    with pytest.raises(InvalidRuleException):
        table.add_rule(threshold, runs)
    assert len(table) == 0


def test_remove_rule_is_noop_when_absent(rule_table):
    assert rule_table.remove_rule(8.0) is False
    assert rule_table.remove_rule(4.5) is True
    assert 4.5 not in rule_table
    assert rule_table.required_runs(4.0) == 3


def test_coverage_warnings(rule_table):
    assert rule_table.coverage_warnings(7.0) == []

    short = HandicapRuleTable.from_pairs([(3.5, 1), (4.5, 2)])
    warnings = short.coverage_warnings(7.0)
    assert len(warnings) == 1
    assert "4.5" in warnings[0]

    assert HandicapRuleTable().coverage_warnings(7.0)


def test_default_table_matches_standard_rules():
    table = HandicapRuleTable.default()
    assert [(r.threshold, r.run_count) for r in table.rules] == [
        (3.5, 1),
        (4.5, 2),
        (6.5, 3),
        (100.0, 4),
    ]


def test_serialization_round_trip(rule_table):
    restored = HandicapRuleTable.from_list(rule_table.to_list())
    assert restored.rules == rule_table.rules


@pytest.mark.parametrize("threshold", [float("nan"), float("inf"), float("-inf"), "nan"])
def test_non_finite_threshold_rejected(rule_table, threshold):
    with pytest.raises(InvalidRuleException):
        rule_table.add_rule(threshold, 9)
    assert len(rule_table) == 4
    assert rule_table.required_runs(200) == 4


def test_non_finite_threshold_cannot_become_the_fallback():
    table = HandicapRuleTable.from_pairs([(3.5, 1), (4.5, 2)])
    with pytest.raises(InvalidRuleException):
        table.add_rule(float("nan"), 9)
    assert table.required_runs(200) == 2


@pytest.mark.parametrize("runs", [float("inf"), float("nan"), "three", None])
def test_run_count_that_is_not_a_whole_number_rejected(runs):
    table = HandicapRuleTable()
    with pytest.raises(InvalidRuleException):
        table.add_rule(5, runs)
    assert len(table) == 0


def test_stored_rules_are_validated_on_load():
    with pytest.raises(InvalidRuleException):
        HandicapRuleTable.from_list([{"threshold": 5, "run_count": float("inf")}])
    with pytest.raises(InvalidRuleException):
        HandicapRuleTable.from_list([{"threshold": float("nan"), "run_count": 2}])
