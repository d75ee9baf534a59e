"""Handicap rule table: maps a combined handicap to a qualifying run count."""

# Team Roping Draw
# Copyright (C) 2025  Team Roping Draw developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from teamroping.constants import DEFAULT_HANDICAP_RULES, DEFAULT_RUN_COUNT
from teamroping.exceptions import (
    DuplicateThresholdException,
    EmptyRuleTableException,
    InvalidRuleException,
)
from teamroping.models.competition.handicap_rule import HandicapRule
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


class HandicapRuleTable:
    """Step function from combined handicap to required qualifying runs.

    A pair runs as many qualifying runs as the rule with the smallest
    threshold at or above its combined handicap. A pair above every
    threshold falls back to the rule with the largest threshold.
    """

    def __init__(self, rules: Optional[Iterable[HandicapRule]] = None) -> None:
        self._rules: Dict[float, HandicapRule] = {}
        for rule in rules or []:
            self.add_rule(rule.threshold, rule.run_count)

    @classmethod
    def default(cls) -> "HandicapRuleTable":
        """Table with the standard rules (<=3.5:1, <=4.5:2, <=6.5:3, <=100:4)."""
        return cls.from_pairs(DEFAULT_HANDICAP_RULES)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, int]]) -> "HandicapRuleTable":
        return cls(HandicapRule(t, n) for t, n in pairs)

    # ========== Queries ==========

    @property
    def rules(self) -> List[HandicapRule]:
        """Rules sorted by ascending threshold."""
        return sorted(self._rules.values(), key=lambda r: r.threshold)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, threshold: float) -> bool:
        return float(threshold) in self._rules

    def required_runs(self, combined_handicap: float) -> int:
        """Number of qualifying runs for a pair with this combined handicap.

        Args:
            combined_handicap: Sum of both competitors' handicaps

        Returns:
            Run count, always at least 1
        """
        rules = self.rules
        if not rules:
            logger.error(
                f"Handicap rule table is empty; using {DEFAULT_RUN_COUNT} qualifying "
                f"run(s) for combined handicap {combined_handicap:g}"
            )
            return DEFAULT_RUN_COUNT

        for rule in rules:
            if rule.threshold >= combined_handicap:
                return rule.run_count

        return rules[-1].run_count

    def coverage_warnings(self, max_handicap: float) -> List[str]:
        """Explain configuration gaps for an event's maximum handicap."""
        rules = self.rules
        if not rules:
            return [
                "No handicap rules configured; every pair will run "
                f"{DEFAULT_RUN_COUNT} qualifying run(s)."
            ]

        largest = rules[-1]
        if largest.threshold < max_handicap:
            return [
                f"Maximum handicap {max_handicap:g} is above the largest rule "
                f"({largest.threshold:g}); pairs above it will run "
                f"{largest.run_count} qualifying run(s)."
            ]
        return []

    def check_configured(self) -> None:
        """Raise if the table cannot produce a configured run count.

        Raises:
            EmptyRuleTableException: If there are no rules
        """
        if not self._rules:
            raise EmptyRuleTableException("The handicap rule table has no rules")

    # ========== Mutation ==========

    def add_rule(self, threshold: float, run_count: int) -> HandicapRule:
        """Add a rule.

        Raises:
            InvalidRuleException: Threshold not a finite positive number, or run
                count not a whole number of at least 1
            DuplicateThresholdException: A rule already uses this threshold
        """
        try:
            threshold = float(threshold)
        except (TypeError, ValueError) as e:
            raise InvalidRuleException(f"Threshold must be a number: {threshold}") from e

        if not math.isfinite(threshold) or threshold <= 0:
            raise InvalidRuleException(
                f"Threshold must be a finite positive number: {threshold:g}"
            )
        try:
            whole_runs = int(run_count)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidRuleException(f"Run count must be a number: {run_count}") from e
        if isinstance(run_count, bool) or whole_runs != run_count or whole_runs < 1:
            raise InvalidRuleException(
                f"Run count must be a whole number of at least 1: {run_count}"
            )
        if threshold in self._rules:
            raise DuplicateThresholdException(
                f"A rule for handicap up to {threshold:g} already exists"
            )

        rule = HandicapRule(threshold=threshold, run_count=whole_runs)
        self._rules[threshold] = rule
        logger.debug(f"Added handicap rule: <= {threshold:g} -> {rule.run_count} run(s)")
        return rule

    def remove_rule(self, threshold: float) -> bool:
        """Remove the rule at ``threshold``; returns False if there was none."""
        removed = self._rules.pop(float(threshold), None)
        if removed is not None:
            logger.info(f"Removed handicap rule: <= {removed.threshold:g}")
            return True
        return False

    # ========== Serialization ==========

    def to_list(self) -> List[Dict[str, Any]]:
        return [rule.to_dict() for rule in self.rules]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "HandicapRuleTable":
        return cls(HandicapRule.from_dict(item) for item in data)
