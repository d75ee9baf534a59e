"""Pair generation: every eligible head/heel combination under the handicap ceiling."""

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

from typing import TYPE_CHECKING, Iterable, Iterator, List, Tuple

from teamroping.models.competition.pair import Pair
from teamroping.models.competitor import Competitor
from teamroping.utils import setup_logger

if TYPE_CHECKING:
    from teamroping.controllers.rule_table import HandicapRuleTable

logger = setup_logger(__name__)


def head_pool(competitors: Iterable[Competitor]) -> List[Competitor]:
    """Competitors allowed to rope the head (head-only or both)."""
    return [c for c in competitors if c.can_head]


def heel_pool(competitors: Iterable[Competitor]) -> List[Competitor]:
    """Competitors allowed to rope the heels (heel-only or both)."""
    return [c for c in competitors if c.can_heel]


def eligible_pairings(
    competitors: Iterable[Competitor], max_handicap: float
) -> Iterator[Tuple[Competitor, Competitor, float]]:
    """Yield every valid (header, heeler, combined handicap) combination.

    A competitor eligible for both roles appears in both pools but is never
    paired with themselves. Combinations above ``max_handicap`` are skipped.
    """
    roster = list(competitors)
    heelers = heel_pool(roster)

    for header in head_pool(roster):
        for heeler in heelers:
            if header.id == heeler.id:
                continue
            combined = header.handicap + heeler.handicap
            if combined <= max_handicap:
                yield header, heeler, combined


def generate_pairs(
    competitors: Iterable[Competitor],
    max_handicap: float,
    rule_table: "HandicapRuleTable",
) -> List[Pair]:
    """Build a fresh, unordered pair set.

    Each pair gets as many empty qualifying slots as the rule table requires
    for its combined handicap, an empty final and no disqualification.

    Args:
        competitors: Full roster
        max_handicap: Largest combined handicap allowed
        rule_table: Source of the qualifying run quota

    Returns:
        List of new pairs in generation order (the sequencer imposes the draw)
    """
    pairs = [
        Pair.create(header, heeler, rule_table.required_runs(combined))
        for header, heeler, combined in eligible_pairings(competitors, max_handicap)
    ]
    logger.debug(f"Generated {len(pairs)} eligible pairs (max handicap {max_handicap:g})")
    return pairs
