"""Incremental pair update after roster changes.

Keeps the results already recorded for pairs that survive a roster edit,
creates empty pairs for new combinations and drops pairs that are no
longer eligible.
"""

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

import random
from typing import Dict, Iterable, List, Optional

from teamroping.controllers.rule_table import HandicapRuleTable
from teamroping.models.competition.pair import Pair
from teamroping.models.competitor import Competitor
from teamroping.models.run_time import RunTime
from teamroping.pairing import eligible_pairings, sequence_pairs
from teamroping.type_hints import PairKey
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


def resize_runs(runs: List[RunTime], target: int) -> List[RunTime]:
    """Grow with unset slots or cut from the tail; earlier slots never move."""
    if len(runs) >= target:
        return list(runs[:target])
    return list(runs) + [RunTime.unset() for _ in range(target - len(runs))]


def reconcile_pairs(
    existing: Iterable[Pair],
    competitors: Iterable[Competitor],
    max_handicap: float,
    rule_table: HandicapRuleTable,
    rng: Optional[random.Random] = None,
) -> List[Pair]:
    """Merge the current pair set with a freshly computed eligible set.

    Pairs are matched on (head id, heel id). A matched pair keeps its id,
    disqualification flag and recorded runs, gets fresh competitor snapshots
    and combined handicap, and has its qualifying slots resized to the
    current quota. Unmatched combinations become new empty pairs. Existing
    pairs with no eligible combination are dropped. The result is redrawn.

    Args:
        existing: Current pairs
        competitors: Current roster
        max_handicap: Largest combined handicap allowed
        rule_table: Source of the qualifying run quota
        rng: Random source for the redraw

    Returns:
        The reconciled, sequenced pair list
    """
    by_key: Dict[PairKey, Pair] = {pair.key: pair for pair in existing}

    updated: List[Pair] = []
    kept = 0
    for header, heeler, combined in eligible_pairings(competitors, max_handicap):
        target_runs = rule_table.required_runs(combined)
        previous = by_key.pop((header.id, heeler.id), None)

        if previous is None:
            updated.append(Pair.create(header, heeler, target_runs))
            continue

        updated.append(
            Pair(
                id=previous.id,
                header=header.snapshot(),
                heeler=heeler.snapshot(),
                combined_handicap=combined,
                qualifying_runs=resize_runs(previous.qualifying_runs, target_runs),
                final_run=previous.final_run,
                disqualified=previous.disqualified,
            )
        )
        kept += 1

    logger.info(
        f"Reconciled pairs: {kept} kept, {len(updated) - kept} new, "
        f"{len(by_key)} dropped"
    )
    return sequence_pairs(updated, rng=rng)
