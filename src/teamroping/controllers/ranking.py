"""Averages, final call order and final standings.

The qualifying average orders the call into the final (slowest first, so
the fastest pairs rope last). The final average, over every qualifying run
plus the final, decides the standings (fastest wins).
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

from dataclasses import dataclass
from statistics import fmean
from typing import Iterable, List, Optional

from teamroping.models.competition.pair import Pair


@dataclass(frozen=True)
class RankedPair:
    """A pair's place in the final standings.

    Attributes
    ----------
    position : int
        1-based finishing position.
    pair : Pair
        The ranked pair.
    average : float
        Mean of all qualifying runs and the final.
    """

    position: int
    pair: Pair
    average: float


def _numeric_qualifying_times(pair: Pair) -> Optional[List[float]]:
    if pair.disqualified or not pair.qualifying_runs:
        return None
    if not all(run.is_numeric for run in pair.qualifying_runs):
        return None
    return [run.seconds for run in pair.qualifying_runs]


def qualifying_average(pair: Pair) -> Optional[float]:
    """Mean of the qualifying runs, or None if any is missing or the pair is out."""
    times = _numeric_qualifying_times(pair)
    if times is None:
        return None
    return fmean(times)


def final_average(pair: Pair) -> Optional[float]:
    """Mean over all qualifying runs plus the final, or None if incomplete."""
    times = _numeric_qualifying_times(pair)
    if times is None or not pair.final_run.is_numeric:
        return None
    return fmean(times + [pair.final_run.seconds])


def qualified_for_final(pairs: Iterable[Pair]) -> List[Pair]:
    """Pairs that are still in and have every qualifying run recorded."""
    return [pair for pair in pairs if qualifying_average(pair) is not None]


def final_call_order(pairs: Iterable[Pair]) -> List[Pair]:
    """Order to call qualified pairs into the final: slowest average first.

    Pairs with equal averages keep their draw order.
    """
    return sorted(qualified_for_final(pairs), key=qualifying_average, reverse=True)


def rank_pairs(pairs: Iterable[Pair]) -> List[RankedPair]:
    """Final standings, fastest average first.

    Pairs without a final average are left out. Pairs with equal averages
    keep their draw order and take consecutive positions.
    """
    scored = [(pair, final_average(pair)) for pair in pairs]
    scored = [(pair, avg) for pair, avg in scored if avg is not None]
    scored.sort(key=lambda item: item[1])
    return [
        RankedPair(position=index, pair=pair, average=avg)
        for index, (pair, avg) in enumerate(scored, start=1)
    ]


def qualifying_round_count(pairs: Iterable[Pair]) -> int:
    """Number of qualifying rounds on the run sheet (the largest quota)."""
    return max((pair.run_count for pair in pairs), default=0)


def all_qualifying_done(pairs: Iterable[Pair]) -> bool:
    """True when every pair is either disqualified or fully recorded."""
    return all(pair.disqualified or pair.qualifying_complete() for pair in pairs)
