"""Draw order for pairs.

Spreads the pairs so that, where possible, no competitor ropes in two
consecutive runs. The draw is randomized on purpose.
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
from typing import Callable, List, Optional, Sequence

from teamroping.models.competition.pair import Pair
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


def _rests_everyone(previous: Pair) -> Callable[[Pair], bool]:
    # No competitor of the previous pair appears in either role
    return lambda candidate: not candidate.shares_competitor(previous)


def _rests_header(previous: Pair) -> Callable[[Pair], bool]:
    # The header's horse gets a rest even if the heeler repeats
    return lambda candidate: candidate.header.id != previous.header.id


def _find_index(pool: Sequence[Pair], accept: Callable[[Pair], bool]) -> int:
    for index, candidate in enumerate(pool):
        if accept(candidate):
            return index
    return -1


def sequence_pairs(
    pairs: Sequence[Pair], rng: Optional[random.Random] = None
) -> List[Pair]:
    """Shuffle and reorder pairs to avoid back-to-back competitors.

    The pool is shuffled first, then built greedily. At each step the next
    pair is the first remaining one that shares no competitor with the
    previous pair; failing that, the first whose header differs from the
    previous header; failing that, simply the first remaining pair.

    Args:
        pairs: Pairs to order
        rng: Random source; a fresh ``random.Random`` when omitted

    Returns:
        A permutation of ``pairs``
    """
    rng = rng or random.Random()
    pool = list(pairs)
    rng.shuffle(pool)

    ordered: List[Pair] = []
    while pool:
        if not ordered:
            ordered.append(pool.pop(0))
            continue

        previous = ordered[-1]
        next_index = _find_index(pool, _rests_everyone(previous))
        if next_index == -1:
            next_index = _find_index(pool, _rests_header(previous))
        if next_index == -1:
            next_index = 0

        ordered.append(pool.pop(next_index))

    conflicts = count_back_to_back(ordered)
    if conflicts:
        logger.debug(f"Draw of {len(ordered)} pairs has {conflicts} unavoidable repeat(s)")
    return ordered


def count_back_to_back(pairs: Sequence[Pair]) -> int:
    """Count adjacent positions where a competitor ropes twice in a row."""
    return sum(
        1
        for previous, current in zip(pairs, pairs[1:])
        if current.shares_competitor(previous)
    )
