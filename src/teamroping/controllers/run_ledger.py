"""Run-time ledger: records qualifying and final times on pairs.

This module handles the pure data update of run slots and keeps each
pair's disqualification flag consistent with what was recorded. Lock
enforcement happens at the competition's edit boundary, not here.
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

from teamroping.exceptions import RoundNotFoundException
from teamroping.models.competition.pair import Pair
from teamroping.models.run_time import RunTime
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


class RunLedger:
    """Writes run results onto pairs.

    This class is responsible for:
    - Writing a single qualifying slot or the final slot
    - Recomputing the disqualified flag after every write
    - Rejecting writes to qualifying rounds a pair does not have
    """

    def set_qualifying_run(self, pair: Pair, round_index: int, value: RunTime) -> None:
        """Record a qualifying run result.

        After the write the pair is disqualified exactly when a SAT is present
        in any qualifying slot or in the final slot, so removing the last SAT
        clears the disqualification.

        Args:
            pair: Pair to update
            round_index: Zero-based qualifying round
            value: Unset, numeric or SAT

        Raises:
            RoundNotFoundException: If the pair has no slot for this round
        """
        if not 0 <= round_index < pair.run_count:
            raise RoundNotFoundException(
                f"Pair {pair} has {pair.run_count} qualifying run(s); "
                f"round {round_index + 1} does not exist"
            )

        pair.qualifying_runs[round_index] = value
        was_disqualified = pair.disqualified
        pair.disqualified = pair.has_sat()

        logger.debug(f"Recorded qualifying {round_index + 1} for {pair}: {value}")
        if pair.disqualified != was_disqualified:
            state = "disqualified" if pair.disqualified else "reinstated"
            logger.info(f"Pair {pair} {state}")

    def set_final_run(self, pair: Pair, value: RunTime) -> None:
        """Record the final run result.

        A final write can disqualify a pair but never reinstate one.

        Args:
            pair: Pair to update
            value: Unset, numeric or SAT
        """
        pair.final_run = value
        was_disqualified = pair.disqualified
        pair.disqualified = pair.disqualified or value.is_sat

        logger.debug(f"Recorded final for {pair}: {value}")
        if pair.disqualified and not was_disqualified:
            logger.info(f"Pair {pair} disqualified in the final")
