"""Main Competition class - the state of one team roping event.

The Competition owns the roster, settings, rule table, pair list and round
locks. It is created and held by the caller; the pairing, ledger, ranking
and reconciliation functions it delegates to are stateless and operate on
the state handed to them.
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
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from teamroping.constants import (
    SNAPSHOT_COMPETITORS,
    SNAPSHOT_EXPORT_DATE,
    SNAPSHOT_FINAL_LOCKED,
    SNAPSHOT_LOCKED_ROUNDS,
    SNAPSHOT_PAIRS,
    SNAPSHOT_RULES,
    SNAPSHOT_SETTINGS,
)
from teamroping.controllers import (
    HandicapRuleTable,
    RankedPair,
    RunLedger,
    all_qualifying_done,
    coerce_entry,
    final_call_order,
    qualifying_round_count,
    rank_pairs,
    reconcile_pairs,
)
from teamroping.exceptions import (
    CompetitorNotFoundException,
    InvalidSnapshotException,
    LockedRoundException,
    PairNotFoundException,
    RoundNotFoundException,
    TournamentStateException,
    ValidationException,
)
from teamroping.models.competition import EventSettings, HandicapRule, Pair, RoundLocks
from teamroping.models.competitor import Competitor
from teamroping.models.competitor_factory import (
    CompetitorFactory,
    default_factory,
    step_handicap,
)
from teamroping.models.enums import Modality
from teamroping.models.run_time import RunTime
from teamroping.pairing import generate_pairs, head_pool, heel_pool, sequence_pairs
from teamroping.type_hints import RawTimeInput
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


class Competition:
    """State of a team roping event.

    Every mutating method validates its input before touching state, so a
    rejected call leaves the competition exactly as it was.
    """

    def __init__(
        self,
        settings: Optional[EventSettings] = None,
        rule_table: Optional[HandicapRuleTable] = None,
        competitors: Optional[Iterable[Competitor]] = None,
        pairs: Optional[List[Pair]] = None,
        locks: Optional[RoundLocks] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize a competition.

        Args
        ----
        settings: Event settings (defaults if omitted)
        rule_table: Handicap rules (the standard table if omitted)
        competitors: Registered competitors
        pairs: Existing pair list, used as-is
        locks: Round lock state
        rng: Random source for draws, for reproducible tests
        """
        self.settings = settings or EventSettings()
        if rule_table is None:
            rule_table = HandicapRuleTable.default()
        self.rule_table = rule_table
        self.competitors: Dict[str, Competitor] = {c.id: c for c in competitors or []}
        self.pairs: List[Pair] = list(pairs or [])
        self.locks = locks or RoundLocks()

        self.ledger = RunLedger()
        self.factory = CompetitorFactory()
        self._rng = rng

    # ========== Settings ==========

    def update_settings(self, **changes: Any) -> EventSettings:
        """Apply settings changes.

        Raises:
            InvalidSettingsException: On invalid values
        """
        self.settings = self.settings.updated(**changes)
        logger.info(f"Updated settings: {', '.join(sorted(changes))}")
        for warning in self.rule_table.coverage_warnings(self.settings.max_handicap):
            logger.warning(warning)
        return self.settings

    # ========== Handicap Rules ==========

    def add_rule(self, threshold: float, run_count: int) -> HandicapRule:
        return self.rule_table.add_rule(threshold, run_count)

    def remove_rule(self, threshold: float) -> bool:
        return self.rule_table.remove_rule(threshold)

    def rule_warnings(self) -> List[str]:
        return self.rule_table.coverage_warnings(self.settings.max_handicap)

    # ========== Competitor Management ==========

    def get_competitor_list(self) -> List[Competitor]:
        return list(self.competitors.values())

    def get_competitor(self, competitor_id: str) -> Competitor:
        """Look up a competitor.

        Raises:
            CompetitorNotFoundException: If no competitor has this id
        """
        competitor = self.competitors.get(competitor_id)
        if competitor is None:
            raise CompetitorNotFoundException(f"No competitor with id {competitor_id}")
        return competitor

    @property
    def head_pool(self) -> List[Competitor]:
        return head_pool(self.competitors.values())

    @property
    def heel_pool(self) -> List[Competitor]:
        return heel_pool(self.competitors.values())

    def add_competitor(
        self,
        full_name: str,
        modality: Union[Modality, str],
        handicap: Union[float, int, str],
        nickname: Optional[str] = None,
    ) -> Competitor:
        """Register a competitor.

        Existing pairs are left alone; call :meth:`update_pairs` or
        :meth:`generate_pairs` to bring the newcomer into the draw.

        Raises:
            InvalidCompetitorDataException: If the data is invalid
        """
        competitor = self.factory.create_competitor(
            full_name=full_name,
            nickname=nickname,
            modality=modality,
            handicap=handicap,
        )
        self.competitors[competitor.id] = competitor
        logger.info(f"Added competitor: {competitor.full_name} ({competitor.id})")
        return competitor

    def update_competitor(self, competitor_id: str, **changes: Any) -> Competitor:
        """Edit a competitor and propagate the change to every pair they rope in.

        Pair snapshots and combined handicaps are refreshed. Qualifying slot
        counts are left as they are until the next :meth:`update_pairs`.

        Raises:
            CompetitorNotFoundException: Unknown id
            InvalidCompetitorDataException: Invalid changes
        """
        updated = self.factory.apply_changes(self.get_competitor(competitor_id), changes)
        self.competitors[competitor_id] = updated

        affected = [pair for pair in self.pairs if pair.involves(competitor_id)]
        for pair in affected:
            pair.refresh_competitor(updated)

        logger.info(
            f"Updated competitor {updated.full_name}: {', '.join(sorted(changes))} "
            f"({len(affected)} pair(s) refreshed)"
        )
        return updated

    def adjust_handicap(self, competitor_id: str, delta: float) -> Competitor:
        """Step a competitor's handicap up or down (never below 0.5)."""
        current = self.get_competitor(competitor_id)
        new_handicap = step_handicap(current.handicap, delta)
        if new_handicap == current.handicap:
            return current
        return self.update_competitor(competitor_id, handicap=new_handicap)

    def remove_competitors(self, competitor_ids: Iterable[str]) -> int:
        """Remove competitors. Any removal discards all pairs and locks.

        Returns:
            Number of competitors removed

        Raises:
            CompetitorNotFoundException: If any id is unknown (nothing is removed)
        """
        ids = list(dict.fromkeys(competitor_ids))
        if not ids:
            return 0

        missing = [cid for cid in ids if cid not in self.competitors]
        if missing:
            raise CompetitorNotFoundException(
                f"No competitor with id(s): {', '.join(missing)}"
            )

        for cid in ids:
            removed = self.competitors.pop(cid)
            logger.info(f"Removed competitor: {removed.full_name} ({cid})")

        self.pairs = []
        self.locks.clear()
        logger.info("Pairs and round locks cleared after competitor removal")
        return len(ids)

    # ========== Pair Management ==========

    def generate_pairs(self) -> List[Pair]:
        """Draw a brand new pair set, discarding all pairs and locks.

        Raises:
            TournamentStateException: With fewer than two competitors
        """
        if len(self.competitors) < 2:
            raise TournamentStateException(
                "At least 2 competitors are needed to generate pairs"
            )

        for warning in self.rule_warnings():
            logger.warning(warning)

        fresh = generate_pairs(
            self.competitors.values(), self.settings.max_handicap, self.rule_table
        )
        self.pairs = sequence_pairs(fresh, rng=self._rng)
        self.locks.clear()

        if not self.pairs:
            logger.warning(
                f"No eligible pairs at maximum handicap {self.settings.max_handicap:g}"
            )
        logger.info(f"Generated draw with {len(self.pairs)} pairs")
        return self.pairs

    def update_pairs(self) -> List[Pair]:
        """Bring the pair set in line with the roster, keeping recorded times.

        Round and final locks are kept.
        """
        for warning in self.rule_warnings():
            logger.warning(warning)

        self.pairs = reconcile_pairs(
            self.pairs,
            self.competitors.values(),
            self.settings.max_handicap,
            self.rule_table,
            rng=self._rng,
        )
        return self.pairs

    def get_pair(self, pair_id: str) -> Pair:
        """Look up a pair.

        Raises:
            PairNotFoundException: If no pair has this id
        """
        for pair in self.pairs:
            if pair.id == pair_id:
                return pair
        raise PairNotFoundException(f"No pair with id {pair_id}")

    # ========== Run Times ==========

    def record_qualifying_run(
        self,
        pair_id: str,
        round_index: int,
        raw: RawTimeInput,
        authorize_over_limit: bool = False,
    ) -> RunTime:
        """Record a qualifying time typed at the run sheet.

        Args:
            pair_id: Pair the time belongs to
            round_index: Zero-based qualifying round
            raw: A number, a numeric string, "SAT", or None/blank to clear
            authorize_over_limit: Accept a time above the limit as a number

        Returns:
            The value actually stored

        Raises:
            LockedRoundException: If the round is locked
            PairNotFoundException: Unknown pair
            RoundNotFoundException: The pair has no such qualifying round
            InvalidRunTimeException: Unreadable entry
        """
        if self.locks.is_round_locked(round_index):
            raise LockedRoundException(f"Qualifying round {round_index + 1} is locked")

        pair = self.get_pair(pair_id)
        value = coerce_entry(raw, self.settings.time_limit, authorize_over_limit)
        self.ledger.set_qualifying_run(pair, round_index, value)
        return value

    def record_final_run(self, pair_id: str, raw: RawTimeInput) -> RunTime:
        """Record a final time. Over-limit times are always accepted in the final.

        Raises:
            LockedRoundException: If the final is locked
            PairNotFoundException: Unknown pair
            InvalidRunTimeException: Unreadable entry
        """
        if self.locks.final_locked:
            raise LockedRoundException("The final round is locked")

        pair = self.get_pair(pair_id)
        value = coerce_entry(raw, self.settings.time_limit, authorized=True)
        self.ledger.set_final_run(pair, value)
        return value

    def clear_qualifying_run(self, pair_id: str, round_index: int) -> RunTime:
        return self.record_qualifying_run(pair_id, round_index, None)

    def clear_final_run(self, pair_id: str) -> RunTime:
        return self.record_final_run(pair_id, None)

    # ========== Round Locks ==========

    @staticmethod
    def _check_round_index(round_index: int) -> None:
        if round_index < 0:
            raise RoundNotFoundException(f"Invalid qualifying round index: {round_index}")

    def lock_round(self, round_index: int) -> None:
        self._check_round_index(round_index)
        self.locks.lock_round(round_index)
        logger.info(f"Locked qualifying round {round_index + 1}")

    def unlock_round(self, round_index: int) -> None:
        self._check_round_index(round_index)
        self.locks.unlock_round(round_index)
        logger.info(f"Unlocked qualifying round {round_index + 1}")

    def toggle_round_lock(self, round_index: int) -> bool:
        self._check_round_index(round_index)
        locked = self.locks.toggle_round(round_index)
        logger.info(
            f"{'Locked' if locked else 'Unlocked'} qualifying round {round_index + 1}"
        )
        return locked

    def lock_final(self) -> None:
        self.locks.final_locked = True
        logger.info("Locked final round")

    def unlock_final(self) -> None:
        self.locks.final_locked = False
        logger.info("Unlocked final round")

    def toggle_final_lock(self) -> bool:
        if self.locks.final_locked:
            self.unlock_final()
        else:
            self.lock_final()
        return self.locks.final_locked

    # ========== Standings ==========

    @property
    def qualifying_round_count(self) -> int:
        return qualifying_round_count(self.pairs)

    def all_qualifying_done(self) -> bool:
        return all_qualifying_done(self.pairs)

    def final_call_order(self) -> List[Pair]:
        """Qualified pairs in the order they are called into the final."""
        return final_call_order(self.pairs)

    def standings(self) -> List[RankedPair]:
        """Final standings, fastest average first."""
        return rank_pairs(self.pairs)

    # ========== Reset ==========

    def reset(self) -> None:
        """Start over: clear roster, pairs and locks and restore default settings.

        The handicap rule table is kept.
        """
        self.competitors = {}
        self.pairs = []
        self.locks = RoundLocks()
        self.settings = EventSettings()
        logger.info("Competition reset")

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the full competition state to a snapshot document."""
        return {
            SNAPSHOT_SETTINGS: self.settings.to_dict(),
            SNAPSHOT_RULES: self.rule_table.to_list(),
            SNAPSHOT_COMPETITORS: [c.to_dict() for c in self.competitors.values()],
            SNAPSHOT_PAIRS: [p.to_dict() for p in self.pairs],
            SNAPSHOT_LOCKED_ROUNDS: sorted(self.locks.locked_rounds),
            SNAPSHOT_FINAL_LOCKED: self.locks.final_locked,
            SNAPSHOT_EXPORT_DATE: datetime.now().isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], rng: Optional[random.Random] = None
    ) -> "Competition":
        """Rebuild a competition from a snapshot document, without reconciliation.

        Competitors go through the same validation as registration. A snapshot
        without handicap rules gets the standard table.

        Raises:
            InvalidSnapshotException: If the document is malformed
        """
        if not isinstance(data, dict) or not isinstance(
            data.get(SNAPSHOT_SETTINGS), dict
        ):
            raise InvalidSnapshotException("Snapshot has no settings section")
        if not isinstance(data.get(SNAPSHOT_COMPETITORS), list):
            raise InvalidSnapshotException("Snapshot has no competitor list")

        try:
            settings = EventSettings.from_dict(data[SNAPSHOT_SETTINGS])
            if SNAPSHOT_RULES in data:
                rule_table = HandicapRuleTable.from_list(data[SNAPSHOT_RULES])
            else:
                rule_table = HandicapRuleTable.default()
            competitors = default_factory.create_batch(data[SNAPSHOT_COMPETITORS])
            pairs = [Pair.from_dict(p) for p in data.get(SNAPSHOT_PAIRS) or []]
            locks = RoundLocks.from_dict(
                {
                    "locked_rounds": data.get(SNAPSHOT_LOCKED_ROUNDS) or [],
                    "final_locked": data.get(SNAPSHOT_FINAL_LOCKED, False),
                }
            )
        except (
            KeyError,
            TypeError,
            ValueError,
            AttributeError,
            OverflowError,
            ValidationException,
        ) as e:
            raise InvalidSnapshotException(f"Invalid snapshot: {e}") from e

        competition = cls(
            settings=settings,
            rule_table=rule_table,
            competitors=competitors,
            pairs=pairs,
            locks=locks,
            rng=rng,
        )
        logger.info(
            f"Loaded competition: {settings.event_name} "
            f"({len(competitors)} competitors, {len(pairs)} pairs)"
        )
        return competition

    def restore(self, data: Dict[str, Any]) -> None:
        """Replace the whole state with a snapshot in one step.

        Raises:
            InvalidSnapshotException: If the document is malformed (state untouched)
        """
        loaded = Competition.from_dict(data, rng=self._rng)
        self.settings = loaded.settings
        self.rule_table = loaded.rule_table
        self.competitors = loaded.competitors
        self.pairs = loaded.pairs
        self.locks = loaded.locks
