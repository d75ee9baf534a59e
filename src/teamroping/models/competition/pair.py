"""Data model for a head/heel pair and its run results."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from teamroping.exceptions import SelfPairingException
from teamroping.models.competitor import Competitor
from teamroping.models.run_time import RunTime
from teamroping.type_hints import PairKey
from teamroping.utils import generate_id


@dataclass
class Pair:
    """A header and a heeler entered together.

    Attributes
    ----------
    id : str
        Opaque unique identifier.
    header : Competitor
        Snapshot of the competitor roping the head.
    heeler : Competitor
        Snapshot of the competitor roping the heels.
    combined_handicap : float
        ``header.handicap + heeler.handicap``.
    qualifying_runs : list of RunTime
        One slot per qualifying run; the length is the pair's run quota.
    final_run : RunTime
        Result of the final run.
    disqualified : bool
        True once a SAT has been recorded for the pair.
    """

    id: str
    header: Competitor
    heeler: Competitor
    combined_handicap: float
    qualifying_runs: List[RunTime] = field(default_factory=list)
    final_run: RunTime = field(default_factory=RunTime.unset)
    disqualified: bool = False

    def __post_init__(self) -> None:
        if self.header.id == self.heeler.id:
            raise SelfPairingException(
                f"{self.header.nickname} cannot rope head and heels in the same pair"
            )

    @classmethod
    def create(
        cls,
        header: Competitor,
        heeler: Competitor,
        run_count: int,
        pair_id: Optional[str] = None,
    ) -> "Pair":
        """Build a fresh pair with ``run_count`` empty qualifying slots."""
        return cls(
            id=pair_id or generate_id("Pair"),
            header=header.snapshot(),
            heeler=heeler.snapshot(),
            combined_handicap=header.handicap + heeler.handicap,
            qualifying_runs=[RunTime.unset() for _ in range(run_count)],
        )

    @property
    def key(self) -> PairKey:
        """(head id, heel id), stable across regenerations."""
        return (self.header.id, self.heeler.id)

    @property
    def competitor_ids(self) -> frozenset:
        return frozenset(self.key)

    @property
    def run_count(self) -> int:
        return len(self.qualifying_runs)

    def involves(self, competitor_id: str) -> bool:
        """Does this competitor rope in this pair, in either role?"""
        return competitor_id in self.competitor_ids

    def shares_competitor(self, other: "Pair") -> bool:
        """Do the two pairs have any competitor in common, in any role?"""
        return not self.competitor_ids.isdisjoint(other.competitor_ids)

    def has_sat(self) -> bool:
        """Is the SAT marker in any qualifying slot or the final slot?"""
        return self.final_run.is_sat or any(run.is_sat for run in self.qualifying_runs)

    def qualifying_complete(self) -> bool:
        return all(run.is_set for run in self.qualifying_runs)

    def refresh_competitor(self, competitor: Competitor) -> None:
        """Replace the snapshot(s) of ``competitor`` and recompute the handicap."""
        if self.header.id == competitor.id:
            self.header = competitor.snapshot()
        if self.heeler.id == competitor.id:
            self.heeler = competitor.snapshot()
        self.combined_handicap = self.header.handicap + self.heeler.handicap

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pair to dictionary."""
        return {
            "id": self.id,
            "header": self.header.to_dict(),
            "heeler": self.heeler.to_dict(),
            "combined_handicap": self.combined_handicap,
            "qualifying_runs": [run.to_json() for run in self.qualifying_runs],
            "final_run": self.final_run.to_json(),
            "disqualified": self.disqualified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pair":
        """Deserialize pair from dictionary."""
        header = Competitor.from_dict(data["header"])
        heeler = Competitor.from_dict(data["heeler"])
        return cls(
            id=str(data["id"]),
            header=header,
            heeler=heeler,
            combined_handicap=float(
                data.get("combined_handicap", header.handicap + heeler.handicap)
            ),
            qualifying_runs=[
                RunTime.from_json(run) for run in data.get("qualifying_runs", [])
            ],
            final_run=RunTime.from_json(data.get("final_run")),
            disqualified=bool(data.get("disqualified", False)),
        )

    def __str__(self) -> str:
        return f"{self.header.nickname} / {self.heeler.nickname}"
