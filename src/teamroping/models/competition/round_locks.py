"""Round lock state for qualifying rounds and the final."""

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
from typing import Any, Dict, Set


@dataclass
class RoundLocks:
    """Edit-permission gates for the run sheet.

    Locks do not affect scoring; they only stop time edits made through
    the competition's entry points.

    Attributes
    ----------
    locked_rounds : set of int
        Zero-based indices of locked qualifying rounds.
    final_locked : bool
        Whether the final round is locked.
    """

    locked_rounds: Set[int] = field(default_factory=set)
    final_locked: bool = False

    def is_round_locked(self, round_index: int) -> bool:
        return round_index in self.locked_rounds

    def lock_round(self, round_index: int) -> None:
        self.locked_rounds.add(round_index)

    def unlock_round(self, round_index: int) -> None:
        self.locked_rounds.discard(round_index)

    def toggle_round(self, round_index: int) -> bool:
        """Flip a round's lock and return the new state."""
        if round_index in self.locked_rounds:
            self.locked_rounds.discard(round_index)
            return False
        self.locked_rounds.add(round_index)
        return True

    def clear(self) -> None:
        self.locked_rounds = set()
        self.final_locked = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize locks to dictionary."""
        return {
            "locked_rounds": sorted(self.locked_rounds),
            "final_locked": self.final_locked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundLocks":
        """Deserialize locks from dictionary."""
        return cls(
            locked_rounds={int(r) for r in data.get("locked_rounds", [])},
            final_locked=bool(data.get("final_locked", False)),
        )
