"""HandicapRule data class."""

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
from typing import Any, Dict


@dataclass(frozen=True)
class HandicapRule:
    """One step of the handicap rule table.

    Attributes
    ----------
    threshold : float
        Upper bound (inclusive) of the combined handicap this rule covers.
    run_count : int
        Number of qualifying runs for pairs covered by this rule.
    """

    threshold: float
    run_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize rule to dictionary."""
        return {"threshold": self.threshold, "run_count": self.run_count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HandicapRule":
        """Deserialize rule from dictionary.

        Values are passed through as stored; they are checked when the rule
        is added to a :class:`HandicapRuleTable`.
        """
        return cls(threshold=data["threshold"], run_count=data["run_count"])
