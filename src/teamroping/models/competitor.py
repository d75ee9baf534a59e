"""A team roping competitor."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict

from teamroping.exceptions import InvalidCompetitorDataException
from teamroping.models.enums import Modality
from teamroping.utils.validation import validate_handicap


@dataclass
class Competitor:
    """A registered roper.

    Pairs hold copies of competitors rather than references, so a change to
    a competitor only reaches the pairs it is explicitly propagated to.

    Attributes
    ----------
    id : str
        Opaque unique identifier.
    full_name : str
        Competitor's full name.
    nickname : str
        Name shown on the draw and on reports.
    modality : Modality
        Head only, heel only, or both.
    handicap : float
        Non-negative handicap in steps of 0.5.
    """

    id: str
    full_name: str
    nickname: str
    modality: Modality
    handicap: float

    @property
    def can_head(self) -> bool:
        return self.modality.can_head

    @property
    def can_heel(self) -> bool:
        return self.modality.can_heel

    def snapshot(self) -> "Competitor":
        """Independent copy for embedding in a pair."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize competitor to dictionary."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "nickname": self.nickname,
            "modality": self.modality.value,
            "handicap": self.handicap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        """Deserialize competitor from dictionary.

        Raises:
            InvalidCompetitorDataException: If the stored handicap is invalid
        """
        handicap = validate_handicap(data["handicap"])
        if not handicap:
            raise InvalidCompetitorDataException(handicap.error_message)

        full_name = data["full_name"]
        return cls(
            id=str(data["id"]),
            full_name=full_name,
            nickname=data.get("nickname") or full_name,
            modality=Modality.parse(data["modality"]),
            handicap=handicap.sanitized_value,
        )

    def __str__(self) -> str:
        return f"{self.nickname} (HC {self.handicap:g})"
