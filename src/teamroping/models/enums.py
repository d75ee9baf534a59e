"""Enumerations shared by the data models."""

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

from enum import Enum

from teamroping.type_hints import BOTH, HEAD, HEEL


class Modality(Enum):
    """Which role(s) a competitor may rope in."""

    HEAD = HEAD
    HEEL = HEEL
    BOTH = BOTH

    @property
    def can_head(self) -> bool:
        return self in (Modality.HEAD, Modality.BOTH)

    @property
    def can_heel(self) -> bool:
        return self in (Modality.HEEL, Modality.BOTH)

    @classmethod
    def parse(cls, value: "Modality | str") -> "Modality":
        """Accept an enum member, its stored value, or its name (any case)."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value or str(value).upper() == member.name:
                return member
        raise ValueError(f"Unknown modality: {value!r}")
