"""Run time value: unset, a numeric elapsed time, or the SAT marker."""

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

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from teamroping.constants import SAT_MARKER
from teamroping.exceptions import InvalidRunTimeException
from teamroping.type_hints import RunTimeJSON


class RunKind(Enum):
    """The three states a run slot can be in."""

    UNSET = "unset"
    NUMERIC = "numeric"
    SAT = "sat"


@dataclass(frozen=True)
class RunTime:
    """A single run result.

    Attributes
    ----------
    kind : RunKind
        Whether the slot is unset, holds a time, or holds the SAT marker.
    seconds : float or None
        Elapsed time in seconds. Only set when ``kind`` is ``NUMERIC``.

    Examples
    --------
    ::

        RunTime.numeric(9.2).to_json()   # 9.2
        RunTime.sat().to_json()          # "SAT"
        RunTime.from_json(None).is_set   # False
    """

    kind: RunKind = RunKind.UNSET
    seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind is RunKind.NUMERIC:
            if self.seconds is None or not math.isfinite(self.seconds):
                raise InvalidRunTimeException(
                    f"Numeric run time must be a finite number: {self.seconds!r}"
                )
            if self.seconds < 0:
                raise InvalidRunTimeException(
                    f"Run time cannot be negative: {self.seconds}"
                )
        elif self.seconds is not None:
            raise InvalidRunTimeException(
                f"{self.kind.value} run time cannot carry seconds"
            )

    # ========== Constructors ==========

    @classmethod
    def unset(cls) -> "RunTime":
        return cls(RunKind.UNSET)

    @classmethod
    def numeric(cls, seconds: float) -> "RunTime":
        return cls(RunKind.NUMERIC, float(seconds))

    @classmethod
    def sat(cls) -> "RunTime":
        return cls(RunKind.SAT)

    # ========== Queries ==========

    @property
    def is_set(self) -> bool:
        return self.kind is not RunKind.UNSET

    @property
    def is_numeric(self) -> bool:
        return self.kind is RunKind.NUMERIC

    @property
    def is_sat(self) -> bool:
        return self.kind is RunKind.SAT

    def exceeds(self, limit: float) -> bool:
        """Is this a numeric time strictly above ``limit``?"""
        return self.is_numeric and self.seconds > limit

    # ========== Serialization ==========

    def to_json(self) -> RunTimeJSON:
        """Serialize to ``None``, a number, or the ``"SAT"`` literal."""
        if self.kind is RunKind.NUMERIC:
            return self.seconds
        if self.kind is RunKind.SAT:
            return SAT_MARKER
        return None

    @classmethod
    def from_json(cls, value: RunTimeJSON) -> "RunTime":
        """Deserialize a stored run time.

        Raises:
            InvalidRunTimeException: If the value is not null, a number, or "SAT"
        """
        if value is None:
            return cls.unset()
        if value == SAT_MARKER:
            return cls.sat()
        # bool is an int subclass but never a valid time
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls.numeric(value)
        raise InvalidRunTimeException(f"Unrecognised stored run time: {value!r}")

    def __str__(self) -> str:
        if self.is_numeric:
            return f"{self.seconds:g}"
        if self.is_sat:
            return SAT_MARKER
        return "unset"
