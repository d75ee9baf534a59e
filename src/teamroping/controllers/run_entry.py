"""Input-layer policy for typed run times.

Converts raw entries into RunTime values, applying the event time limit:
an unauthorized time above the limit is recorded as SAT.
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

from typing import Optional

from teamroping.constants import SAT_MARKER
from teamroping.exceptions import InvalidRunTimeException
from teamroping.models.run_time import RunTime
from teamroping.type_hints import RawTimeInput
from teamroping.utils import setup_logger

logger = setup_logger(__name__)


def parse_raw_time(raw: RawTimeInput) -> RunTime:
    """Interpret a typed entry without applying the time limit.

    Blank or None clears the slot, ``"SAT"`` (any case) is the marker, and
    anything else must be a number (a comma decimal separator is accepted).

    Raises:
        InvalidRunTimeException: If the entry is not a number
    """
    if raw is None:
        return RunTime.unset()
    if isinstance(raw, bool):
        raise InvalidRunTimeException(f"Not a run time: {raw!r}")
    if isinstance(raw, (int, float)):
        return RunTime.numeric(raw)

    text = str(raw).strip()
    if not text:
        return RunTime.unset()
    if text.upper() == SAT_MARKER:
        return RunTime.sat()
    try:
        return RunTime.numeric(float(text.replace(",", ".")))
    except ValueError as e:
        raise InvalidRunTimeException(f"Not a run time: {raw!r}") from e


def coerce_entry(raw: RawTimeInput, time_limit: float, authorized: bool) -> RunTime:
    """Turn a raw entry into the value to store.

    Args:
        raw: Typed entry
        time_limit: Event time limit in seconds
        authorized: Whether over-limit times may be stored as numbers

    Returns:
        The RunTime to record; over-limit unauthorized times become SAT
    """
    value = parse_raw_time(raw)
    if value.exceeds(time_limit) and not authorized:
        logger.info(
            f"Time {value.seconds:g}s is over the {time_limit:g}s limit; "
            f"recorded as {SAT_MARKER}"
        )
        return RunTime.sat()
    return value


class RunEntry:
    """State of one time-entry slot on the run sheet.

    Holds the local "accept over-limit time" toggle for the slot. A final
    round entry is always authorized.

    Attributes:
        time_limit: Event time limit in seconds
        always_authorized: True for final round entries
        allow_over_limit: The local override toggle
        value: Value last produced by this entry
    """

    def __init__(
        self,
        time_limit: float,
        value: Optional[RunTime] = None,
        always_authorized: bool = False,
    ) -> None:
        self.time_limit = time_limit
        self.always_authorized = always_authorized
        self.value = value or RunTime.unset()
        # A stored over-limit number can only have been entered with the override on
        self.allow_over_limit = self.value.exceeds(time_limit) and not always_authorized

    @property
    def is_authorized(self) -> bool:
        return self.allow_over_limit or self.always_authorized

    def enter(self, raw: RawTimeInput) -> RunTime:
        """Apply a typed entry and return the value to record."""
        self.value = coerce_entry(raw, self.time_limit, self.is_authorized)
        return self.value

    def mark_sat(self) -> RunTime:
        self.value = RunTime.sat()
        return self.value

    def clear(self) -> RunTime:
        """Reset the slot; the override is dropped unless always authorized."""
        self.value = RunTime.unset()
        if not self.always_authorized:
            self.allow_over_limit = False
        return self.value

    def toggle_over_limit(self, locked: bool = False) -> bool:
        """Flip the override toggle and return its new state.

        Has no effect on always-authorized entries or while the round is locked.
        """
        if self.always_authorized:
            return self.allow_over_limit
        if locked:
            logger.warning("Round is locked; over-limit override not changed")
            return self.allow_over_limit
        self.allow_over_limit = not self.allow_over_limit
        return self.allow_over_limit
