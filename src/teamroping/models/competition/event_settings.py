"""EventSettings data class."""

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
from datetime import date
from typing import Any, Dict

from teamroping.constants import (
    DEFAULT_EVENT_NAME,
    DEFAULT_MAX_HANDICAP,
    DEFAULT_TIME_LIMIT,
    DISPLAY_DATE_FORMAT,
)
from teamroping.exceptions import InvalidSettingsException
from teamroping.utils.validation import (
    parse_event_date,
    validate_max_handicap,
    validate_time_limit,
)


@dataclass
class EventSettings:
    """Event-level settings.

    Attributes
    ----------
    event_name : str
        Label printed on reports.
    event_date : date
        Day of the event.
    time_limit : float
        Per-run time limit in seconds. Slower unauthorized entries become SAT.
    max_handicap : float
        Largest combined handicap a pair may have.
    """

    event_name: str = DEFAULT_EVENT_NAME
    event_date: date = field(default_factory=date.today)
    time_limit: float = DEFAULT_TIME_LIMIT
    max_handicap: float = DEFAULT_MAX_HANDICAP

    @property
    def display_date(self) -> str:
        """Event date as printed on reports (dd/mm/yyyy)."""
        return self.event_date.strftime(DISPLAY_DATE_FORMAT)

    def updated(self, **changes: Any) -> "EventSettings":
        """Return validated settings with ``changes`` applied.

        Raises:
            InvalidSettingsException: On unknown fields or invalid values
        """
        unknown = set(changes) - {"event_name", "event_date", "time_limit", "max_handicap"}
        if unknown:
            raise InvalidSettingsException(
                f"Unknown setting(s): {', '.join(sorted(unknown))}"
            )

        merged = self.to_dict()
        merged.update(changes)
        return EventSettings.from_dict(merged)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "event_name": self.event_name,
            "event_date": self.event_date.isoformat(),
            "time_limit": self.time_limit,
            "max_handicap": self.max_handicap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventSettings":
        """Deserialize and validate settings from dictionary.

        Raises:
            InvalidSettingsException: If any value is invalid
        """
        time_limit = validate_time_limit(data.get("time_limit", DEFAULT_TIME_LIMIT))
        if not time_limit:
            raise InvalidSettingsException(time_limit.error_message)

        max_handicap = validate_max_handicap(
            data.get("max_handicap", DEFAULT_MAX_HANDICAP)
        )
        if not max_handicap:
            raise InvalidSettingsException(max_handicap.error_message)

        raw_date = data.get("event_date")
        event_date = parse_event_date(raw_date) if raw_date else date.today()

        return cls(
            event_name=str(data.get("event_name") or DEFAULT_EVENT_NAME),
            event_date=event_date,
            time_limit=time_limit.sanitized_value,
            max_handicap=max_handicap.sanitized_value,
        )
