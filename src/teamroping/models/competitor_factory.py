"""Factory for creating Competitor objects with validation.

This module provides a single point of entry for registering competitors
and for editing them, so every competitor in a competition has passed the
same checks.
"""

from typing import Any, Dict, List, Optional, Union

from teamroping.constants import HANDICAP_STEP, MIN_EDITED_HANDICAP
from teamroping.exceptions import InvalidCompetitorDataException
from teamroping.models.competitor import Competitor
from teamroping.models.enums import Modality
from teamroping.utils import generate_id
from teamroping.utils.validation import (
    validate_handicap,
    validate_name,
    validate_nickname,
)

EDITABLE_FIELDS = ("full_name", "nickname", "modality", "handicap")


class CompetitorFactory:
    """Factory for creating and editing Competitor instances.

    Example:
        >>> factory = CompetitorFactory()
        >>> roper = factory.create_competitor(
        ...     full_name="João Silva", nickname="", modality="Cabeça", handicap=2
        ... )
        >>> roper.nickname
        'João Silva'
    """

    def create_competitor(
        self,
        full_name: str,
        nickname: Optional[str],
        modality: Union[Modality, str],
        handicap: Union[float, int, str],
        competitor_id: Optional[str] = None,
    ) -> Competitor:
        """Create a validated competitor.

        Args:
            full_name: Competitor's full name (trimmed, required)
            nickname: Display name; blank falls back to the full name
            modality: Head, heel or both
            handicap: Non-negative multiple of 0.5
            competitor_id: Existing id to keep; a new one is generated if None

        Returns:
            Competitor instance

        Raises:
            InvalidCompetitorDataException: If any field is invalid
        """
        errors = []

        name_result = validate_name(full_name)
        if not name_result:
            errors.append(name_result.error_message or "Invalid name")

        handicap_result = validate_handicap(handicap)
        if not handicap_result:
            errors.append(handicap_result.error_message or "Invalid handicap")

        try:
            parsed_modality = Modality.parse(modality)
        except ValueError as e:
            errors.append(str(e))

        if errors:
            raise InvalidCompetitorDataException(
                f"Invalid competitor data: {'; '.join(errors)}"
            )

        clean_name = name_result.sanitized_value
        return Competitor(
            id=competitor_id or generate_id("Competitor"),
            full_name=clean_name,
            nickname=validate_nickname(nickname, clean_name).sanitized_value,
            modality=parsed_modality,
            handicap=handicap_result.sanitized_value,
        )

    def create_batch(self, competitor_data: List[Dict[str, Any]]) -> List[Competitor]:
        """Create competitors from serialized rows, keeping their ids.

        The whole batch fails on the first invalid row.

        Raises:
            KeyError: If a row lacks a required field
            InvalidCompetitorDataException: If a row is invalid
        """
        return [
            self.create_competitor(
                full_name=data["full_name"],
                nickname=data.get("nickname"),
                modality=data["modality"],
                handicap=data["handicap"],
                competitor_id=str(data["id"]),
            )
            for data in competitor_data
        ]

    def apply_changes(self, competitor: Competitor, changes: Dict[str, Any]) -> Competitor:
        """Return a new competitor with ``changes`` applied and re-validated.

        Raises:
            InvalidCompetitorDataException: On unknown fields or invalid values
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise InvalidCompetitorDataException(
                f"Cannot edit competitor field(s): {', '.join(sorted(unknown))}"
            )

        merged = {field: getattr(competitor, field) for field in EDITABLE_FIELDS}
        merged.update(changes)
        return self.create_competitor(competitor_id=competitor.id, **merged)


def step_handicap(current: float, delta: float) -> float:
    """Apply a +/- step edit to a handicap.

    The result is rounded to the nearest 0.5 and never goes below 0.5;
    an edit that would do so leaves the handicap unchanged.
    """
    new_value = current + delta
    if new_value < MIN_EDITED_HANDICAP:
        return current
    return round(new_value / HANDICAP_STEP) * HANDICAP_STEP


default_factory = CompetitorFactory()

