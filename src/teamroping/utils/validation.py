"""Validation utilities for Team Roping Draw.

This module provides reusable validation functions with consistent error handling.
"""

import math
from datetime import date, datetime
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from teamroping.constants import HANDICAP_STEP
from teamroping.exceptions import InvalidSettingsException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(name: Optional[str]) -> ValidationResult:
    """Validate a competitor's full name.

    Args:
        name: Name as typed at registration

    Returns:
        ValidationResult with the trimmed name
    """
    if not name or not name.strip():
        return ValidationResult(is_valid=False, error_message="Full name is required")
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_nickname(nickname: Optional[str], full_name: str) -> ValidationResult:
    """Validate a display nickname, falling back to the full name when blank."""
    if not nickname or not nickname.strip():
        return ValidationResult(is_valid=True, sanitized_value=full_name)
    return ValidationResult(is_valid=True, sanitized_value=nickname.strip())


# ========== Handicap Validation ==========


def validate_handicap(handicap: Union[float, int, str, None]) -> ValidationResult:
    """Validate a competitor handicap.

    Handicaps are non-negative and move in steps of 0.5.

    Args:
        handicap: Handicap value to validate

    Returns:
        ValidationResult with the handicap as a float
    """
    if handicap is None or isinstance(handicap, bool):
        return ValidationResult(is_valid=False, error_message="Handicap is required")

    try:
        value = float(handicap)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Handicap must be a number: {handicap}",
        )

    if not math.isfinite(value) or value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Handicap must be zero or more: {handicap}",
        )

    if not (value / HANDICAP_STEP).is_integer():
        return ValidationResult(
            is_valid=False,
            error_message=f"Handicap must be a multiple of {HANDICAP_STEP}: {handicap}",
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


# ========== Event Settings Validation ==========


def validate_time_limit(time_limit: Union[float, int, str, None]) -> ValidationResult:
    """Validate the per-run time limit in seconds."""
    try:
        value = float(time_limit)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Time limit must be a number: {time_limit}",
        )

    if not math.isfinite(value) or value <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Time limit must be positive: {time_limit}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_max_handicap(
    max_handicap: Union[float, int, str, None]
) -> ValidationResult:
    """Validate the maximum combined handicap allowed for a pair."""
    try:
        value = float(max_handicap)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Maximum handicap must be a number: {max_handicap}",
        )

    if not math.isfinite(value) or value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Maximum handicap cannot be negative: {max_handicap}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def parse_event_date(value: Union[date, datetime, str, None]) -> date:
    """Parse an event date.

    Accepts ``date`` objects, ISO strings (``2025-06-14``) and the day-first
    form used on printed reports (``14/06/2025``).

    Raises:
        InvalidSettingsException: If the value is not a recognisable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise InvalidSettingsException("Event date is required")

    text = str(value).strip()
    try:
        # ISO first so "2025-06-04" is never read day-first
        return date_parser.isoparse(text).date()
    except ValueError:
        pass
    try:
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise InvalidSettingsException(f"Invalid event date: {value}") from e
