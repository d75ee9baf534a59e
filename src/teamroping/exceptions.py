"""Exceptions for use in Team Roping Draw"""

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


# ========== Base Application Exception ==========


class TeamRopingException(Exception):
    """Base exception for all Team Roping Draw errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(TeamRopingException):
    """Base exception for input rejected before any state change."""

    pass


class DuplicateThresholdException(ValidationException):
    """Raised when a handicap rule already exists at the given threshold."""

    pass


class InvalidRuleException(ValidationException):
    """Raised when a handicap rule has a non-positive threshold or run count."""

    pass


class SelfPairingException(ValidationException):
    """Raised when a competitor would rope with themselves."""

    pass


class LockedRoundException(ValidationException):
    """Raised when editing a time in a locked qualifying round or final."""

    pass


class InvalidRunTimeException(ValidationException):
    """Raised when a run time entry cannot be interpreted."""

    pass


class InvalidSettingsException(ValidationException):
    """Raised when event settings are invalid (e.g. non-positive time limit)."""

    pass


# ========== Competitor Exceptions ==========


class CompetitorException(TeamRopingException):
    """Base exception for competitor-related errors."""

    pass


class CompetitorNotFoundException(CompetitorException):
    """Raised when a requested competitor cannot be found."""

    pass


class InvalidCompetitorDataException(CompetitorException, ValidationException):
    """Raised when competitor data is invalid or incomplete."""

    pass


# ========== Pair Exceptions ==========


class PairException(TeamRopingException):
    """Base exception for pair-related errors."""

    pass


class PairNotFoundException(PairException):
    """Raised when a requested pair does not exist."""

    pass


class RoundNotFoundException(PairException):
    """Raised when a qualifying round index is outside a pair's run slots."""

    pass


# ========== Competition Exceptions ==========


class TournamentStateException(TeamRopingException):
    """Raised when the competition is in an invalid state for the requested operation."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TeamRopingException):
    """Base exception for configuration errors."""

    pass


class EmptyRuleTableException(ConfigurationException):
    """Raised when the handicap rule table has no rules."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(TeamRopingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


class InvalidSnapshotException(ResourceException):
    """Raised when a snapshot document is missing required sections."""

    pass
