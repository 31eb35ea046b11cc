"""Exceptions for use in Match Center"""

# Match Center
# Copyright (C) 2025  Match Center developers
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


class MatchCenterException(Exception):
    """Base exception for all Match Center errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(MatchCenterException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a requested round or match does not exist."""

    pass


class MatchNotReadyException(TournamentStateException):
    """Raised when a score is entered for a match that is missing a side."""

    pass


# ========== Result Exceptions ==========


class ResultException(MatchCenterException):
    """Base exception for result recording errors."""

    pass


class InvalidScoreException(ResultException):
    """Raised when a score does not fit the tournament's scoring mode."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(MatchCenterException):
    """Base exception for validation errors.

    Always raised before any tournament state is touched.
    """

    pass


class InvalidParticipantCountException(ValidationException):
    """Raised when the number of players or teams is outside the format bounds."""

    pass


class DuplicatePlayerException(ValidationException):
    """Raised when the same player appears twice where only once is allowed."""

    pass


class IncompleteTeamException(ValidationException):
    """Raised when a team selection does not have exactly two players."""

    pass


class InvalidPlayerDataException(ValidationException):
    """Raised when player data is invalid or incomplete."""

    pass


class InvalidConfigurationException(ValidationException):
    """Raised when configuration data is invalid."""

    pass
