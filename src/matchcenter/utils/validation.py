"""Validation utilities for Match Center.

This module provides reusable validation functions with consistent error handling.
"""

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

from typing import Optional, Sequence

from matchcenter.constants import (
    BEST_OF_OPTIONS,
    PARTICIPANT_BOUNDS,
    PLAYERS_PER_SIDE,
    TOURNAMENT_FORMATS,
)
from matchcenter.exceptions import (
    DuplicatePlayerException,
    IncompleteTeamException,
    InvalidConfigurationException,
    InvalidParticipantCountException,
    InvalidPlayerDataException,
)


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
        sanitized_value: Optional[object] = None,
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
    """Validate a player name.

    Args:
        name: Name as typed by the organiser

    Returns:
        ValidationResult with the stripped name as sanitized value
    """
    if name is None or not name.strip():
        return ValidationResult(is_valid=False, error_message="Name is required")
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_name_strict(name: Optional[str]) -> str:
    """Validate name and return it stripped, or raise.

    Raises:
        InvalidPlayerDataException: If name is empty
    """
    result = validate_name(name)
    if not result:
        raise InvalidPlayerDataException(result.error_message)
    return result.sanitized_value


def validate_handicap(handicap: object) -> ValidationResult:
    """Validate a handicap value (any integer, booleans rejected)."""
    if isinstance(handicap, bool) or not isinstance(handicap, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"Handicap must be an integer: {handicap!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=handicap)


# ========== Tournament Configuration ==========


def validate_participant_count(tournament_format: str, count: int) -> ValidationResult:
    """Check a player count against the bounds of a tournament format.

    Args:
        tournament_format: One of the supported formats
        count: Number of players taking part

    Returns:
        ValidationResult with the count as sanitized value
    """
    if tournament_format not in PARTICIPANT_BOUNDS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Unknown tournament format: {tournament_format}",
        )

    minimum, maximum, must_be_even = PARTICIPANT_BOUNDS[tournament_format]
    if count < minimum or count > maximum:
        if minimum == maximum:
            message = f"{tournament_format} requires exactly {minimum} players"
        else:
            message = (
                f"{tournament_format} requires between {minimum} and "
                f"{maximum} players, got {count}"
            )
        return ValidationResult(is_valid=False, error_message=message)

    if must_be_even and count % 2 != 0:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"{tournament_format} requires an even number of players, "
                f"got {count}"
            ),
        )

    return ValidationResult(is_valid=True, sanitized_value=count)


def validate_participant_count_strict(tournament_format: str, count: int) -> None:
    """Raise if the count does not fit the format.

    Raises:
        InvalidConfigurationException: If the format is unknown
        InvalidParticipantCountException: If the count is out of bounds
    """
    if tournament_format not in TOURNAMENT_FORMATS:
        raise InvalidConfigurationException(
            f"Unknown tournament format: {tournament_format}"
        )
    result = validate_participant_count(tournament_format, count)
    if not result:
        raise InvalidParticipantCountException(result.error_message)


def validate_sets_to_play(sets_to_play: int) -> ValidationResult:
    """Best-of count must be one of 1, 3 or 5."""
    if sets_to_play not in BEST_OF_OPTIONS:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Sets to play must be one of {list(BEST_OF_OPTIONS)}, "
                f"got {sets_to_play}"
            ),
        )
    return ValidationResult(is_valid=True, sanitized_value=sets_to_play)


def validate_positive(value: int, label: str) -> ValidationResult:
    """Integer must be at least 1."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return ValidationResult(
            is_valid=False,
            error_message=f"{label} must be a positive integer, got {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


# ========== Team Selection ==========


def validate_side_selection(
    side_a_ids: Sequence[str], side_b_ids: Sequence[str], allow_empty_b: bool = False
) -> None:
    """Validate the players picked for the two sides of one match.

    Args:
        side_a_ids: Player IDs chosen for side A
        side_b_ids: Player IDs chosen for side B
        allow_empty_b: Accept an empty side B (lone team receiving a bye)

    Raises:
        IncompleteTeamException: If a side does not have exactly two players
        DuplicatePlayerException: If a player is picked twice
    """
    if len(side_a_ids) != PLAYERS_PER_SIDE:
        raise IncompleteTeamException(
            f"Side A needs exactly {PLAYERS_PER_SIDE} players, got {len(side_a_ids)}"
        )
    if not (allow_empty_b and not side_b_ids) and len(side_b_ids) != PLAYERS_PER_SIDE:
        raise IncompleteTeamException(
            f"Side B needs exactly {PLAYERS_PER_SIDE} players, got {len(side_b_ids)}"
        )

    picked = list(side_a_ids) + list(side_b_ids)
    if len(set(picked)) != len(picked):
        raise DuplicatePlayerException(
            "The same player cannot be picked twice in one match"
        )
