"""Validation utilities for Genki Pairing.

This module provides reusable validation functions with consistent error handling.
"""

# Genki Pairing
# Copyright (C) 2025  Genki Pairing developers
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

from genkipairing.exceptions import MalformedMatchRecordException
from genkipairing.models.match_record import MatchOutcome, MatchRecord


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
    """

    def __init__(self, is_valid: bool, error_message: Optional[str] = None):
        self.is_valid = is_valid
        self.error_message = error_message

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return "ValidationResult(VALID)"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


# ========== Match Record Validation ==========


def validate_match_record(record: MatchRecord, games_to_win: int) -> ValidationResult:
    """Check that a match record is internally consistent.

    Range checks apply to every record. Outcome checks apply only to reported
    matches between two players:

    - a win requires the winner to have taken more games than the loser
    - a draw requires equal game counts
    - disqualifications and double losses are valid with any game counts

    Args:
        record: The match record to check
        games_to_win: Games needed to win the match, which is also the most
            games either player can have won

    Returns:
        ValidationResult with validation status

    Example:
        >>> record = MatchRecord("p1", "p2", MatchOutcome.PLAYER_A_WIN, 2, 1)
        >>> bool(validate_match_record(record, games_to_win=2))
        True
    """
    a, b = record.games_won_a, record.games_won_b

    if a < 0 or b < 0:
        return _invalid(f"Game scores cannot be negative ({a}-{b})")

    if a > games_to_win or b > games_to_win:
        return _invalid(
            f"Game scores {a}-{b} exceed the {games_to_win} games a player can win"
        )

    if record.is_bye:
        if b != 0:
            return _invalid(f"Bye for {record.player_a_id} cannot carry opponent games")
        return ValidationResult(is_valid=True)

    if record.player_a_id == record.player_b_id:
        return _invalid(f"Player {record.player_a_id} cannot be paired against themselves")

    # Single-game draws are conventionally reported 1-1
    if games_to_win > 1 and a == games_to_win and b == games_to_win:
        return _invalid(f"Both players cannot win {games_to_win} games")

    result = record.result
    if result is MatchOutcome.PLAYER_A_WIN and a <= b:
        return _invalid(f"Player A win requires games_won_a > games_won_b ({a}-{b})")
    if result is MatchOutcome.PLAYER_B_WIN and b <= a:
        return _invalid(f"Player B win requires games_won_b > games_won_a ({a}-{b})")
    if result is not None and result.is_draw and a != b:
        return _invalid(f"Draw result requires equal game scores ({a}-{b})")

    return ValidationResult(is_valid=True)


def validate_match_record_strict(record: MatchRecord, games_to_win: int) -> None:
    """Validate a match record and raise exception if invalid.

    Args:
        record: The match record to check
        games_to_win: Games needed to win the match

    Raises:
        MalformedMatchRecordException: If the record is inconsistent
    """
    result = validate_match_record(record, games_to_win)
    if not result.is_valid:
        raise MalformedMatchRecordException(result.error_message)
