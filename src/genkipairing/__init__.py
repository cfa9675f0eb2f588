"""Genki Pairing: Swiss standings and pairings for trading card game events."""

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

from genkipairing.exceptions import (
    GenkiPairingException,
    InvalidPairingInputException,
    InvalidReferenceException,
    MalformedMatchRecordException,
)
from genkipairing.models import (
    EventConfig,
    MatchOutcome,
    MatchRecord,
    PairingOutput,
    PlayerRecord,
    PlayerStats,
    TableAssignment,
)
from genkipairing.pairing.swiss import generate_pairings
from genkipairing.tournament.standings_calculator import (
    calculate_standings,
    get_player_records_for_pairing,
)

__version__ = "0.1.0"

__all__ = [
    "calculate_standings",
    "generate_pairings",
    "get_player_records_for_pairing",
    "EventConfig",
    "MatchOutcome",
    "MatchRecord",
    "PairingOutput",
    "PlayerRecord",
    "PlayerStats",
    "TableAssignment",
    "GenkiPairingException",
    "InvalidPairingInputException",
    "InvalidReferenceException",
    "MalformedMatchRecordException",
]
