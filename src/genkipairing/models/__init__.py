"""Data models for standings and pairings."""

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

from genkipairing.models.event_config import EventConfig
from genkipairing.models.match_record import MatchOutcome, MatchRecord
from genkipairing.models.pairing_history import PairingHistory
from genkipairing.models.pairing_result import PairingOutput, TableAssignment
from genkipairing.models.player_record import PlayerRecord, PlayerStats

__all__ = [
    "EventConfig",
    "MatchOutcome",
    "MatchRecord",
    "PairingHistory",
    "PairingOutput",
    "PlayerRecord",
    "PlayerStats",
    "TableAssignment",
]
