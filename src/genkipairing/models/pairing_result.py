"""Pairing output data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TableAssignment:
    """One table of a round.

    Attributes:
        table_number: 1-based table number
        player_a_id: Higher-ranked player, or the bye recipient
        player_b_id: Lower-ranked player, ``None`` for the bye table
    """

    table_number: int
    player_a_id: str
    player_b_id: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.player_b_id is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize table assignment to dictionary."""
        return {
            "table_number": self.table_number,
            "player_a_id": self.player_a_id,
            "player_b_id": self.player_b_id,
        }


@dataclass(frozen=True)
class PairingOutput:
    """Result of a pairing computation for a single round."""

    pairings: List[TableAssignment] = field(default_factory=list)
    bye_player_id: Optional[str] = None

    @property
    def matches(self) -> List[TableAssignment]:
        """Tables with two seated players."""
        return [table for table in self.pairings if not table.is_bye]

    def player_ids(self) -> List[str]:
        """Every player seated this round, the bye recipient included."""
        seated: List[str] = []
        for table in self.pairings:
            seated.append(table.player_a_id)
            if table.player_b_id is not None:
                seated.append(table.player_b_id)
        return seated

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing output to dictionary."""
        return {
            "pairings": [table.to_dict() for table in self.pairings],
            "bye_player_id": self.bye_player_id,
        }


#  LocalWords:  PairingOutput TableAssignment
