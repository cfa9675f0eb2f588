"""Match record data class and the closed set of match outcomes."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from genkipairing.constants import DRAW_POINTS, LOSS_POINTS, WIN_POINTS


class MatchOutcome(Enum):
    """Reported outcome of a match.

    An unreported match has no outcome at all (``None``), it is never a member.
    """

    PLAYER_A_WIN = "PLAYER_A_WIN"
    PLAYER_B_WIN = "PLAYER_B_WIN"
    DRAW = "DRAW"
    INTENTIONAL_DRAW = "INTENTIONAL_DRAW"
    DOUBLE_LOSS = "DOUBLE_LOSS"
    PLAYER_A_DQ = "PLAYER_A_DQ"
    PLAYER_B_DQ = "PLAYER_B_DQ"

    @property
    def points(self) -> Tuple[int, int]:
        """Match points awarded as (player A, player B)."""
        return _OUTCOME_POINTS[self]

    @property
    def is_draw(self) -> bool:
        return self in (MatchOutcome.DRAW, MatchOutcome.INTENTIONAL_DRAW)

    @property
    def is_disqualification(self) -> bool:
        return self in (MatchOutcome.PLAYER_A_DQ, MatchOutcome.PLAYER_B_DQ)

    @classmethod
    def parse(cls, value: Any) -> Optional["MatchOutcome"]:
        """Parse a snapshot value; ``None`` and empty strings mean unreported."""
        if value is None or value == "":
            return None
        if isinstance(value, MatchOutcome):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown match result: {value!r}") from None


_OUTCOME_POINTS = {
    MatchOutcome.PLAYER_A_WIN: (WIN_POINTS, LOSS_POINTS),
    MatchOutcome.PLAYER_B_WIN: (LOSS_POINTS, WIN_POINTS),
    MatchOutcome.DRAW: (DRAW_POINTS, DRAW_POINTS),
    MatchOutcome.INTENTIONAL_DRAW: (DRAW_POINTS, DRAW_POINTS),
    MatchOutcome.DOUBLE_LOSS: (LOSS_POINTS, LOSS_POINTS),
    MatchOutcome.PLAYER_A_DQ: (LOSS_POINTS, WIN_POINTS),
    MatchOutcome.PLAYER_B_DQ: (WIN_POINTS, LOSS_POINTS),
}


@dataclass(frozen=True)
class MatchRecord:
    """One played match, or a bye, as recorded by the round subsystem.

    Attributes
    ----------
    player_a_id : str
        ID of the player seated as player A
    player_b_id : str or None
        ID of player B, ``None`` for a bye
    result : MatchOutcome or None
        Reported outcome, ``None`` while unreported
    games_won_a : int
        Games won by player A
    games_won_b : int
        Games won by player B
    """

    player_a_id: str
    player_b_id: Optional[str] = None
    result: Optional[MatchOutcome] = None
    games_won_a: int = 0
    games_won_b: int = 0

    @property
    def is_bye(self) -> bool:
        return self.player_b_id is None

    @property
    def is_reported(self) -> bool:
        return self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match record to dictionary."""
        return {
            "player_a_id": self.player_a_id,
            "player_b_id": self.player_b_id,
            "result": self.result.name if self.result is not None else None,
            "games_won_a": self.games_won_a,
            "games_won_b": self.games_won_b,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchRecord":
        """Deserialize match record from dictionary."""
        return cls(
            player_a_id=str(data["player_a_id"]),
            player_b_id=(
                str(data["player_b_id"])
                if data.get("player_b_id") is not None
                else None
            ),
            result=MatchOutcome.parse(data.get("result")),
            games_won_a=int(data.get("games_won_a", 0)),
            games_won_b=int(data.get("games_won_b", 0)),
        )
