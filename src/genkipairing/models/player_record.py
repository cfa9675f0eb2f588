"""Per-player standings data classes."""

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

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class PlayerStats:
    """Aggregated record of one player, rebuilt on every standings call.

    Attributes:
        user_id: Player identifier
        user_name: Display name from the roster
        points: Match points (3 per win, 1 per draw)
        match_wins: Matches won, byes included
        match_losses: Matches lost, double losses and DQs included
        match_draws: Matches drawn, intentional draws included
        game_wins: Games won across all reported matches
        game_losses: Games lost across all reported matches
        opponent_ids: One entry per match played against an opponent, in
            match order; repeated opponents appear once per meeting
        received_bye: Whether the player has had a bye in this event
        is_dropped: Whether the player has left the event
    """

    user_id: str
    user_name: str
    points: int = 0
    match_wins: int = 0
    match_losses: int = 0
    match_draws: int = 0
    game_wins: int = 0
    game_losses: int = 0
    opponent_ids: Tuple[str, ...] = field(default_factory=tuple)
    received_bye: bool = False
    is_dropped: bool = False

    @property
    def matches_played(self) -> int:
        return self.match_wins + self.match_losses + self.match_draws

    @property
    def games_played(self) -> int:
        return self.game_wins + self.game_losses


@dataclass(frozen=True)
class PlayerRecord(PlayerStats):
    """A player's standing: aggregated stats plus tie-break percentages.

    Attributes:
        omw_percent: Opponents' match-win percentage (floored)
        gw_percent: Own game-win percentage (floored)
        ogw_percent: Opponents' game-win percentage (floored)
        oomw_percent: Opponents' opponents' match-win percentage
        rank: 1-based position in the standings, 0 when not ranked
    """

    omw_percent: float = 0.0
    gw_percent: float = 0.0
    ogw_percent: float = 0.0
    oomw_percent: float = 0.0
    rank: int = 0

    @classmethod
    def from_stats(
        cls,
        stats: PlayerStats,
        omw_percent: float,
        gw_percent: float,
        ogw_percent: float,
        oomw_percent: float,
        rank: int = 0,
    ) -> "PlayerRecord":
        """Attach tie-break percentages to aggregated stats."""
        return cls(
            **asdict(stats),
            omw_percent=omw_percent,
            gw_percent=gw_percent,
            ogw_percent=ogw_percent,
            oomw_percent=oomw_percent,
            rank=rank,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player record to dictionary."""
        data = asdict(self)
        data["opponent_ids"] = list(self.opponent_ids)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerRecord":
        """Deserialize player record from dictionary."""
        return cls(
            user_id=str(data["user_id"]),
            user_name=data.get("user_name", str(data["user_id"])),
            points=int(data.get("points", 0)),
            match_wins=int(data.get("match_wins", 0)),
            match_losses=int(data.get("match_losses", 0)),
            match_draws=int(data.get("match_draws", 0)),
            game_wins=int(data.get("game_wins", 0)),
            game_losses=int(data.get("game_losses", 0)),
            opponent_ids=tuple(str(o) for o in data.get("opponent_ids", [])),
            received_bye=bool(data.get("received_bye", False)),
            is_dropped=bool(data.get("is_dropped", False)),
            omw_percent=float(data.get("omw_percent", 0.0)),
            gw_percent=float(data.get("gw_percent", 0.0)),
            ogw_percent=float(data.get("ogw_percent", 0.0)),
            oomw_percent=float(data.get("oomw_percent", 0.0)),
            rank=int(data.get("rank", 0)),
        )
