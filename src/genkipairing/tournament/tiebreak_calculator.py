"""Tiebreak calculation for Swiss events.

This module handles calculation of the percentage tiebreaks used in
trading-card-game Swiss standings.
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

from typing import Dict, Mapping

from genkipairing.constants import (
    DRAW_MATCH_SHARE,
    TB_GW,
    TB_OGW,
    TB_OMW,
    TB_OOMW,
    TIEBREAK_FLOOR,
)
from genkipairing.models.player_record import PlayerStats
from genkipairing.utils import apply_floor, safe_divide, setup_logger

logger = setup_logger(__name__)


class TiebreakCalculator:
    """Calculates tiebreak percentages for event standings.

    Tiebreaks, in ranking order after match points:

    - OMW% (Opponents' Match Win %): mean of each opponent's match-win
      percentage, each floored before averaging
    - GW% (Game Win %): own games won over games played, floored
    - OGW% (Opponents' Game Win %): mean of each opponent's floored GW%
    - OOMW% (Opponents' Opponents' Match Win %): mean of each opponent's OMW%

    Opponent averages run over the player's opponent list, so an opponent met
    twice weighs twice. Byes are not opponents. A player with no opponents or
    no games starts from 0.0 and is raised to the floor.
    """

    def __init__(self, floor: float = TIEBREAK_FLOOR) -> None:
        self.floor = floor

    def calculate_all_tiebreaks(
        self, players: Mapping[str, PlayerStats]
    ) -> Dict[str, Dict[str, float]]:
        """Calculate all tiebreaks for all players.

        Args:
            players: Aggregated stats of every player (id -> PlayerStats)

        Returns:
            Mapping of player id -> {tiebreak key -> value}
        """
        omw_map = {
            player_id: self.calculate_omw(player, players)
            for player_id, player in players.items()
        }

        tiebreaks: Dict[str, Dict[str, float]] = {}
        for player_id, player in players.items():
            tiebreaks[player_id] = {
                TB_OMW: omw_map[player_id],
                TB_GW: self.calculate_gw(player),
                TB_OGW: self.calculate_ogw(player, players),
                TB_OOMW: self.calculate_oomw(player, omw_map),
            }
            logger.debug("Tiebreaks for %s: %s", player_id, tiebreaks[player_id])
        return tiebreaks

    def match_win_percentage(self, player: PlayerStats) -> float:
        """Raw match-win percentage; a draw counts as half a win."""
        return safe_divide(
            player.match_wins + DRAW_MATCH_SHARE * player.match_draws,
            player.matches_played,
        )

    def game_win_percentage(self, player: PlayerStats) -> float:
        """Raw game-win percentage."""
        return safe_divide(player.game_wins, player.games_played)

    def calculate_omw(
        self, player: PlayerStats, all_players: Mapping[str, PlayerStats]
    ) -> float:
        """Calculate Opponents' Match Win % with the floor applied per opponent."""
        opponent_rates = [
            apply_floor(self.match_win_percentage(all_players[opp_id]), self.floor)
            for opp_id in player.opponent_ids
        ]
        return apply_floor(
            safe_divide(sum(opponent_rates), len(opponent_rates)), self.floor
        )

    def calculate_gw(self, player: PlayerStats) -> float:
        """Calculate Game Win %, floored."""
        return apply_floor(self.game_win_percentage(player), self.floor)

    def calculate_ogw(
        self, player: PlayerStats, all_players: Mapping[str, PlayerStats]
    ) -> float:
        """Calculate Opponents' Game Win %, each opponent floored."""
        opponent_rates = [
            self.calculate_gw(all_players[opp_id]) for opp_id in player.opponent_ids
        ]
        return apply_floor(
            safe_divide(sum(opponent_rates), len(opponent_rates)), self.floor
        )

    def calculate_oomw(self, player: PlayerStats, omw_map: Mapping[str, float]) -> float:
        """Calculate Opponents' Opponents' Match Win %.

        Opponent OMW% values are already floored, so no further floor is
        applied except for a player without opponents.
        """
        if not player.opponent_ids:
            return self.floor
        return sum(omw_map[opp_id] for opp_id in player.opponent_ids) / len(
            player.opponent_ids
        )
