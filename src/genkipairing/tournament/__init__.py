"""Swiss event management for Genki Pairing.

Standings with percentage tiebreaks and event progress helpers.
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

from genkipairing.tournament.standings_calculator import (
    StandingsCalculator,
    calculate_standings,
    compare_records,
    get_player_records_for_pairing,
)
from genkipairing.tournament.status import (
    MatchReport,
    TournamentState,
    TournamentStatus,
    are_all_matches_reported,
    calculate_recommended_rounds,
    can_player_still_win,
    get_max_points_after_rounds,
    get_players_in_contention,
    get_tournament_status,
    should_offer_intentional_draw,
)
from genkipairing.tournament.tiebreak_calculator import TiebreakCalculator

__all__ = [
    "StandingsCalculator",
    "TiebreakCalculator",
    "calculate_standings",
    "compare_records",
    "get_player_records_for_pairing",
    "MatchReport",
    "TournamentState",
    "TournamentStatus",
    "are_all_matches_reported",
    "calculate_recommended_rounds",
    "can_player_still_win",
    "get_max_points_after_rounds",
    "get_players_in_contention",
    "get_tournament_status",
    "should_offer_intentional_draw",
]
