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

# --- Constants ---
SNAPSHOT_FILE_EXTENSION = ".json"

# Match points
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0
BYE_POINTS = WIN_POINTS

# Share of a match credited for a draw when computing match-win percentage
DRAW_MATCH_SHARE = 0.5

# Tie-break floor (33.33%) applied to opponent percentages and own GW%
TIEBREAK_FLOOR = 0.3333

# Percentages closer than this are treated as equal when ranking
PERCENT_EPSILON = 0.0001

# Games format
DEFAULT_BEST_OF = 3

# Top cut used when deciding whether an intentional draw is safe
DEFAULT_TOP_CUT_SIZE = 8

# Name used when the roster lookup has no entry for a player
UNKNOWN_PLAYER_NAME = "Unknown"

# Upper bound on candidate pairings tried while searching for a
# rematch-free round before falling back to the greedy pass
MAX_PAIRING_SEARCH_STEPS = 20000

# Tiebreak keys, in ranking order after match points
TB_OMW = "omw"
TB_GW = "gw"
TB_OGW = "ogw"
TB_OOMW = "oomw"

DEFAULT_TIEBREAK_ORDER = [TB_OMW, TB_GW, TB_OGW, TB_OOMW]
