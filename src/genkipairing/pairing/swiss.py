"""Swiss pairing for trading-card-game events.

Players arrive ranked by the standings calculator. The ranking is the pairing
priority: players are grouped by match points, walked from the top, and each
is paired with the closest player below them that they have not met yet.
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

from typing import Dict, List, Optional, Sequence, Tuple

from genkipairing.constants import MAX_PAIRING_SEARCH_STEPS
from genkipairing.exceptions import InvalidPairingInputException
from genkipairing.models.pairing_history import PairingHistory
from genkipairing.models.pairing_result import PairingOutput, TableAssignment
from genkipairing.models.player_record import PlayerRecord
from genkipairing.utils import setup_logger

logger = setup_logger(__name__)

Pair = Tuple[PlayerRecord, PlayerRecord]


class _SearchExhausted(Exception):
    """Raised internally when the rematch-free search runs out of steps."""


def group_players_by_score(players: Sequence[PlayerRecord]) -> Dict[int, List[PlayerRecord]]:
    """Group players by match points, keeping the incoming order in each group."""
    score_groups: Dict[int, List[PlayerRecord]] = {}
    for player in players:
        score_groups.setdefault(player.points, []).append(player)
    return score_groups


def _pairing_order(players: Sequence[PlayerRecord]) -> List[PlayerRecord]:
    """Score groups from highest to lowest, incoming order inside each group."""
    score_groups = group_players_by_score(players)
    return [
        player
        for points in sorted(score_groups, reverse=True)
        for player in score_groups[points]
    ]


def select_bye_player(players: Sequence[PlayerRecord]) -> PlayerRecord:
    """Pick the bye recipient from a pool in pairing order.

    The lowest-ranked player who has not had a bye gets it. When everyone has
    had one, the lowest-ranked player gets a second.

    Raises:
        InvalidPairingInputException: If the pool is empty
    """
    if not players:
        raise InvalidPairingInputException("Cannot assign a bye from an empty pool")

    for player in reversed(players):
        if not player.received_bye:
            return player

    logger.warning(
        "All %s players have already received a bye; giving another to %s",
        len(players),
        players[-1].user_id,
    )
    return players[-1]


class _RematchFreeSearch:
    """Depth-first search for a complete matching without repeat pairings.

    Candidates are tried in pairing order, so the first matching found is the
    one a player-by-player walk would produce if it could look ahead.
    """

    def __init__(self, history: PairingHistory, max_steps: int) -> None:
        self.history = history
        self.max_steps = max_steps
        self.steps = 0

    def run(self, players: List[PlayerRecord]) -> Optional[List[Pair]]:
        """Return the first rematch-free matching, or None when there is none.

        Each stack frame holds an unpaired pool and the position of the next
        partner to try for the pool's first player, so pool size is not
        limited by recursion depth.
        """
        stack: List[Tuple[List[PlayerRecord], int]] = []
        pairs: List[Pair] = []
        pool, start = list(players), 1

        while pool:
            head = pool[0]
            for position in range(start, len(pool)):
                candidate = pool[position]
                if self.history.have_played(head.user_id, candidate.user_id):
                    continue

                self.steps += 1
                if self.steps > self.max_steps:
                    raise _SearchExhausted()

                stack.append((pool, position + 1))
                pairs.append((head, candidate))
                pool, start = pool[1:position] + pool[position + 1 :], 1
                break
            else:
                # No partner left for this head; resume the previous pool
                if not stack:
                    return None
                pool, start = stack.pop()
                pairs.pop()

        return pairs


def _greedy_pairings(
    players: List[PlayerRecord], history: PairingHistory, avoid_rematches: bool
) -> List[Pair]:
    """Pair top-down, taking the first fresh opponent or, failing that, the next player."""
    pairings: List[Pair] = []
    remaining = players.copy()

    while len(remaining) >= 2:
        player = remaining.pop(0)
        opponent_idx = 0

        if avoid_rematches:
            fresh = [
                i
                for i, candidate in enumerate(remaining)
                if not history.have_played(player.user_id, candidate.user_id)
            ]
            if fresh:
                opponent_idx = fresh[0]
            else:
                logger.warning(
                    "No unplayed opponent left for %s; pairing rematch with %s",
                    player.user_id,
                    remaining[0].user_id,
                )

        pairings.append((player, remaining.pop(opponent_idx)))

    return pairings


def _pair_pool(
    players: List[PlayerRecord],
    history: PairingHistory,
    avoid_rematches: bool,
    max_search_steps: int,
) -> List[Pair]:
    """Pair an even pool that is already in pairing order."""
    if not avoid_rematches:
        return _greedy_pairings(players, history, avoid_rematches=False)

    search = _RematchFreeSearch(history, max_search_steps)
    try:
        pairings = search.run(players)
    except _SearchExhausted:
        logger.warning(
            "Rematch-free search gave up after %s steps; pairing greedily",
            max_search_steps,
        )
        pairings = None

    if pairings is None:
        logger.info("No rematch-free round exists; allowing rematches where needed")
        return _greedy_pairings(players, history, avoid_rematches=True)

    logger.debug("Rematch-free round found in %s steps", search.steps)
    return pairings


def _validate_pool(players: Sequence[PlayerRecord]) -> None:
    seen = set()
    for player in players:
        if player.user_id in seen:
            raise InvalidPairingInputException(
                f"Player {player.user_id} appears more than once in the pairing pool"
            )
        seen.add(player.user_id)


def generate_pairings(
    ranked_players: Sequence[PlayerRecord],
    avoid_rematches: bool = True,
    max_search_steps: int = MAX_PAIRING_SEARCH_STEPS,
) -> PairingOutput:
    """Create the next round's tables for a Swiss event.

    Parameters
    ----------
        ranked_players: Player records in standings order. Dropped players
            are left out of the round.
        avoid_rematches: Prefer opponents neither player has faced. A rematch
            is still paired when no complete round avoids it.
        max_search_steps: Budget for the rematch-free search before falling
            back to the greedy walk.

    Returns
    -------
        PairingOutput with tables numbered from 1 in ranking order of each
        table's higher-ranked player, the bye table last.

    Raises
    ------
        InvalidPairingInputException: If a player id is repeated
    """
    _validate_pool(ranked_players)

    active = [player for player in ranked_players if not player.is_dropped]
    if len(active) != len(ranked_players):
        logger.debug(
            "Leaving %s dropped players out of the round",
            len(ranked_players) - len(active),
        )

    if not active:
        return PairingOutput()

    ordered = _pairing_order(active)
    position = {player.user_id: index for index, player in enumerate(ordered)}

    bye_player: Optional[PlayerRecord] = None
    if len(ordered) % 2 == 1:
        bye_player = select_bye_player(ordered)
        ordered = [p for p in ordered if p.user_id != bye_player.user_id]
        logger.debug("Bye assigned to %s", bye_player.user_id)

    history = PairingHistory.from_players(active)
    pairs = _pair_pool(ordered, history, avoid_rematches, max_search_steps)

    seated = []
    for first, second in pairs:
        if position[second.user_id] < position[first.user_id]:
            first, second = second, first
        seated.append((first, second))
    seated.sort(key=lambda pair: position[pair[0].user_id])

    tables = [
        TableAssignment(
            table_number=number, player_a_id=first.user_id, player_b_id=second.user_id
        )
        for number, (first, second) in enumerate(seated, start=1)
    ]
    if bye_player is not None:
        tables.append(
            TableAssignment(table_number=len(tables) + 1, player_a_id=bye_player.user_id)
        )

    logger.info(
        "Paired %s players into %s matches, bye: %s",
        len(active),
        len(seated),
        bye_player.user_id if bye_player else None,
    )
    return PairingOutput(
        pairings=tables,
        bye_player_id=bye_player.user_id if bye_player else None,
    )
