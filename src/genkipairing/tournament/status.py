"""Event progress helpers.

Round-count recommendations, completion detection and the small standings
questions tournament organizers ask between rounds.
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

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from genkipairing.constants import DEFAULT_TOP_CUT_SIZE, WIN_POINTS
from genkipairing.models.match_record import MatchOutcome
from genkipairing.models.player_record import PlayerRecord
from genkipairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class TournamentState:
    """Snapshot of an event between rounds.

    Attributes:
        player_count: Registered players, dropped ones included
        current_round: Rounds created so far, 0 before the first round
        total_rounds_planned: Planned rounds, None to use the recommendation
        standings: Current standings
        all_matches_reported: Whether every match of the current round is final
    """

    player_count: int
    current_round: int
    total_rounds_planned: Optional[int] = None
    standings: List[PlayerRecord] = field(default_factory=list)
    all_matches_reported: bool = True


@dataclass(frozen=True)
class TournamentStatus:
    """Outcome of :func:`get_tournament_status`."""

    is_complete: bool
    can_start_next_round: bool
    recommended_rounds: int
    current_round: int
    players_remaining: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class MatchReport:
    """Reporting state of one match as tracked by the round subsystem."""

    player_b_id: Optional[str]
    result: Optional[MatchOutcome] = None
    reported_by: Optional[str] = None
    confirmed_by: Optional[str] = None
    overridden_by: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchReport":
        """Deserialize a match report from dictionary."""
        return cls(
            player_b_id=data.get("player_b_id"),
            result=MatchOutcome.parse(data.get("result")),
            reported_by=data.get("reported_by"),
            confirmed_by=data.get("confirmed_by"),
            overridden_by=data.get("overridden_by"),
        )


def calculate_recommended_rounds(player_count: int) -> int:
    """Recommended Swiss rounds for a pool, ceil(log2(n)).

    That many rounds leaves room for exactly one undefeated player.

    >>> calculate_recommended_rounds(8)
    3
    >>> calculate_recommended_rounds(9)
    4
    """
    if player_count <= 1:
        return 0
    if player_count == 2:
        return 1
    return math.ceil(math.log2(player_count))


def get_tournament_status(state: TournamentState) -> TournamentStatus:
    """Decide whether an event is over and whether the next round may start.

    An event is complete when the planned (or recommended) rounds are played
    and reported, when at most one active player is left, or when exactly one
    active player is undefeated after the recommended rounds.
    """
    recommended_rounds = calculate_recommended_rounds(state.player_count)
    target_rounds = (
        state.total_rounds_planned
        if state.total_rounds_planned is not None
        else recommended_rounds
    )
    players_remaining = sum(1 for s in state.standings if not s.is_dropped)

    if state.current_round == 0:
        can_start = players_remaining >= 2 and state.all_matches_reported
        reason = None
        if players_remaining < 2:
            reason = "Need at least 2 players to start"
        elif not state.all_matches_reported:
            reason = "Pending matches must be reported"
        return TournamentStatus(
            is_complete=False,
            can_start_next_round=can_start,
            recommended_rounds=recommended_rounds,
            current_round=0,
            players_remaining=players_remaining,
            reason=reason,
        )

    is_complete = False
    reason = None

    if state.current_round >= target_rounds and state.all_matches_reported:
        is_complete = True
        reason = f"All {target_rounds} rounds completed"

    if players_remaining <= 1:
        is_complete = True
        reason = (
            "All players dropped"
            if players_remaining == 0
            else "Insufficient players remaining"
        )

    if (
        not is_complete
        and state.current_round >= recommended_rounds
        and state.all_matches_reported
    ):
        undefeated = [
            s for s in state.standings if not s.is_dropped and s.match_losses == 0
        ]
        if len(undefeated) == 1:
            is_complete = True
            reason = f"Undefeated champion: {undefeated[0].user_name}"

    if is_complete:
        logger.info("Event complete after round %s: %s", state.current_round, reason)

    return TournamentStatus(
        is_complete=is_complete,
        can_start_next_round=(
            not is_complete and state.all_matches_reported and players_remaining > 1
        ),
        recommended_rounds=recommended_rounds,
        current_round=state.current_round,
        players_remaining=players_remaining,
        reason=reason,
    )


def are_all_matches_reported(matches: Iterable[MatchReport]) -> bool:
    """Check whether every match of a round has a final result.

    Byes are final on creation. A staff override is always final. A result a
    player reported needs the opponent's confirmation.
    """
    for match in matches:
        if match.player_b_id is None:
            continue
        if match.result is None:
            return False
        if match.overridden_by:
            continue
        if match.reported_by and not match.confirmed_by:
            return False
    return True


def get_max_points_after_rounds(rounds: int) -> int:
    """Most match points obtainable in ``rounds`` rounds."""
    return rounds * WIN_POINTS


def can_player_still_win(
    player_points: int, leader_points: int, rounds_remaining: int
) -> bool:
    """Whether winning every remaining round would catch the leader."""
    return player_points + get_max_points_after_rounds(rounds_remaining) >= leader_points


def get_players_in_contention(
    standings: Sequence[PlayerRecord], rounds_remaining: int
) -> List[PlayerRecord]:
    """Active players who can still reach the leader's points."""
    active = [s for s in standings if not s.is_dropped]
    if not active:
        return []

    leader_points = active[0].points
    return [
        s for s in active if can_player_still_win(s.points, leader_points, rounds_remaining)
    ]


def should_offer_intentional_draw(
    player1: PlayerRecord,
    player2: PlayerRecord,
    rounds_remaining: int,
    top_cut_size: int = DEFAULT_TOP_CUT_SIZE,
) -> bool:
    """Suggest an intentional draw in the final round when both players sit in the cut."""
    if rounds_remaining > 1:
        return False
    return 0 < player1.rank <= top_cut_size and 0 < player2.rank <= top_cut_size
