"""Standings calculation for Swiss events.

Reduces a snapshot of match records into per-player statistics, attaches
tiebreak percentages and orders players by the official ranking order:

1. Match points (win 3, draw or intentional draw 1, loss 0)
2. OMW% (opponents' match-win %, floor 33.33%)
3. GW% (game-win %, floor 33.33%)
4. OGW% (opponents' game-win %, floor 33.33%)
5. OOMW% (opponents' opponents' match-win %)
6. Player id, ascending, so the order is total
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

import functools
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Set

from genkipairing.constants import (
    BYE_POINTS,
    DEFAULT_TIEBREAK_ORDER,
    PERCENT_EPSILON,
    TB_GW,
    TB_OGW,
    TB_OMW,
    TB_OOMW,
    UNKNOWN_PLAYER_NAME,
)
from genkipairing.exceptions import InvalidReferenceException
from genkipairing.models.event_config import EventConfig
from genkipairing.models.match_record import MatchOutcome, MatchRecord
from genkipairing.models.player_record import PlayerRecord, PlayerStats
from genkipairing.tournament.tiebreak_calculator import TiebreakCalculator
from genkipairing.type_hints import PlayerInput
from genkipairing.utils import setup_logger
from genkipairing.utils.validation import validate_match_record_strict

logger = setup_logger(__name__)

_PERCENT_FIELDS = tuple(f"{key}_percent" for key in DEFAULT_TIEBREAK_ORDER)


@dataclass
class _Tally:
    """Mutable accumulator used while walking the match records."""

    points: int = 0
    match_wins: int = 0
    match_losses: int = 0
    match_draws: int = 0
    game_wins: int = 0
    game_losses: int = 0
    opponent_ids: List[str] = field(default_factory=list)
    received_bye: bool = False

    def win(self) -> None:
        self.match_wins += 1

    def loss(self) -> None:
        self.match_losses += 1

    def draw(self) -> None:
        self.match_draws += 1


def compare_records(a: PlayerRecord, b: PlayerRecord) -> int:
    """Compare two records by ranking order; negative means ``a`` ranks higher."""
    if a.points != b.points:
        return -1 if a.points > b.points else 1

    for attr in _PERCENT_FIELDS:
        diff = getattr(b, attr) - getattr(a, attr)
        if abs(diff) > PERCENT_EPSILON:
            return 1 if diff > 0 else -1

    if a.user_id == b.user_id:
        return 0
    return -1 if a.user_id < b.user_id else 1


class StandingsCalculator:
    """Builds ranked standings from a snapshot of match history.

    The calculator holds no state between calls; every call rebuilds the
    statistics from the records it is given.
    """

    def __init__(
        self,
        config: Optional[EventConfig] = None,
        tiebreak_calculator: Optional[TiebreakCalculator] = None,
    ) -> None:
        self.config = config or EventConfig()
        self.tiebreak_calculator = tiebreak_calculator or TiebreakCalculator()

    def calculate(
        self,
        players: PlayerInput,
        match_records: Iterable[MatchRecord],
        dropped_players: Optional[Iterable[str]] = None,
    ) -> List[PlayerRecord]:
        """Calculate ranked standings.

        Args:
            players: Roster mapping (id -> name) or a collection of ids
            match_records: Every match of the event so far, in any order
            dropped_players: Ids of players who have left the event

        Returns:
            One PlayerRecord per roster player, best first, ranks assigned

        Raises:
            InvalidReferenceException: If a record or dropped id names a player
                outside the roster, or the roster repeats an id
            MalformedMatchRecordException: If a record has impossible game counts
        """
        roster = self._normalize_roster(players)
        records = list(match_records)
        dropped = self._validate_dropped(dropped_players, roster)
        self._validate_records(records, roster)

        if not roster:
            return []

        stats = self.aggregate(roster, records, dropped)
        tiebreaks = self.tiebreak_calculator.calculate_all_tiebreaks(stats)

        # Canonical input order keeps the result independent of roster order
        unranked = [
            PlayerRecord.from_stats(
                stats[player_id],
                omw_percent=tiebreaks[player_id][TB_OMW],
                gw_percent=tiebreaks[player_id][TB_GW],
                ogw_percent=tiebreaks[player_id][TB_OGW],
                oomw_percent=tiebreaks[player_id][TB_OOMW],
            )
            for player_id in sorted(stats)
        ]
        ordered = sorted(unranked, key=functools.cmp_to_key(compare_records))
        standings = [
            replace(record, rank=position)
            for position, record in enumerate(ordered, start=1)
        ]

        logger.info(
            "Calculated standings for %s players from %s match records",
            len(standings),
            len(records),
        )
        return standings

    def aggregate(
        self,
        roster: Mapping[str, str],
        match_records: Iterable[MatchRecord],
        dropped: Set[str],
    ) -> Dict[str, PlayerStats]:
        """Reduce match records to per-player stats.

        Records are assumed to be validated against the roster.
        """
        tallies: Dict[str, _Tally] = {player_id: _Tally() for player_id in roster}

        for record in match_records:
            player_a = tallies[record.player_a_id]

            if record.is_bye:
                player_a.points += BYE_POINTS
                player_a.win()
                player_a.received_bye = True
                continue

            if record.result is None:
                logger.debug(
                    "Skipping unreported match %s vs %s",
                    record.player_a_id,
                    record.player_b_id,
                )
                continue

            player_b = tallies[record.player_b_id]
            self._apply_result(record, player_a, player_b)

        return {
            player_id: PlayerStats(
                user_id=player_id,
                user_name=roster[player_id],
                points=tally.points,
                match_wins=tally.match_wins,
                match_losses=tally.match_losses,
                match_draws=tally.match_draws,
                game_wins=tally.game_wins,
                game_losses=tally.game_losses,
                opponent_ids=tuple(tally.opponent_ids),
                received_bye=tally.received_bye,
                is_dropped=player_id in dropped,
            )
            for player_id, tally in tallies.items()
        }

    def _apply_result(self, record: MatchRecord, player_a: _Tally, player_b: _Tally) -> None:
        """Credit one reported two-player match to both tallies."""
        player_a.opponent_ids.append(record.player_b_id)
        player_b.opponent_ids.append(record.player_a_id)

        player_a.game_wins += record.games_won_a
        player_a.game_losses += record.games_won_b
        player_b.game_wins += record.games_won_b
        player_b.game_losses += record.games_won_a

        points_a, points_b = record.result.points
        player_a.points += points_a
        player_b.points += points_b

        result = record.result
        if result.is_draw:
            player_a.draw()
            player_b.draw()
        elif result is MatchOutcome.DOUBLE_LOSS:
            player_a.loss()
            player_b.loss()
        elif result.is_disqualification:
            if result is MatchOutcome.PLAYER_A_DQ:
                disqualified, winner, loser = record.player_a_id, player_b, player_a
            else:
                disqualified, winner, loser = record.player_b_id, player_a, player_b
            winner.win()
            loser.loss()
            logger.debug(
                "%s disqualified in %s vs %s",
                disqualified,
                record.player_a_id,
                record.player_b_id,
            )
        elif result is MatchOutcome.PLAYER_A_WIN:
            player_a.win()
            player_b.loss()
        else:
            player_a.loss()
            player_b.win()

    def _normalize_roster(self, players: PlayerInput) -> Dict[str, str]:
        if isinstance(players, Mapping):
            return {
                player_id: (name or UNKNOWN_PLAYER_NAME)
                for player_id, name in players.items()
            }

        roster: Dict[str, str] = {}
        for player_id in players:
            if player_id in roster:
                raise InvalidReferenceException(
                    f"Player {player_id} is listed more than once", player_id
                )
            roster[player_id] = UNKNOWN_PLAYER_NAME
        return roster

    def _validate_dropped(
        self, dropped_players: Optional[Iterable[str]], roster: Mapping[str, str]
    ) -> Set[str]:
        dropped = set(dropped_players or ())
        for player_id in sorted(dropped):
            if player_id not in roster:
                raise InvalidReferenceException(
                    f"Dropped player {player_id} is not registered for the event",
                    player_id,
                )
        return dropped

    def _validate_records(
        self, records: List[MatchRecord], roster: Mapping[str, str]
    ) -> None:
        games_to_win = self.config.games_to_win
        for record in records:
            for player_id in (record.player_a_id, record.player_b_id):
                if player_id is not None and player_id not in roster:
                    raise InvalidReferenceException(
                        f"Match {record.player_a_id} vs {record.player_b_id} "
                        f"references unknown player {player_id}",
                        player_id,
                    )
            validate_match_record_strict(record, games_to_win)


def calculate_standings(
    players: PlayerInput,
    match_records: Iterable[MatchRecord],
    dropped_players: Optional[Iterable[str]] = None,
    config: Optional[EventConfig] = None,
) -> List[PlayerRecord]:
    """Calculate ranked standings for an event.

    Args:
        players: Roster mapping (id -> name) or a collection of ids
        match_records: Every match of the event so far
        dropped_players: Ids of players who have left the event
        config: Event configuration; only its games format is used here

    Returns:
        Ranked list of PlayerRecord
    """
    return StandingsCalculator(config).calculate(players, match_records, dropped_players)


def get_player_records_for_pairing(
    players: PlayerInput,
    match_records: Iterable[MatchRecord],
    dropped_players: Optional[Iterable[str]] = None,
    config: Optional[EventConfig] = None,
) -> List[PlayerRecord]:
    """Standings restricted to active players, in pairing priority order."""
    standings = calculate_standings(players, match_records, dropped_players, config)
    return [record for record in standings if not record.is_dropped]
