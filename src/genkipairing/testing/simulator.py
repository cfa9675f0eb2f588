"""Random Event Generator - internal testing system for Swiss standings and pairings.

This module plays out complete events round by round: standings feed the
pairer, simulated results feed the next standings. Every random choice comes
from one seeded generator, so a seed reproduces an event exactly.
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

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from genkipairing.models.event_config import EventConfig
from genkipairing.models.match_record import MatchOutcome, MatchRecord
from genkipairing.models.pairing_result import PairingOutput
from genkipairing.models.player_record import PlayerRecord
from genkipairing.pairing.swiss import generate_pairings
from genkipairing.tournament.standings_calculator import (
    calculate_standings,
    get_player_records_for_pairing,
)
from genkipairing.tournament.status import calculate_recommended_rounds
from genkipairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """Result generation patterns for events."""

    RANDOM = "random"
    SKILL = "skill"


@dataclass
class SimulatorConfig:
    """Configuration for the Random Event Generator.

    Rates are probabilities per match (per player and round for drops).
    """

    num_players: int
    num_rounds: Optional[int] = None
    seed: Optional[int] = None
    best_of: int = 3
    result_pattern: ResultPattern = ResultPattern.SKILL
    draw_rate: float = 0.08
    intentional_draw_rate: float = 0.02
    double_loss_rate: float = 0.01
    disqualification_rate: float = 0.005
    drop_rate: float = 0.0
    avoid_rematches: bool = True

    def event_config(self) -> EventConfig:
        return EventConfig(
            name=f"Simulated event ({self.num_players} players)",
            best_of=self.best_of,
            num_rounds=self.num_rounds,
            avoid_rematches=self.avoid_rematches,
        )


@dataclass
class SimulatedEvent:
    """Everything a simulated event produced."""

    config: EventConfig
    roster: Dict[str, str]
    matches: List[MatchRecord] = field(default_factory=list)
    rounds: List[PairingOutput] = field(default_factory=list)
    dropped: Set[str] = field(default_factory=set)
    standings: List[PlayerRecord] = field(default_factory=list)

    def to_snapshot(self) -> Dict:
        """Snapshot in the command-line JSON format."""
        return {
            "config": self.config.to_dict(),
            "players": dict(self.roster),
            "dropped": sorted(self.dropped),
            "matches": [match.to_dict() for match in self.matches],
        }


class PlayerFactory:
    """Factory for creating a roster with hidden skill values."""

    def __init__(self, config: SimulatorConfig, rng: random.Random):
        self.config = config
        self.random = rng

    def create_roster(self) -> Dict[str, str]:
        """Create player ids and names, ``P001`` -> ``Player 001``."""
        roster = {
            f"P{number:03d}": f"Player {number:03d}"
            for number in range(1, self.config.num_players + 1)
        }
        logger.info("Created %s players", len(roster))
        return roster

    def create_skills(self, roster: Dict[str, str]) -> Dict[str, float]:
        return {player_id: self.random.random() for player_id in roster}


class ResultSimulator:
    """Simulates match results with game counts valid for the format."""

    def __init__(self, config: SimulatorConfig, rng: random.Random):
        self.config = config
        self.random = rng
        self.games_to_win = config.best_of // 2 + 1

    def simulate_match(
        self, player_a_id: str, player_b_id: str, skills: Dict[str, float]
    ) -> MatchRecord:
        """Return a reported match record for one table."""
        roll = self.random.random()
        cutoff = self.config.disqualification_rate
        if roll < cutoff:
            outcome = self.random.choice(
                [MatchOutcome.PLAYER_A_DQ, MatchOutcome.PLAYER_B_DQ]
            )
            return MatchRecord(player_a_id, player_b_id, outcome, 0, 0)

        cutoff += self.config.double_loss_rate
        if roll < cutoff:
            return MatchRecord(player_a_id, player_b_id, MatchOutcome.DOUBLE_LOSS, 0, 0)

        cutoff += self.config.intentional_draw_rate
        if roll < cutoff:
            return MatchRecord(
                player_a_id, player_b_id, MatchOutcome.INTENTIONAL_DRAW, 0, 0
            )

        cutoff += self.config.draw_rate
        if roll < cutoff:
            games = self.random.randint(0, self.games_to_win - 1)
            return MatchRecord(player_a_id, player_b_id, MatchOutcome.DRAW, games, games)

        loser_games = self.random.randint(0, self.games_to_win - 1)
        if self._player_a_wins(player_a_id, player_b_id, skills):
            return MatchRecord(
                player_a_id,
                player_b_id,
                MatchOutcome.PLAYER_A_WIN,
                self.games_to_win,
                loser_games,
            )
        return MatchRecord(
            player_a_id,
            player_b_id,
            MatchOutcome.PLAYER_B_WIN,
            loser_games,
            self.games_to_win,
        )

    def _player_a_wins(
        self, player_a_id: str, player_b_id: str, skills: Dict[str, float]
    ) -> bool:
        if self.config.result_pattern == ResultPattern.RANDOM:
            return self.random.random() < 0.5

        skill_a, skill_b = skills[player_a_id], skills[player_b_id]
        win_prob = max(0.05, min(0.95, 0.5 + (skill_a - skill_b) / 2))
        return self.random.random() < win_prob


class RandomEventGenerator:
    """Main event generator orchestrating roster creation, pairings and results."""

    def __init__(self, config: SimulatorConfig):
        if config.num_players < 0:
            raise ValueError(f"num_players cannot be negative: {config.num_players}")
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.player_factory = PlayerFactory(config, self.random)
        self.result_simulator = ResultSimulator(config, self.random)

    def generate_complete_event(self) -> SimulatedEvent:
        """Play every round of an event and return its history and standings."""
        event_config = self.config.event_config()
        roster = self.player_factory.create_roster()
        skills = self.player_factory.create_skills(roster)
        num_rounds = event_config.num_rounds or calculate_recommended_rounds(len(roster))

        event = SimulatedEvent(config=event_config, roster=roster)
        logger.info(
            "Simulating event: %s players, %s rounds", len(roster), num_rounds
        )

        for round_number in range(1, num_rounds + 1):
            active = len(roster) - len(event.dropped)
            if active < 2:
                logger.info(
                    "Stopping before round %s: %s active players", round_number, active
                )
                break
            self._simulate_round(event, skills, round_number)

        event.standings = calculate_standings(
            roster, event.matches, event.dropped, event_config
        )
        logger.info("Event simulation complete")
        return event

    def _simulate_round(
        self, event: SimulatedEvent, skills: Dict[str, float], round_number: int
    ) -> None:
        records = get_player_records_for_pairing(
            event.roster, event.matches, event.dropped, event.config
        )
        pairing = generate_pairings(records, event.config.avoid_rematches)
        event.rounds.append(pairing)

        for table in pairing.pairings:
            if table.is_bye:
                event.matches.append(MatchRecord(table.player_a_id))
                continue
            event.matches.append(
                self.result_simulator.simulate_match(
                    table.player_a_id, table.player_b_id, skills
                )
            )

        if self.config.drop_rate > 0:
            for record in records:
                if self.random.random() < self.config.drop_rate:
                    event.dropped.add(record.user_id)
                    logger.debug(
                        "%s dropped after round %s", record.user_id, round_number
                    )


def create_small_event(
    num_players: int = 8, seed: Optional[int] = None
) -> RandomEventGenerator:
    """Create small event for testing."""
    return RandomEventGenerator(SimulatorConfig(num_players=num_players, seed=seed))
