"""Command-line interface for Genki Pairing.

Reads an event snapshot (JSON) and prints standings or the next round's
pairings, or plays out a simulated event.
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

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

from genkipairing.constants import SNAPSHOT_FILE_EXTENSION
from genkipairing.exceptions import (
    FileLoadException,
    GenkiPairingException,
    InvalidConfigurationException,
)
from genkipairing.models.event_config import EventConfig
from genkipairing.models.match_record import MatchRecord
from genkipairing.models.pairing_result import PairingOutput
from genkipairing.models.player_record import PlayerRecord
from genkipairing.pairing.swiss import generate_pairings
from genkipairing.testing.simulator import RandomEventGenerator, SimulatorConfig
from genkipairing.tournament.standings_calculator import (
    calculate_standings,
    get_player_records_for_pairing,
)
from genkipairing.utils import set_log_level, setup_logger

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


@dataclass
class EventSnapshot:
    """An event as stored in a snapshot file."""

    config: EventConfig
    players: Dict[str, str]
    dropped: Set[str] = field(default_factory=set)
    matches: List[MatchRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EventSnapshot":
        """Deserialize a snapshot from dictionary.

        ``players`` may be an object (id -> name) or a list of ids.

        Raises:
            InvalidConfigurationException: If the data is not a snapshot
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationException("Snapshot must be a JSON object")

        raw_players = data.get("players", {})
        if isinstance(raw_players, dict):
            players = {str(k): str(v) for k, v in raw_players.items()}
        else:
            players = {str(player_id): str(player_id) for player_id in raw_players}

        try:
            matches = [MatchRecord.from_dict(m) for m in data.get("matches", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid match entry: {e}") from e

        return cls(
            config=EventConfig.from_dict(data.get("config") or {}),
            players=players,
            dropped={str(player_id) for player_id in data.get("dropped", [])},
            matches=matches,
        )


def load_snapshot(path: Path) -> EventSnapshot:
    """Load an event snapshot from a JSON file.

    Raises:
        FileLoadException: If the file cannot be read or is not JSON
        InvalidConfigurationException: If the content is not a valid snapshot
    """
    if path.suffix != SNAPSHOT_FILE_EXTENSION:
        logger.debug("Snapshot %s has no %s extension", path, SNAPSHOT_FILE_EXTENSION)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise FileLoadException(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileLoadException(f"Snapshot {path} is not valid JSON: {e}") from e

    logger.debug("Loaded snapshot %s", path)
    return EventSnapshot.from_dict(data)


# ========== Output Formatting ==========


def format_percent(value: float) -> str:
    return f"{value * 100:6.2f}%"


def format_standings(standings: Sequence[PlayerRecord]) -> str:
    """Render standings as a fixed-width table."""
    header = (
        f"{'Rank':>4}  {'Player':<24} {'Pts':>4}  {'W-L-D':<8} "
        f"{'OMW%':>7} {'GW%':>7} {'OGW%':>7} {'OOMW%':>7}"
    )
    lines = [header, "-" * len(header)]
    for record in standings:
        name = record.user_name + (" (dropped)" if record.is_dropped else "")
        wld = f"{record.match_wins}-{record.match_losses}-{record.match_draws}"
        lines.append(
            f"{record.rank:>4}  {name:<24} {record.points:>4}  {wld:<8} "
            f"{format_percent(record.omw_percent)} {format_percent(record.gw_percent)} "
            f"{format_percent(record.ogw_percent)} {format_percent(record.oomw_percent)}"
        )
    return "\n".join(lines)


def format_pairings(pairing: PairingOutput, names: Dict[str, str]) -> str:
    """Render pairings one table per line."""
    lines = []
    for table in pairing.pairings:
        player_a = names.get(table.player_a_id, table.player_a_id)
        if table.is_bye:
            lines.append(f"Table {table.table_number:>3}: {player_a} - BYE")
        else:
            player_b = names.get(table.player_b_id, table.player_b_id)
            lines.append(f"Table {table.table_number:>3}: {player_a} vs {player_b}")
    return "\n".join(lines)


def _emit(payload: Any, as_json: bool, text: str) -> None:
    if as_json:
        print(json.dumps(payload, indent=2))
    else:
        print(text)


# ========== Commands ==========


def cmd_standings(args: argparse.Namespace) -> int:
    snapshot = load_snapshot(Path(args.snapshot))
    standings = calculate_standings(
        snapshot.players, snapshot.matches, snapshot.dropped, snapshot.config
    )
    _emit(
        [record.to_dict() for record in standings],
        args.json,
        format_standings(standings),
    )
    return EXIT_OK


def cmd_pair(args: argparse.Namespace) -> int:
    snapshot = load_snapshot(Path(args.snapshot))
    records = get_player_records_for_pairing(
        snapshot.players, snapshot.matches, snapshot.dropped, snapshot.config
    )
    avoid_rematches = snapshot.config.avoid_rematches and not args.allow_rematches
    pairing = generate_pairings(records, avoid_rematches)
    _emit(pairing.to_dict(), args.json, format_pairings(pairing, snapshot.players))
    return EXIT_OK


def cmd_simulate(args: argparse.Namespace) -> int:
    config = SimulatorConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        seed=args.seed,
        best_of=args.best_of,
        drop_rate=args.drop_rate,
    )
    event = RandomEventGenerator(config).generate_complete_event()
    if args.output:
        try:
            with Path(args.output).open("w", encoding="utf-8") as f:
                json.dump(event.to_snapshot(), f, indent=2)
        except OSError as e:
            raise FileLoadException(f"Cannot write snapshot {args.output}: {e}") from e
        logger.info("Wrote snapshot to %s", args.output)

    _emit(
        [record.to_dict() for record in event.standings],
        args.json,
        format_standings(event.standings),
    )
    return EXIT_OK


def _positive_int(value: str) -> int:
    """Parse a positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not an integer >= 1
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1, got {number}")
    return number


def _rate(value: str) -> float:
    try:
        rate = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid rate '{value}'")
    if not 0.0 <= rate <= 1.0:
        raise argparse.ArgumentTypeError(f"Rate must be between 0 and 1, got {rate}")
    return rate


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="genkipairing",
        description="Swiss standings and pairings for trading card game events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Current standings of an event
  genkipairing standings event.json

  # Next round's pairings as JSON
  genkipairing pair event.json --json

  # Play out a seeded 16 player event and keep its snapshot
  genkipairing simulate --players 16 --seed 42 -o simulated.json
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    standings = subparsers.add_parser("standings", help="Print current standings")
    standings.add_argument("snapshot", help="Event snapshot (JSON)")
    standings.add_argument("--json", action="store_true", help="Output JSON")
    standings.set_defaults(func=cmd_standings)

    pair = subparsers.add_parser("pair", help="Pair the next round")
    pair.add_argument("snapshot", help="Event snapshot (JSON)")
    pair.add_argument(
        "--allow-rematches",
        action="store_true",
        help="Do not steer away from repeat pairings",
    )
    pair.add_argument("--json", action="store_true", help="Output JSON")
    pair.set_defaults(func=cmd_pair)

    simulate = subparsers.add_parser("simulate", help="Play out a random event")
    simulate.add_argument(
        "--players", type=_positive_int, required=True, help="Number of players"
    )
    simulate.add_argument(
        "--rounds",
        type=_positive_int,
        default=None,
        help="Rounds to play (default: recommended for the player count)",
    )
    simulate.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate.add_argument(
        "--best-of", type=_positive_int, default=3, help="Games per match (default: 3)"
    )
    simulate.add_argument(
        "--drop-rate",
        type=_rate,
        default=0.0,
        help="Chance per player and round of dropping (default: 0)",
    )
    simulate.add_argument("-o", "--output", help="Write the event snapshot here")
    simulate.add_argument("--json", action="store_true", help="Output JSON")
    simulate.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        return args.func(args)
    except GenkiPairingException as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())
