"""Event configuration."""

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
from typing import Any, Dict, Optional

from genkipairing.constants import DEFAULT_BEST_OF, DEFAULT_TOP_CUT_SIZE
from genkipairing.exceptions import InvalidConfigurationException


@dataclass
class EventConfig:
    """Event configuration settings.

    Attributes
    ----------
    name : str
        Event name.
    best_of : int
        Games format of every match (1 for single game, 3 for best of three).
    num_rounds : int or None
        Planned Swiss rounds; ``None`` uses the recommended count for the
        player pool.
    avoid_rematches : bool
        Whether the pairer should steer clear of repeat pairings.
    top_cut_size : int
        Number of players advancing to the top cut.
    """

    name: str = "Untitled Event"
    best_of: int = DEFAULT_BEST_OF
    num_rounds: Optional[int] = None
    avoid_rematches: bool = True
    top_cut_size: int = DEFAULT_TOP_CUT_SIZE

    def __post_init__(self) -> None:
        if self.best_of < 1 or self.best_of % 2 == 0:
            raise InvalidConfigurationException(
                f"best_of must be a positive odd number, got {self.best_of}"
            )
        if self.num_rounds is not None and self.num_rounds < 1:
            raise InvalidConfigurationException(
                f"num_rounds must be at least 1, got {self.num_rounds}"
            )
        if self.top_cut_size < 0:
            raise InvalidConfigurationException(
                f"top_cut_size cannot be negative, got {self.top_cut_size}"
            )

    @property
    def games_to_win(self) -> int:
        """Games a player needs to take the match; also the per-player cap."""
        return self.best_of // 2 + 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "best_of": self.best_of,
            "num_rounds": self.num_rounds,
            "avoid_rematches": self.avoid_rematches,
            "top_cut_size": self.top_cut_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventConfig":
        """Deserialize configuration from dictionary."""
        try:
            return cls(
                name=data.get("name", "Untitled Event"),
                best_of=int(data.get("best_of", DEFAULT_BEST_OF)),
                num_rounds=(
                    int(data["num_rounds"])
                    if data.get("num_rounds") is not None
                    else None
                ),
                avoid_rematches=bool(data.get("avoid_rematches", True)),
                top_cut_size=int(data.get("top_cut_size", DEFAULT_TOP_CUT_SIZE)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid event config: {e}") from e
