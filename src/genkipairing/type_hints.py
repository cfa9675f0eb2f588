"""Type hints used in Genki Pairing."""

from typing import Iterable, Mapping, Union

# Player identifiers are opaque strings owned by the roster subsystem
PlayerId = str

# Roster as handed over by player management: id -> display name
PlayerRoster = Mapping[PlayerId, str]
# Either a roster or a bare collection of ids
PlayerInput = Union[PlayerRoster, Iterable[PlayerId]]

#  LocalWords:  PlayerRoster
