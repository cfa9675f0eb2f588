"""Exceptions for use in Genki Pairing"""

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

from typing import Optional

# ========== Base Application Exception ==========


class GenkiPairingException(Exception):
    """Base exception for all Genki Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all package-specific errors with a single except clause.
    """

    pass


# ========== Standings Exceptions ==========


class StandingsException(GenkiPairingException):
    """Base exception for standings calculation errors."""

    pass


class InvalidReferenceException(StandingsException):
    """Raised when a record names a player that is not in the event roster."""

    def __init__(self, message: str, player_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.player_id = player_id


class MalformedMatchRecordException(StandingsException):
    """Raised when a match record carries impossible or negative game counts."""

    pass


# ========== Pairing Exceptions ==========


class PairingException(GenkiPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingInputException(PairingException):
    """Raised when the ranked player list handed to the pairer is inconsistent."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(GenkiPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data or a snapshot is invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(GenkiPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when an event snapshot cannot be read or written."""

    pass
