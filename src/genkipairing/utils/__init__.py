"""Shared utilities for Genki Pairing."""

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

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER_NAME = "genkipairing"


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a module logger under the package hierarchy.

    The package root logger gets a single stderr handler the first time it is
    requested; module loggers propagate to it.

    Args:
        name: Logger name, normally the calling module's ``__name__``
        level: Optional level to set on the returned logger

    Returns:
        The configured logger
    """
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: int) -> None:
    """Set the level of the package root logger."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def apply_floor(value: float, floor: float) -> float:
    """Clamp a percentage into [floor, 1.0]."""
    return min(1.0, max(value, floor))


__all__ = ["setup_logger", "set_log_level", "safe_divide", "apply_floor"]
