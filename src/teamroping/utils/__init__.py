"""Shared helpers for Team Roping Draw: logging setup and id generation."""

# Team Roping Draw
# Copyright (C) 2025  Team Roping Draw developers
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
import os
import uuid

LOG_LEVEL_ENV_VAR = "TEAMROPING_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_PACKAGE_LOGGER = "teamroping"


def _configure_package_logger() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
        package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the configured package logger.

    Args:
        name: Usually the calling module's ``__name__``

    Returns:
        The logger instance
    """
    _configure_package_logger()
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of the package logger (used by ``--verbose``)."""
    _configure_package_logger().setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate an opaque unique identifier.

    Args:
        prefix: Kind of object the id is for, e.g. ``"Pair"``

    Returns:
        A string such as ``"pair_3f2a9c1e0b7d4a55"``
    """
    return f"{prefix.lower()}_{uuid.uuid4().hex[:16]}"
