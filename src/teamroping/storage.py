"""Snapshot files: saving, loading and naming competition backups."""

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

import json
import re
from datetime import date
from pathlib import Path
from typing import Optional, Union

from teamroping.competition import Competition
from teamroping.constants import BACKUP_FILE_PREFIX, SAVE_FILE_EXTENSION
from teamroping.exceptions import FileLoadException, FileSaveException
from teamroping.models.competition import EventSettings
from teamroping.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def backup_filename(settings: EventSettings, today: Optional[date] = None) -> str:
    """Name for a backup file, e.g. ``backup_competicao_Copa_Laco_2025-06-14.json``."""
    today = today or date.today()
    event_part = re.sub(r"\s+", "_", settings.event_name.strip())
    return f"{BACKUP_FILE_PREFIX}_{event_part}_{today.isoformat()}{SAVE_FILE_EXTENSION}"


def save_snapshot(competition: Competition, path: PathLike) -> Path:
    """Write the competition snapshot as JSON.

    Raises:
        FileSaveException: If the file cannot be written
    """
    target = Path(path)
    try:
        with open(target, "w", encoding="utf-8") as f:
            json.dump(competition.to_dict(), f, indent=4, ensure_ascii=False)
    except OSError as e:
        logger.error(f"Error saving competition: {e}")
        raise FileSaveException(f"Could not save competition to {target}: {e}") from e

    logger.info(f"Competition saved to {target}")
    return target


def read_snapshot(path: PathLike) -> dict:
    """Read a snapshot document from disk.

    Raises:
        FileLoadException: If the file is missing or not valid JSON
    """
    source = Path(path)
    try:
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading competition: {e}")
        raise FileLoadException(f"Could not load competition from {source}: {e}") from e


def load_snapshot(path: PathLike, **kwargs) -> Competition:
    """Load a competition from a snapshot file.

    Keyword arguments are passed to :meth:`Competition.from_dict`.

    Raises:
        FileLoadException: If the file cannot be read
        InvalidSnapshotException: If the document is malformed
    """
    return Competition.from_dict(read_snapshot(path), **kwargs)


def restore_from_file(competition: Competition, path: PathLike) -> None:
    """Replace ``competition``'s state with a snapshot file, all or nothing."""
    competition.restore(read_snapshot(path))
    logger.info(f"Competition restored from {Path(path).name}")
