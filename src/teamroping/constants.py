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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
BACKUP_FILE_PREFIX = "backup_competicao"

# Disqualifying marker: "Sem Aproveitamento Tecnico" (no score)
SAT_MARKER = "SAT"

# Handicaps move in half steps; edits never go below the minimum step
HANDICAP_STEP = 0.5
MIN_EDITED_HANDICAP = 0.5

# Event defaults
DEFAULT_EVENT_NAME = "Bolão Amigos do Laço"
DEFAULT_TIME_LIMIT = 15.0
DEFAULT_MAX_HANDICAP = 7.0

# Run count used when the rule table is empty
DEFAULT_RUN_COUNT = 1

# (threshold, qualifying runs): combined handicap <= threshold runs that many
DEFAULT_HANDICAP_RULES = [
    (3.5, 1),
    (4.5, 2),
    (6.5, 3),
    (100.0, 4),
]

# Snapshot document keys
SNAPSHOT_SETTINGS = "settings"
SNAPSHOT_RULES = "handicap_rules"
SNAPSHOT_COMPETITORS = "competitors"
SNAPSHOT_PAIRS = "pairs"
SNAPSHOT_LOCKED_ROUNDS = "locked_rounds"
SNAPSHOT_FINAL_LOCKED = "final_locked"
SNAPSHOT_EXPORT_DATE = "export_date"

# Report formatting
TIME_DECIMALS = 3
UNSET_DISPLAY = "-"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
