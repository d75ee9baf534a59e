"""Engine controllers: rule table, run ledger, ranking and reconciliation."""

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

from teamroping.controllers.ranking import (
    RankedPair,
    all_qualifying_done,
    final_average,
    final_call_order,
    qualified_for_final,
    qualifying_average,
    qualifying_round_count,
    rank_pairs,
)
from teamroping.controllers.reconciliation import reconcile_pairs
from teamroping.controllers.rule_table import HandicapRuleTable
from teamroping.controllers.run_entry import RunEntry, coerce_entry, parse_raw_time
from teamroping.controllers.run_ledger import RunLedger

__all__ = [
    "HandicapRuleTable",
    "RunLedger",
    "RunEntry",
    "coerce_entry",
    "parse_raw_time",
    "RankedPair",
    "qualifying_average",
    "final_average",
    "final_call_order",
    "qualified_for_final",
    "rank_pairs",
    "qualifying_round_count",
    "all_qualifying_done",
    "reconcile_pairs",
]
