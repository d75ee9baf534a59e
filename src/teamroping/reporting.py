"""
Plain-text rendering of draws, run sheets and standings.
Used by the command line and by anything that needs a printable summary.
"""

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

from typing import List, Sequence

from teamroping.competition import Competition
from teamroping.constants import TIME_DECIMALS, UNSET_DISPLAY
from teamroping.controllers.ranking import RankedPair, qualifying_average
from teamroping.models.competition import EventSettings, Pair
from teamroping.models.run_time import RunTime


class ReportFormatter:
    """Utility class for text reports."""

    @staticmethod
    def format_run_time(run: RunTime) -> str:
        """Render a run: three decimals, ``SAT``, or ``-`` when unset."""
        if run.is_numeric:
            return f"{run.seconds:.{TIME_DECIMALS}f}"
        if run.is_sat:
            return str(run)
        return UNSET_DISPLAY

    @staticmethod
    def pair_label(pair: Pair) -> str:
        return f"{pair.header.nickname} / {pair.heeler.nickname}"

    @staticmethod
    def all_runs(pair: Pair) -> str:
        """Every qualifying run then the final, separated by slashes."""
        runs = list(pair.qualifying_runs) + [pair.final_run]
        return " / ".join(ReportFormatter.format_run_time(run) for run in runs)

    @staticmethod
    def event_header(settings: EventSettings) -> List[str]:
        title = settings.event_name
        return [
            title,
            "=" * len(title),
            f"Date: {settings.display_date} | Time limit: {settings.time_limit:g}s | "
            f"Max HC: {settings.max_handicap:g}",
            "",
        ]

    @staticmethod
    def format_draw(pairs: Sequence[Pair]) -> List[str]:
        """The draw, one pair per line, with id and run quota."""
        lines = []
        for index, pair in enumerate(pairs, start=1):
            lines.append(
                f"{index:>3}. {ReportFormatter.pair_label(pair):<40} "
                f"HC {pair.combined_handicap:>4g}  runs {pair.run_count}  [{pair.id}]"
            )
        return lines

    @staticmethod
    def format_run_sheet(competition: Competition) -> List[str]:
        """Qualifying rounds then the final, with lock state and recorded times."""
        lines: List[str] = []
        locks = competition.locks
        for round_index in range(competition.qualifying_round_count):
            lock_note = " (locked)" if locks.is_round_locked(round_index) else ""
            lines.append(f"Qualifying {round_index + 1}{lock_note}")
            for pair in competition.pairs:
                if pair.run_count <= round_index:
                    continue
                flag = "  DQ" if pair.disqualified else ""
                run = ReportFormatter.format_run_time(pair.qualifying_runs[round_index])
                lines.append(f"    {ReportFormatter.pair_label(pair):<40} {run:>8}{flag}")
            lines.append("")

        lines.append(f"Final{' (locked)' if locks.final_locked else ''}")
        for pair in competition.final_call_order():
            run = ReportFormatter.format_run_time(pair.final_run)
            lines.append(f"    {ReportFormatter.pair_label(pair):<40} {run:>8}")
        return lines

    @staticmethod
    def format_call_order(pairs: Sequence[Pair]) -> List[str]:
        """Final call order with each pair's qualifying average."""
        lines = []
        for index, pair in enumerate(pairs, start=1):
            average = qualifying_average(pair)
            lines.append(
                f"{index:>3}. {ReportFormatter.pair_label(pair):<40} "
                f"avg {average:.{TIME_DECIMALS}f}"
            )
        return lines

    @staticmethod
    def format_standings(
        settings: EventSettings, ranked: Sequence[RankedPair]
    ) -> List[str]:
        """Printable final results."""
        lines = ReportFormatter.event_header(settings)
        if not ranked:
            lines.append("No pairs have completed the final yet.")
            return lines

        for entry in ranked:
            pair = entry.pair
            lines.append(
                f"{entry.position:>3}. {ReportFormatter.pair_label(pair):<40} "
                f"avg {entry.average:.{TIME_DECIMALS}f}  "
                f"({ReportFormatter.all_runs(pair)})"
            )
        return lines
