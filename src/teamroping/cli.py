"""Command line interface for running a team roping event from a snapshot file.

Every command reads the competition snapshot, applies one operation and,
for commands that change state, writes the snapshot back.
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

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from teamroping.competition import Competition
from teamroping.exceptions import TeamRopingException
from teamroping.models.competition import EventSettings
from teamroping.reporting import ReportFormatter
from teamroping.storage import load_snapshot, save_snapshot
from teamroping.utils import set_log_level, setup_logger

logger = setup_logger(__name__)

DEFAULT_SNAPSHOT = "competition.json"


def parse_round(value: str) -> int:
    """Parse a 1-based qualifying round number into a 0-based index.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid round '{value}'. Must be an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Round must be at least 1: {number}")
    return number - 1


def parse_lock_target(value: str) -> Optional[int]:
    """``final`` (returns None) or a 1-based qualifying round."""
    if value.strip().lower() == "final":
        return None
    return parse_round(value)


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


# ========== Commands ==========


def _cmd_init(args: argparse.Namespace, path: Path) -> int:
    if path.exists() and not args.force:
        logger.error(f"{path} already exists; use --force to overwrite")
        return 1

    changes = {
        "event_name": args.name,
        "event_date": args.date,
        "time_limit": args.time_limit,
        "max_handicap": args.max_handicap,
    }
    settings = EventSettings().updated(
        **{k: v for k, v in changes.items() if v is not None}
    )

    save_snapshot(Competition(settings=settings), path)
    print(f"Created {path} for {settings.event_name} on {settings.display_date}")
    return 0


def _cmd_settings(args: argparse.Namespace, competition: Competition) -> bool:
    changes = {
        "event_name": args.name,
        "event_date": args.date,
        "time_limit": args.time_limit,
        "max_handicap": args.max_handicap,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if changes:
        competition.update_settings(**changes)
    _print_lines(ReportFormatter.event_header(competition.settings))
    for warning in competition.rule_warnings():
        print(f"Warning: {warning}")
    return bool(changes)


def _cmd_add_competitor(args: argparse.Namespace, competition: Competition) -> bool:
    competitor = competition.add_competitor(
        full_name=args.full_name,
        nickname=args.nickname,
        modality=args.role,
        handicap=args.handicap,
    )
    print(f"Added {competitor.full_name} [{competitor.id}]")
    return True


def _cmd_edit_competitor(args: argparse.Namespace, competition: Competition) -> bool:
    changes = {
        "full_name": args.full_name,
        "nickname": args.nickname,
        "modality": args.role,
        "handicap": args.handicap,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        print("Nothing to change")
        return False
    competitor = competition.update_competitor(args.competitor_id, **changes)
    print(f"Updated {competitor}")
    return True


def _cmd_remove_competitor(args: argparse.Namespace, competition: Competition) -> bool:
    removed = competition.remove_competitors(args.competitor_ids)
    print(f"Removed {removed} competitor(s); pairs must be generated again")
    return removed > 0


def _cmd_competitors(args: argparse.Namespace, competition: Competition) -> bool:
    for competitor in competition.get_competitor_list():
        print(
            f"{competitor.nickname:<20} {competitor.full_name:<30} "
            f"{competitor.modality.value:<6} HC {competitor.handicap:<4g} [{competitor.id}]"
        )
    print(f"Headers: {len(competition.head_pool)}  Heelers: {len(competition.heel_pool)}")
    return False


def _cmd_add_rule(args: argparse.Namespace, competition: Competition) -> bool:
    rule = competition.add_rule(args.threshold, args.runs)
    print(f"Added rule: combined HC <= {rule.threshold:g} runs {rule.run_count}")
    return True


def _cmd_remove_rule(args: argparse.Namespace, competition: Competition) -> bool:
    if competition.remove_rule(args.threshold):
        print(f"Removed rule for HC <= {args.threshold:g}")
        return True
    print(f"No rule for HC <= {args.threshold:g}")
    return False


def _cmd_rules(args: argparse.Namespace, competition: Competition) -> bool:
    for rule in competition.rule_table.rules:
        print(
            f"HC <= {rule.threshold:>5g}: {rule.run_count} qualifying, "
            f"{rule.run_count + 1} total"
        )
    for warning in competition.rule_warnings():
        print(f"Warning: {warning}")
    return False


def _cmd_generate(args: argparse.Namespace, competition: Competition) -> bool:
    pairs = competition.generate_pairs()
    print(f"Drew {len(pairs)} pairs")
    _print_lines(ReportFormatter.format_draw(pairs))
    return True


def _cmd_update(args: argparse.Namespace, competition: Competition) -> bool:
    pairs = competition.update_pairs()
    print(f"Updated draw: {len(pairs)} pairs")
    _print_lines(ReportFormatter.format_draw(pairs))
    return True


def _cmd_pairs(args: argparse.Namespace, competition: Competition) -> bool:
    _print_lines(ReportFormatter.format_draw(competition.pairs))
    return False


def _cmd_record(args: argparse.Namespace, competition: Competition) -> bool:
    stored = competition.record_qualifying_run(
        args.pair_id, args.round, args.value, authorize_over_limit=args.authorize
    )
    pair = competition.get_pair(args.pair_id)
    print(
        f"Qualifying {args.round + 1} for {ReportFormatter.pair_label(pair)}: "
        f"{ReportFormatter.format_run_time(stored)}"
    )
    return True


def _cmd_record_final(args: argparse.Namespace, competition: Competition) -> bool:
    stored = competition.record_final_run(args.pair_id, args.value)
    pair = competition.get_pair(args.pair_id)
    print(
        f"Final for {ReportFormatter.pair_label(pair)}: "
        f"{ReportFormatter.format_run_time(stored)}"
    )
    return True


def _cmd_lock(args: argparse.Namespace, competition: Competition) -> bool:
    if args.target is None:
        competition.lock_final()
    else:
        competition.lock_round(args.target)
    return True


def _cmd_unlock(args: argparse.Namespace, competition: Competition) -> bool:
    if args.target is None:
        competition.unlock_final()
    else:
        competition.unlock_round(args.target)
    return True


def _cmd_run_sheet(args: argparse.Namespace, competition: Competition) -> bool:
    _print_lines(ReportFormatter.format_run_sheet(competition))
    return False


def _cmd_call_order(args: argparse.Namespace, competition: Competition) -> bool:
    if not competition.all_qualifying_done():
        print("Warning: qualifying is not finished yet")
    _print_lines(ReportFormatter.format_call_order(competition.final_call_order()))
    return False


def _cmd_standings(args: argparse.Namespace, competition: Competition) -> bool:
    ranked = competition.standings()
    _print_lines(ReportFormatter.format_standings(competition.settings, ranked))
    return False


# Commands that operate on an existing snapshot; they return True if it changed
COMMANDS: Dict[str, Callable[[argparse.Namespace, Competition], bool]] = {
    "settings": _cmd_settings,
    "add-competitor": _cmd_add_competitor,
    "edit-competitor": _cmd_edit_competitor,
    "remove-competitor": _cmd_remove_competitor,
    "competitors": _cmd_competitors,
    "add-rule": _cmd_add_rule,
    "remove-rule": _cmd_remove_rule,
    "rules": _cmd_rules,
    "generate": _cmd_generate,
    "update": _cmd_update,
    "pairs": _cmd_pairs,
    "record": _cmd_record,
    "record-final": _cmd_record_final,
    "lock": _cmd_lock,
    "unlock": _cmd_unlock,
    "run-sheet": _cmd_run_sheet,
    "call-order": _cmd_call_order,
    "standings": _cmd_standings,
}


def _add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", help="Event name")
    parser.add_argument("--date", help="Event date (YYYY-MM-DD or DD/MM/YYYY)")
    parser.add_argument("--time-limit", type=float, help="Per-run time limit in seconds")
    parser.add_argument("--max-handicap", type=float, help="Maximum combined handicap")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="team-roping",
        description="Run a team roping draw and scoring from a snapshot file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  team-roping init --name "Copa do Laço" --date 2025-06-14 --time-limit 15
  team-roping add-competitor "João Silva" --role head --handicap 2
  team-roping generate --seed 7
  team-roping record pair_3f2a9c1e0b7d4a55 1 9.2
  team-roping record pair_3f2a9c1e0b7d4a55 2 16.4 --authorize
  team-roping lock 1
  team-roping standings
        """,
    )
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_SNAPSHOT,
        help=f"Competition snapshot file (default: {DEFAULT_SNAPSHOT})",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible draw")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create a new competition file")
    _add_settings_arguments(init)
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    settings = sub.add_parser("settings", help="Show or change event settings")
    _add_settings_arguments(settings)

    add = sub.add_parser("add-competitor", help="Register a competitor")
    add.add_argument("full_name")
    add.add_argument("--nickname")
    add.add_argument("--role", choices=["head", "heel", "both"], required=True)
    add.add_argument("--handicap", type=float, required=True)

    edit = sub.add_parser(
        "edit-competitor", help="Edit a competitor and refresh their pairs"
    )
    edit.add_argument("competitor_id")
    edit.add_argument("--full-name")
    edit.add_argument("--nickname")
    edit.add_argument("--role", choices=["head", "heel", "both"])
    edit.add_argument("--handicap", type=float)

    remove = sub.add_parser(
        "remove-competitor", help="Remove competitors (clears the draw)"
    )
    remove.add_argument("competitor_ids", nargs="+")

    sub.add_parser("competitors", help="List competitors")

    add_rule = sub.add_parser("add-rule", help="Add a handicap rule")
    add_rule.add_argument("threshold", type=float, help="Combined handicap upper bound")
    add_rule.add_argument(
        "runs", type=int, help="Qualifying runs for pairs up to the bound"
    )

    remove_rule = sub.add_parser("remove-rule", help="Remove a handicap rule")
    remove_rule.add_argument("threshold", type=float)

    sub.add_parser("rules", help="Show the handicap rule table")
    sub.add_parser("generate", help="Draw a new pair set (discards recorded times)")
    sub.add_parser("update", help="Update the draw after roster changes, keeping times")
    sub.add_parser("pairs", help="Show the draw")

    record = sub.add_parser("record", help="Record a qualifying time")
    record.add_argument("pair_id")
    record.add_argument("round", type=parse_round, help="Qualifying round (1-based)")
    record.add_argument("value", help='Time in seconds, "SAT", or "" to clear')
    record.add_argument(
        "--authorize", action="store_true", help="Accept a time above the limit"
    )

    final = sub.add_parser("record-final", help="Record a final time")
    final.add_argument("pair_id")
    final.add_argument("value", help='Time in seconds, "SAT", or "" to clear')

    lock = sub.add_parser("lock", help="Lock a qualifying round or the final")
    lock.add_argument("target", type=parse_lock_target, help='Round number or "final"')

    unlock = sub.add_parser("unlock", help="Unlock a qualifying round or the final")
    unlock.add_argument("target", type=parse_lock_target, help='Round number or "final"')

    sub.add_parser("run-sheet", help="Show recorded times by round")
    sub.add_parser("call-order", help="Show the order pairs are called into the final")
    sub.add_parser("standings", help="Show final standings")

    return parser


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command.

    Returns:
        Exit code
    """
    path = Path(args.file)
    if args.command == "init":
        return _cmd_init(args, path)

    rng = random.Random(args.seed) if args.seed is not None else None
    competition = load_snapshot(path, rng=rng)
    if COMMANDS[args.command](args, competition):
        save_snapshot(competition, path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except TeamRopingException as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
