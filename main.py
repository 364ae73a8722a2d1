import sys
import asyncio
import argparse
from typing import List, Optional

# --- Settings/Logging ---
from campus_league.logging.setup import setup_logging
from campus_league.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

from campus_league.calculation.leaderboard import build_leaderboard
from campus_league.calculation.standings import build_team_report, compute_standings
from campus_league.models.goal import Leaderboard
from campus_league.models.snapshot import LeagueSnapshot
from campus_league.models.standing import StandingsTable, TeamReport
from campus_league.storage.snapshot_loader import SnapshotError, load_snapshot_file
from campus_league.storage.supabase_client import fetch_snapshot, initialize_supabase

from rich import print
from rich.panel import Panel
from rich.table import Table


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute league standings and top scorers from a snapshot."
    )
    parser.add_argument(
        "snapshot",
        nargs="?",
        help="JSON snapshot file; reads from Supabase when omitted.",
    )
    parser.add_argument("--team", help="Print the report for one team id instead.")
    parser.add_argument(
        "--top",
        type=int,
        default=settings.leaderboard_size,
        help="Number of scorers to show (default: %(default)s).",
    )
    parser.add_argument(
        "--ungrouped",
        action=argparse.BooleanOptionalAction,
        default=settings.include_ungrouped_table,
        help="Add a table for matches between teams sharing no group.",
    )
    return parser.parse_args(argv)


async def load_snapshot(path: Optional[str]) -> Optional[LeagueSnapshot]:
    """Loads the snapshot from a file, or from Supabase if no path is given."""
    if path:
        return load_snapshot_file(path)

    supabase_client = await initialize_supabase()
    if not supabase_client:
        logger.critical("Failed to initialize Supabase client and no snapshot file given.")
        return None
    return await fetch_snapshot(supabase_client)


def render_table(table: StandingsTable) -> Table:
    title = table.scope_name
    if table.description:
        title = f"{title}\n[dim]{table.description}[/dim]"
    rendered = Table(title=title, title_justify="left")
    for column in ("#", "Team", "P", "W", "D", "L", "GF", "GA", "GD", "Pts"):
        rendered.add_column(column, justify="left" if column == "Team" else "right")
    for row in table.as_rows():
        rendered.add_row(
            str(row["rank"]),
            row["teamName"],
            *(str(row[key]) for key in ("played", "won", "drawn", "lost", "gf", "ga", "gd")),
            f"[bold]{row['points']}[/bold]",
        )
    return rendered


def render_leaderboard(leaderboard: Leaderboard, top: int) -> Table:
    rendered = Table(title=f"Top Scorers (top {top})", title_justify="left")
    rendered.add_column("#", justify="right")
    rendered.add_column("Player")
    rendered.add_column("Goals", justify="right")
    for entry in leaderboard.top(top):
        rendered.add_row(str(entry.rank), entry.scorer_name, str(entry.goals))
    return rendered


def render_team_report(report: TeamReport) -> Panel:
    row = report.row
    lines = [
        f"Rank: {report.rank if report.rank is not None else '-'}",
        f"Played {row.played}  W {row.won}  D {row.drawn}  L {row.lost}  "
        f"GF {row.goals_for}  GA {row.goals_against}  GD {row.goal_difference}  "
        f"Pts {row.points}",
        f"Yellow cards {row.yellow_cards}  Red cards {row.red_cards}  "
        f"Fair-play {row.fair_play}  Win rate {report.win_rate}%",
        "",
    ]
    for match in report.matches:
        venue = "vs" if match.side.value == "home" else "@"
        lines.append(
            f"{match.outcome.value}  {match.goals_for}-{match.goals_against}  "
            f"{venue} {match.opponent_name}"
        )
    return Panel("\n".join(lines), title=report.team_name)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    logger.info("Starting Campus League standings run")

    try:
        snapshot = await load_snapshot(args.snapshot)
    except SnapshotError as e:
        logger.error(f"Could not load league snapshot: {e}")
        return 1
    if snapshot is None:
        return 1

    if args.team:
        report = build_team_report(snapshot, args.team)
        if report is None:
            logger.error(f"Unknown team: {args.team}")
            return 1
        print(render_team_report(report))
        return 0

    tables = compute_standings(snapshot, include_ungrouped=args.ungrouped)
    for table in tables:
        print(render_table(table))

    leaderboard = build_leaderboard(*snapshot.goal_events)
    print(render_leaderboard(leaderboard, args.top))

    logger.success(
        f"Rendered {len(tables)} standings tables and {len(leaderboard.entries)} scorers."
    )
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
