from typing import List, Optional

from loguru import logger

from campus_league.calculation.aggregator import ScopedRows, StandingsAggregator
from campus_league.calculation.ranking import FairPlayPolicy, rank_rows, resolve_tiebreaks
from campus_league.config.settings import settings
from campus_league.models.enums import MatchOutcome, ScopeKind, TeamSide
from campus_league.models.result import NormalizedResult
from campus_league.models.snapshot import LeagueSnapshot
from campus_league.models.standing import StandingsTable, TeamMatchLine, TeamReport
from campus_league.normalization.membership import build_membership_index
from campus_league.normalization.normalizer import ResultNormalizer

OVERALL_SCOPE_ID = "overall"
OVERALL_SCOPE_NAME = "Overall Standings"
UNGROUPED_SCOPE_ID = "__ungrouped"
UNGROUPED_SCOPE_NAME = "Ungrouped Matches"


def _aggregate(
    snapshot: LeagueSnapshot, include_ungrouped: bool
) -> tuple[List[NormalizedResult], ScopedRows]:
    normalized = ResultNormalizer(snapshot.teams).normalize(snapshot.results)
    aggregator = StandingsAggregator(
        snapshot.teams,
        snapshot.groups,
        build_membership_index(snapshot.groups),
        yellow_weight=settings.yellow_card_weight,
        red_weight=settings.red_card_weight,
        include_ungrouped=include_ungrouped,
    )
    return normalized, aggregator.aggregate(normalized)


def compute_standings(
    snapshot: LeagueSnapshot,
    fair_play: Optional[FairPlayPolicy] = None,
    include_ungrouped: Optional[bool] = None,
) -> List[StandingsTable]:
    """Builds every standings table for a snapshot.

    The overall table always comes first, then one table per group with at
    least one seeded team, ordered by group name. The optional ungrouped table
    (matches between teams sharing no group) comes last.
    """
    policy = fair_play or settings.fair_play_tiebreak
    if include_ungrouped is None:
        include_ungrouped = settings.include_ungrouped_table

    _, scoped = _aggregate(snapshot, include_ungrouped)
    tiebreaks = resolve_tiebreaks(scoped.has_card_data, policy)
    logger.debug(f"Ranking with tiebreaks: {[key.value for key in tiebreaks]}")

    tables = [
        StandingsTable(
            scope_id=OVERALL_SCOPE_ID,
            scope_name=OVERALL_SCOPE_NAME,
            scope_kind=ScopeKind.OVERALL,
            rows=rank_rows(scoped.overall, tiebreaks),
        )
    ]

    for group in sorted(snapshot.groups, key=lambda g: (g.name, g.id)):
        rows = scoped.groups.get(group.id)
        if not rows:
            continue
        tables.append(
            StandingsTable(
                scope_id=group.id,
                scope_name=group.name,
                scope_kind=ScopeKind.GROUP,
                description=group.description,
                rows=rank_rows(rows, tiebreaks),
            )
        )

    if scoped.ungrouped:
        tables.append(
            StandingsTable(
                scope_id=UNGROUPED_SCOPE_ID,
                scope_name=UNGROUPED_SCOPE_NAME,
                scope_kind=ScopeKind.UNGROUPED,
                rows=rank_rows(scoped.ungrouped, tiebreaks),
            )
        )

    logger.debug(
        f"Computed {len(tables)} standings tables from {len(snapshot.results)} results."
    )
    return tables


def _outcome_from_score(goals_for: int, goals_against: int) -> MatchOutcome:
    if goals_for > goals_against:
        return MatchOutcome.WIN
    if goals_for == goals_against:
        return MatchOutcome.DRAW
    return MatchOutcome.LOSS


def build_team_report(
    snapshot: LeagueSnapshot,
    team_id: str,
    fair_play: Optional[FairPlayPolicy] = None,
) -> Optional[TeamReport]:
    """Overall row, overall rank, and match log for one team.

    Returns None for a team that is neither known nor in any result.
    """
    policy = fair_play or settings.fair_play_tiebreak
    normalized, scoped = _aggregate(snapshot, include_ungrouped=False)
    row = scoped.overall.get(team_id)
    if row is None:
        logger.debug(f"No team or results found for team id {team_id}.")
        return None

    ranked = rank_rows(scoped.overall, resolve_tiebreaks(scoped.has_card_data, policy))
    rank = next((r.rank for r in ranked if r.row.team_id == team_id), None)

    names = {team.id: team.name for team in snapshot.teams}
    matches: List[TeamMatchLine] = []
    for result in normalized:
        if team_id not in (result.home_id, result.away_id):
            continue
        is_home = result.home_id == team_id
        goals_for = result.home_score if is_home else result.away_score
        goals_against = result.away_score if is_home else result.home_score
        opponent_id = result.away_id if is_home else result.home_id
        matches.append(
            TeamMatchLine(
                game_id=result.game_id,
                opponent_id=opponent_id,
                opponent_name=names.get(opponent_id, opponent_id),
                side=TeamSide.HOME if is_home else TeamSide.AWAY,
                goals_for=goals_for,
                goals_against=goals_against,
                yellow_cards=result.home_yellow if is_home else result.away_yellow,
                red_cards=result.home_red if is_home else result.away_red,
                outcome=_outcome_from_score(goals_for, goals_against),
            )
        )

    return TeamReport(
        team_id=team_id,
        team_name=row.team_name,
        row=row,
        rank=rank,
        matches=matches,
    )
