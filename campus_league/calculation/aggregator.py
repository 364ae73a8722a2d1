from typing import Dict, Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel

from campus_league.models.enums import MatchOutcome
from campus_league.models.result import NormalizedResult
from campus_league.models.standing import StandingRow
from campus_league.models.team import Group, Team
from campus_league.normalization.membership import MembershipIndex, shared_groups
from campus_league.normalization.normalizer import DRAW_POINTS, LOSS_POINTS, WIN_POINTS

YELLOW_CARD_WEIGHT = 1
RED_CARD_WEIGHT = 3

RowMap = Dict[str, StandingRow]


class ScopedRows(BaseModel):
    """Accumulated rows for every scope of one aggregation run."""

    overall: RowMap = {}
    groups: Dict[str, RowMap] = {}
    ungrouped: Optional[RowMap] = None
    has_card_data: bool = False


def outcome_for(points: int, goals_for: int, goals_against: int) -> MatchOutcome:
    """Win/draw/loss for one side, read from its awarded points.

    Point values other than 3/1/0 (manual overrides) fall back to the scoreline.
    """
    if points == WIN_POINTS:
        return MatchOutcome.WIN
    if points == DRAW_POINTS:
        return MatchOutcome.DRAW
    if points == LOSS_POINTS:
        return MatchOutcome.LOSS
    if goals_for > goals_against:
        return MatchOutcome.WIN
    if goals_for < goals_against:
        return MatchOutcome.LOSS
    return MatchOutcome.DRAW


class StandingsAggregator:
    """Folds normalized results into overall and group-scoped standing rows."""

    def __init__(
        self,
        teams: Iterable[Team],
        groups: Iterable[Group],
        membership: MembershipIndex,
        yellow_weight: int = YELLOW_CARD_WEIGHT,
        red_weight: int = RED_CARD_WEIGHT,
        include_ungrouped: bool = False,
    ):
        self.teams: Dict[str, Team] = {team.id: team for team in teams}
        self.groups: List[Group] = list(groups)
        self.membership = membership
        self.yellow_weight = yellow_weight
        self.red_weight = red_weight
        self.include_ungrouped = include_ungrouped

    def _new_row(self, team_id: str) -> StandingRow:
        team = self.teams.get(team_id)
        return StandingRow(
            team_id=team_id,
            team_name=team.name if team else team_id,
            team_logo=team.logo_url if team else None,
        )

    def _ensure_row(self, rows: RowMap, team_id: str) -> StandingRow:
        if team_id not in rows:
            rows[team_id] = self._new_row(team_id)
        return rows[team_id]

    def seed(self) -> ScopedRows:
        """Zero rows for every known team and every rostered group member."""
        scoped = ScopedRows(
            overall={team_id: self._new_row(team_id) for team_id in self.teams}
        )
        for group in self.groups:
            rows: RowMap = {}
            for team_id in group.team_ids:
                self._ensure_row(rows, team_id)
            scoped.groups[group.id] = rows
        if self.include_ungrouped:
            scoped.ungrouped = {}
        return scoped

    def _apply_side(
        self,
        row: StandingRow,
        goals_for: int,
        goals_against: int,
        points: int,
        yellow: int,
        red: int,
    ) -> None:
        row.played += 1
        outcome = outcome_for(points, goals_for, goals_against)
        if outcome is MatchOutcome.WIN:
            row.won += 1
        elif outcome is MatchOutcome.DRAW:
            row.drawn += 1
        else:
            row.lost += 1
        row.goals_for += goals_for
        row.goals_against += goals_against
        row.points += points
        row.yellow_cards += yellow
        row.red_cards += red
        row.fair_play += yellow * self.yellow_weight + red * self.red_weight

    def _apply(self, rows: RowMap, result: NormalizedResult) -> None:
        self._apply_side(
            self._ensure_row(rows, result.home_id),
            result.home_score,
            result.away_score,
            result.home_points,
            result.home_yellow,
            result.home_red,
        )
        self._apply_side(
            self._ensure_row(rows, result.away_id),
            result.away_score,
            result.home_score,
            result.away_points,
            result.away_yellow,
            result.away_red,
        )

    def aggregate(self, results: Iterable[NormalizedResult]) -> ScopedRows:
        """Accumulates every result into the overall scope and each shared group."""
        scoped = self.seed()
        applied = 0
        for result in results:
            self._apply(scoped.overall, result)
            common = shared_groups(self.membership, result.home_id, result.away_id)
            for group_id in common:
                group_rows = scoped.groups.get(group_id)
                if group_rows is not None:
                    self._apply(group_rows, result)
            if not common and scoped.ungrouped is not None:
                self._apply(scoped.ungrouped, result)
            scoped.has_card_data = scoped.has_card_data or result.has_card_data
            applied += 1

        logger.debug(
            f"Aggregated {applied} results into {len(scoped.overall)} overall rows "
            f"and {len(scoped.groups)} group scopes."
        )
        return scoped
