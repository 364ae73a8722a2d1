from typing import Any, Dict, List, Optional

from pydantic import BaseModel, computed_field

from .enums import MatchOutcome, ScopeKind, TeamSide


class StandingRow(BaseModel):
    """Cumulative statistics for one team within one scope.

    Rows are accumulators: the aggregation engine creates fresh rows on every
    run and mutates only those, never anything it was handed.
    """

    team_id: str
    team_name: str
    team_logo: Optional[str] = None
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    fair_play: int = 0  # demerits, lower is better

    @computed_field  # type: ignore[misc]
    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


class RankedStanding(BaseModel):
    rank: int
    row: StandingRow

    def as_row(self) -> Dict[str, Any]:
        """Flat row in the shape the standings pages render."""
        row = self.row
        return {
            "rank": self.rank,
            "teamId": row.team_id,
            "teamName": row.team_name,
            "played": row.played,
            "won": row.won,
            "drawn": row.drawn,
            "lost": row.lost,
            "gf": row.goals_for,
            "ga": row.goals_against,
            "gd": row.goal_difference,
            "points": row.points,
        }


class StandingsTable(BaseModel):
    """Ranked standings for one scope (overall, a group, or ungrouped)."""

    scope_id: str
    scope_name: str
    scope_kind: ScopeKind
    description: Optional[str] = None
    rows: List[RankedStanding] = []

    def as_rows(self) -> List[Dict[str, Any]]:
        return [ranked.as_row() for ranked in self.rows]

    def find(self, team_id: str) -> Optional[RankedStanding]:
        return next((r for r in self.rows if r.row.team_id == team_id), None)


class TeamMatchLine(BaseModel):
    """One match from a team's point of view."""

    game_id: Optional[str] = None
    opponent_id: str
    opponent_name: str
    side: TeamSide
    goals_for: int
    goals_against: int
    yellow_cards: int = 0
    red_cards: int = 0
    outcome: MatchOutcome


class TeamReport(BaseModel):
    """Everything the team detail page shows about one team."""

    team_id: str
    team_name: str
    row: StandingRow
    rank: Optional[int] = None
    matches: List[TeamMatchLine] = []

    @computed_field  # type: ignore[misc]
    @property
    def win_rate(self) -> int:
        """Percentage of played matches won, rounded to a whole number."""
        if self.row.played == 0:
            return 0
        return round(self.row.won / self.row.played * 100)
