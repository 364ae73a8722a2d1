from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import TeamSide


class GoalEvent(BaseModel):
    """A single goal recorded against a match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    game_id: Optional[str] = Field(None, alias="gameId")
    team_side: Optional[TeamSide] = Field(None, alias="teamSide")
    scorer_id: Optional[str] = Field(None, alias="scorerId")
    scorer_name: Optional[str] = Field(None, alias="scorerName")
    scorer_photo_url: Optional[str] = Field(None, alias="scorerPhotoUrl")


class ScorerSummary(BaseModel):
    """Goal tally for one scorer."""

    scorer_id: str
    scorer_name: str
    goals: int = 0
    photo_url: Optional[str] = None


class RankedScorer(ScorerSummary):
    rank: int

    def as_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "rank": self.rank,
            "scorerId": self.scorer_id,
            "scorerName": self.scorer_name,
            "goals": self.goals,
        }
        if self.photo_url:
            row["photoUrl"] = self.photo_url
        return row


class Leaderboard(BaseModel):
    """Full ranked scorer list; callers slice with `top`."""

    entries: List[RankedScorer] = []

    def top(self, n: int) -> List[RankedScorer]:
        return self.entries[:n]

    def as_rows(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        entries = self.entries if limit is None else self.top(limit)
        return [entry.as_row() for entry in entries]
