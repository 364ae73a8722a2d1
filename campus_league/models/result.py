from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from campus_league.utils.misc_utils import ref_id


class TeamRef(BaseModel):
    """A reference-style pointer to a team document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    path: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_pointer(cls, data: Any) -> Any:
        # Path strings and foreign reference objects both collapse to {id, path}
        if isinstance(data, str):
            return {"id": ref_id(data), "path": data}
        if not isinstance(data, dict):
            return {"id": ref_id(data), "path": getattr(data, "path", None)}
        if not data.get("id") and data.get("path"):
            return {**data, "id": ref_id(data["path"])}
        return data


class MatchResult(BaseModel):
    """A recorded match result as stored in the `results` collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    game_id: Optional[str] = Field(None, alias="gameId")
    home_team_id: Optional[str] = Field(None, alias="homeTeamId")
    away_team_id: Optional[str] = Field(None, alias="awayTeamId")
    home_team_ref: Optional[TeamRef] = Field(None, alias="homeTeamRef")
    away_team_ref: Optional[TeamRef] = Field(None, alias="awayTeamRef")

    home_score: Optional[int] = Field(None, alias="homeScore")
    away_score: Optional[int] = Field(None, alias="awayScore")
    home_points: Optional[int] = Field(None, alias="homePoints")
    away_points: Optional[int] = Field(None, alias="awayPoints")

    home_yellow_cards: Optional[int] = Field(None, alias="homeYellowCards")
    away_yellow_cards: Optional[int] = Field(None, alias="awayYellowCards")
    home_red_cards: Optional[int] = Field(None, alias="homeRedCards")
    away_red_cards: Optional[int] = Field(None, alias="awayRedCards")

    @property
    def has_card_data(self) -> bool:
        """True if the source recorded any card count for this match."""
        return any(
            value is not None
            for value in (
                self.home_yellow_cards,
                self.away_yellow_cards,
                self.home_red_cards,
                self.away_red_cards,
            )
        )


class NormalizedResult(BaseModel):
    """A match result with resolved participants and derived points."""

    model_config = ConfigDict(frozen=True)

    home_id: str
    away_id: str
    home_score: int = 0
    away_score: int = 0
    home_points: int = 0
    away_points: int = 0
    home_yellow: int = 0
    home_red: int = 0
    away_yellow: int = 0
    away_red: int = 0
    game_id: Optional[str] = None
    has_card_data: bool = False
