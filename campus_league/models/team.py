# campus_league/models/team.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Team(BaseModel):
    """A team as stored in the league's `teams` collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    college_name: Optional[str] = Field(None, alias="collegeName")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class Group(BaseModel):
    """A group and its roster of team ids."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    team_ids: List[str] = Field(default_factory=list, alias="teamIds")
    description: Optional[str] = None

    @field_validator("team_ids", mode="before")
    @classmethod
    def _missing_roster_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value
