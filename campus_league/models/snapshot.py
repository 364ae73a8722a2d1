from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from .goal import GoalEvent
from .result import MatchResult
from .team import Group, Team


class LeagueSnapshot(BaseModel):
    """One materialized read of the league's records.

    `goal_sources` keeps each goal-event stream (regular fixtures, cross-group
    fixtures, ...) under its source name; the leaderboard merges them.
    """

    model_config = ConfigDict(frozen=True)

    teams: List[Team] = []
    groups: List[Group] = []
    results: List[MatchResult] = []
    goal_sources: Dict[str, List[GoalEvent]] = {}

    @property
    def goal_events(self) -> List[List[GoalEvent]]:
        return [self.goal_sources[name] for name in sorted(self.goal_sources)]
