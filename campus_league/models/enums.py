from enum import Enum


class TeamSide(str, Enum):
    HOME = "home"
    AWAY = "away"


class ScopeKind(str, Enum):
    OVERALL = "overall"
    GROUP = "group"
    UNGROUPED = "ungrouped"


class TiebreakKey(str, Enum):
    POINTS = "points"  # higher first
    GOAL_DIFFERENCE = "goal_difference"  # higher first
    GOALS_FOR = "goals_for"  # higher first
    FAIR_PLAY = "fair_play"  # lower first


class MatchOutcome(str, Enum):
    WIN = "W"
    DRAW = "D"
    LOSS = "L"
