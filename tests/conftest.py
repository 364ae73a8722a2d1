"""Shared fixtures for the standings and leaderboard tests."""

from __future__ import annotations

from typing import Any

import pytest

from campus_league.models.goal import GoalEvent
from campus_league.models.result import MatchResult
from campus_league.models.snapshot import LeagueSnapshot
from campus_league.models.team import Group, Team


def make_result(home: str, away: str, home_score: int, away_score: int, **extra: Any) -> MatchResult:
    return MatchResult.model_validate(
        {
            "homeTeamId": home,
            "awayTeamId": away,
            "homeScore": home_score,
            "awayScore": away_score,
            **extra,
        }
    )


def make_goal(scorer_id: str | None, scorer_name: str | None, **extra: Any) -> GoalEvent:
    return GoalEvent.model_validate(
        {"gameId": "g1", "teamSide": "home", "scorerId": scorer_id, "scorerName": scorer_name, **extra}
    )


@pytest.fixture
def teams() -> list[Team]:
    return [
        Team(id="a", name="Alpha"),
        Team(id="b", name="Bravo"),
        Team(id="c", name="Charlie"),
        Team(id="d", name="Delta"),
    ]


@pytest.fixture
def scenario_results() -> list[MatchResult]:
    """A beats B 2-1, A draws C 1-1, C beats B 3-0."""
    return [
        make_result("a", "b", 2, 1),
        make_result("a", "c", 1, 1),
        make_result("b", "c", 0, 3),
    ]


@pytest.fixture
def scenario_snapshot(teams: list[Team], scenario_results: list[MatchResult]) -> LeagueSnapshot:
    return LeagueSnapshot(
        teams=teams[:3],
        groups=[Group(id="g1", name="Group 1", team_ids=["a", "b", "c"])],
        results=scenario_results,
    )


@pytest.fixture
def two_group_snapshot(teams: list[Team]) -> LeagueSnapshot:
    return LeagueSnapshot(
        teams=teams,
        groups=[
            Group(id="g1", name="Group 1", team_ids=["a", "b"]),
            Group(id="g2", name="Group 2", team_ids=["c", "d"]),
        ],
        results=[
            make_result("a", "b", 1, 0),
            make_result("c", "d", 2, 2),
            make_result("a", "c", 4, 1),  # cross-group
        ],
    )
