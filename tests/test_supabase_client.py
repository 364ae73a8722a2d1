"""Tests for reading a league snapshot through a Supabase-style client."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from postgrest.exceptions import APIError

from campus_league.config.settings import settings
from campus_league.storage.snapshot_loader import SnapshotFetchError
from campus_league.storage.supabase_client import fetch_snapshot

TABLES: dict[str, list[dict[str, Any]]] = {
    "teams": [{"id": "a", "name": "Alpha"}, {"id": "b", "name": "Bravo"}],
    "groups": [{"id": "g1", "name": "Group 1", "teamIds": ["a", "b"]}],
    "results": [{"homeTeamId": "a", "awayTeamId": "b", "homeScore": 3, "awayScore": 1}],
    "goals": [{"gameId": "m1", "teamSide": "home", "scorerId": "p1", "scorerName": "Ana"}],
    "unique_goals": [],
}


class FakeQuery:
    def __init__(self, table_name: str, failure: BaseException | None) -> None:
        self.table_name = table_name
        self.failure = failure

    def select(self, columns: str) -> "FakeQuery":
        assert columns == "*"
        return self

    async def execute(self) -> SimpleNamespace:
        if self.failure is not None:
            raise self.failure
        return SimpleNamespace(data=TABLES.get(self.table_name, []))


class FakeClient:
    """Answers `table(name).select("*").execute()` from TABLES, or raises."""

    def __init__(self, failure: BaseException | None = None) -> None:
        self.failure = failure
        self.calls: list[str] = []

    def table(self, table_name: str) -> FakeQuery:
        self.calls.append(table_name)
        return FakeQuery(table_name, self.failure)


@pytest.fixture
def single_attempt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "fetch_retry_attempts", 1)


class TestFetchSnapshot:
    def test_reads_every_table_into_a_snapshot(self) -> None:
        client = FakeClient()
        snapshot = asyncio.run(fetch_snapshot(client, goal_tables=["goals", "unique_goals"]))
        assert client.calls == ["teams", "groups", "results", "goals", "unique_goals"]
        assert [t.id for t in snapshot.teams] == ["a", "b"]
        assert snapshot.groups[0].team_ids == ["a", "b"]
        assert snapshot.results[0].home_score == 3
        assert set(snapshot.goal_sources) == {"goals", "unique_goals"}
        assert snapshot.goal_sources["goals"][0].scorer_name == "Ana"

    def test_api_error_becomes_fetch_error(self, single_attempt: None) -> None:
        client = FakeClient(APIError({"message": "boom"}))
        with pytest.raises(SnapshotFetchError, match="boom"):
            asyncio.run(fetch_snapshot(client))
        assert client.calls == ["teams"]

    def test_transport_error_gives_up_after_retries(self, single_attempt: None) -> None:
        client = FakeClient(httpx.ConnectError("connection refused"))
        with pytest.raises(SnapshotFetchError, match="Giving up on table teams"):
            asyncio.run(fetch_snapshot(client))
