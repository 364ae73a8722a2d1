"""Tests for the command-line entry point."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from main import main, parse_args

SNAPSHOT = {
    "teams": [
        {"id": "a", "name": "Alpha"},
        {"id": "b", "name": "Bravo"},
        {"id": "c", "name": "Charlie"},
    ],
    "groups": [
        {"id": "g1", "name": "Group 1", "teamIds": ["a", "b"], "description": "Morning pitch"},
        {"id": "g2", "name": "Group 2", "teamIds": ["c"]},
    ],
    "results": [
        {"homeTeamId": "a", "awayTeamId": "b", "homeScore": 2, "awayScore": 0},
        {"homeTeamId": "c", "awayTeamId": "a", "homeScore": 1, "awayScore": 1},
    ],
    "goals": [
        {"gameId": "m1", "teamSide": "home", "scorerId": "p1", "scorerName": "Ana"},
        {"gameId": "m1", "teamSide": "home", "scorerId": "p1", "scorerName": "Ana"},
    ],
}


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


class TestParseArgs:
    def test_ungrouped_can_be_switched_either_way(self) -> None:
        assert parse_args(["--ungrouped"]).ungrouped is True
        assert parse_args(["--no-ungrouped"]).ungrouped is False


class TestMain:
    def test_prints_standings_and_scorers(
        self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert asyncio.run(main([str(snapshot_file)])) == 0
        out = capsys.readouterr().out
        assert "Overall Standings" in out
        assert "Group 1" in out
        assert "Morning pitch" in out
        assert "Alpha" in out
        assert "Top Scorers" in out
        assert "Ana" in out

    def test_ungrouped_table_on_request(
        self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert asyncio.run(main([str(snapshot_file), "--ungrouped"])) == 0
        assert "Ungrouped Matches" in capsys.readouterr().out

    def test_team_report(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert asyncio.run(main([str(snapshot_file), "--team", "a"])) == 0
        out = capsys.readouterr().out
        assert "Alpha" in out
        assert "Win rate 50%" in out
        assert "vs Bravo" in out
        assert "@ Charlie" in out

    def test_unknown_team_exits_with_error(self, snapshot_file: Path) -> None:
        assert asyncio.run(main([str(snapshot_file), "--team", "nobody"])) == 1

    def test_unreadable_snapshot_exits_with_error(self, tmp_path: Path) -> None:
        assert asyncio.run(main([str(tmp_path / "missing.json")])) == 1
