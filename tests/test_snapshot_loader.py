from __future__ import annotations

import json
from pathlib import Path

import pytest

from campus_league.calculation.leaderboard import build_leaderboard
from campus_league.calculation.standings import compute_standings
from campus_league.config.settings import AppSettings, load_settings
from campus_league.storage.snapshot_loader import (
    SnapshotFileError,
    load_snapshot_file,
    parse_snapshot,
)

RAW_SNAPSHOT = {
    "teams": [
        {"id": "a", "name": "Alpha", "collegeName": "North College", "logoUrl": "https://img/a.png"},
        {"id": "b", "name": "Bravo"},
        {"name": "No id"},
    ],
    "groups": [{"id": "g1", "name": "Group 1", "teamIds": ["a", "b"], "description": None}],
    "results": [
        {"homeTeamRef": {"path": "teams/a"}, "awayTeamId": "b", "homeScore": 2, "awayScore": 1},
        {"homeTeamId": "a", "awayTeamId": "b", "homeScore": "two"},
    ],
    "goals": [
        {"gameId": "m1", "teamSide": "home", "scorerId": "p1", "scorerName": "Ana"},
        {"gameId": "m1", "teamSide": "home", "scorerId": "p1", "scorerName": "Ana"},
    ],
    "unique_goals": [{"gameId": "u1", "teamSide": "away", "scorerId": "p2", "scorerName": "Ben"}],
    "live_goals": [{"gameId": "m2", "teamSide": "sideways", "scorerId": "p3", "scorerName": "Cleo"}],
}


class TestParseSnapshot:
    def test_valid_records_are_parsed(self) -> None:
        snapshot = parse_snapshot(RAW_SNAPSHOT)
        assert [t.id for t in snapshot.teams] == ["a", "b"]
        assert snapshot.teams[0].college_name == "North College"
        assert snapshot.groups[0].team_ids == ["a", "b"]
        assert len(snapshot.results) == 1
        assert snapshot.results[0].home_team_ref is not None
        assert snapshot.results[0].home_team_ref.id == "a"

    def test_goal_sources_kept_separately(self) -> None:
        snapshot = parse_snapshot(RAW_SNAPSHOT)
        assert set(snapshot.goal_sources) == {"goals", "unique_goals", "live_goals"}
        assert len(snapshot.goal_sources["goals"]) == 2
        # Invalid team side is skipped, not fatal
        assert snapshot.goal_sources["live_goals"] == []

    def test_parsed_snapshot_feeds_the_engines(self) -> None:
        snapshot = parse_snapshot(RAW_SNAPSHOT)
        overall = compute_standings(snapshot)[0].as_rows()
        assert [(r["teamId"], r["points"]) for r in overall] == [("a", 3), ("b", 0)]
        leaderboard = build_leaderboard(*snapshot.goal_events)
        assert [(e.rank, e.scorer_id, e.goals) for e in leaderboard.entries] == [
            (1, "p1", 2),
            (2, "p2", 1),
        ]

    def test_missing_tables(self) -> None:
        snapshot = parse_snapshot({})
        assert snapshot.teams == []
        assert snapshot.goal_sources == {}


class TestLoadSnapshotFile:
    def test_round_trip_from_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(RAW_SNAPSHOT), encoding="utf-8")
        snapshot = load_snapshot_file(path)
        assert len(snapshot.teams) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotFileError):
            load_snapshot_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotFileError, match="not valid JSON"):
            load_snapshot_file(path)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SnapshotFileError, match="JSON object"):
            load_snapshot_file(path)


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.fair_play_tiebreak == "auto"
        assert (settings.yellow_card_weight, settings.red_card_weight) == (1, 3)
        assert settings.leaderboard_size == 3
        assert settings.goal_tables == ["goals", "unique_goals"]

    def test_invalid_log_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert load_settings().log_level == "INFO"

    def test_log_level_is_upper_cased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"
