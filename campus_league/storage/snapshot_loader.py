# campus_league/storage/snapshot_loader.py
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from campus_league.config.settings import settings
from campus_league.models.goal import GoalEvent
from campus_league.models.result import MatchResult
from campus_league.models.snapshot import LeagueSnapshot
from campus_league.models.team import Group, Team

M = TypeVar("M", bound=BaseModel)


class SnapshotError(Exception):
    """Custom exception for failures reading a league snapshot."""

    pass


class SnapshotFileError(SnapshotError):
    """Raised when a snapshot file is missing or is not valid JSON."""

    pass


class SnapshotFetchError(SnapshotError):
    """Raised when the league tables cannot be read from Supabase."""

    pass


def _parse_records(
    model: Type[M], records: Optional[Iterable[Any]], table_name: str
) -> List[M]:
    """Validates raw records, logging and skipping the ones that do not fit."""
    parsed: List[M] = []
    for index, record in enumerate(records or []):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(
                f"Skipping invalid {table_name} record #{index}: {e.error_count()} error(s)"
            )
            logger.debug(f"Validation details for {table_name} #{index}: {e}")
    return parsed


def parse_snapshot(
    raw: Mapping[str, Any], goal_tables: Optional[Sequence[str]] = None
) -> LeagueSnapshot:
    """Builds a LeagueSnapshot from raw table rows keyed by table name.

    Goal events are read from every table in `goal_tables`, plus any other key
    ending in ``goals``, each kept as its own source.
    """
    goal_table_names = list(goal_tables or settings.goal_tables)
    for key in raw:
        if key.endswith("goals") and key not in goal_table_names:
            goal_table_names.append(key)

    goal_sources: Dict[str, List[GoalEvent]] = {
        name: _parse_records(GoalEvent, raw.get(name), name)
        for name in goal_table_names
        if name in raw
    }
    snapshot = LeagueSnapshot(
        teams=_parse_records(Team, raw.get("teams"), "teams"),
        groups=_parse_records(Group, raw.get("groups"), "groups"),
        results=_parse_records(MatchResult, raw.get("results"), "results"),
        goal_sources=goal_sources,
    )
    logger.debug(
        f"Snapshot parsed: {len(snapshot.teams)} teams, {len(snapshot.groups)} groups, "
        f"{len(snapshot.results)} results, goal sources {list(goal_sources)}"
    )
    return snapshot


def load_snapshot_file(path: Path | str) -> LeagueSnapshot:
    """Reads a JSON snapshot file (an object of table name -> list of rows)."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise SnapshotFileError(f"Could not read snapshot file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotFileError(f"Snapshot file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise SnapshotFileError(
            f"Snapshot file {path} must contain a JSON object, got {type(raw).__name__}"
        )
    logger.info(f"Loaded snapshot file {path}")
    return parse_snapshot(raw)
