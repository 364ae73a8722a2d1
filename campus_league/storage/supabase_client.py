# campus_league/storage/supabase_client.py
from typing import Any, Dict, List, Optional, Sequence

import httpx
from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from campus_league.config.settings import settings
from campus_league.models.snapshot import LeagueSnapshot
from campus_league.storage.snapshot_loader import SnapshotFetchError, parse_snapshot

CORE_TABLES = ("teams", "groups", "results")

# Module-level storage for the async client instance
_async_supabase_client: Optional[AsyncClient] = None


async def initialize_supabase() -> Optional[AsyncClient]:
    """Initializes the global ASYNC Supabase client and returns it."""
    global _async_supabase_client
    if _async_supabase_client:
        logger.debug("Async Supabase client already initialized.")
        return _async_supabase_client

    if not settings.supabase_url or not settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        return None

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
    )
    try:
        client: AsyncClient = await create_async_client(
            settings.supabase_url, settings.supabase_key
        )
        _async_supabase_client = client
        logger.success("Async Supabase client initialized successfully.")
        return client
    except Exception as e:
        logger.exception(f"Failed to initialize Async Supabase client: {e}")
        return None


async def _fetch_table(client: AsyncClient, table_name: str) -> List[Dict[str, Any]]:
    """Reads every row of one table, retrying transient transport errors."""
    retrying = AsyncRetrying(
        stop=stop_after_attempt(settings.fetch_retry_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.RequestError, httpx.HTTPStatusError)),
        reraise=False,
    )
    try:
        async for attempt in retrying:
            with attempt:
                response: APIResponse = (
                    await client.table(table_name).select("*").execute()
                )
    except RetryError as e:
        raise SnapshotFetchError(
            f"Giving up on table {table_name} after {settings.fetch_retry_attempts} attempts"
        ) from e
    except APIError as e:
        raise SnapshotFetchError(
            f"Supabase API error reading {table_name}: {e.message}"
        ) from e

    rows = response.data or []
    logger.debug(f"Fetched {len(rows)} rows from {table_name}.")
    return rows


async def fetch_snapshot(
    client: AsyncClient, goal_tables: Optional[Sequence[str]] = None
) -> LeagueSnapshot:
    """Reads the league tables into one LeagueSnapshot.

    Raises SnapshotFetchError if any table cannot be read.
    """
    goal_table_names = list(goal_tables or settings.goal_tables)
    raw: Dict[str, List[Dict[str, Any]]] = {}
    for table_name in (*CORE_TABLES, *goal_table_names):
        raw[table_name] = await _fetch_table(client, table_name)

    logger.info(
        "Fetched snapshot from Supabase: "
        + ", ".join(f"{name}={len(rows)}" for name, rows in raw.items())
    )
    return parse_snapshot(raw, goal_tables=goal_table_names)
