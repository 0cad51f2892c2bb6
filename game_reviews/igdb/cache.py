"""
Caches for raw IGDB responses.

Entries are keyed by (IGDB id, endpoint) and hold the JSON object returned by
the API, so the cache does not depend on the model classes.
"""

import json
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..database.models import create_database
from ..error_handling import handle_errors

logger = logging.getLogger(__name__)


class NoOpCache:
    """Cache that never stores anything, for debugging the API."""

    def get(self, igdb_id: int, endpoint: str) -> Optional[dict]:
        return None

    def get_many(self, endpoint: str, ids: Iterable[int]) -> Dict[int, dict]:
        return {}

    def set(self, igdb_id: int, endpoint: str, value: dict) -> None:
        pass

    def set_many(self, endpoint: str, values: List[Tuple[int, dict]]) -> None:
        pass


class SqliteCache(NoOpCache):
    """
    Cache stored in the ``igdb_cache`` table of the reviews database.
    """

    def __init__(self, db_path: Path):
        """
        Args:
            db_path: Path to the SQLite database; the table is created if missing
        """
        self.db_path = Path(db_path)
        create_database(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def get(self, igdb_id: int, endpoint: str) -> Optional[dict]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT value FROM igdb_cache WHERE igdb_id = ? AND endpoint = ?",
                (igdb_id, endpoint),
            ).fetchone()

        if row is None:
            logger.debug(f"cache miss for ({endpoint}, {igdb_id})")
            return None
        return json.loads(row[0])

    def get_many(self, endpoint: str, ids: Iterable[int]) -> Dict[int, dict]:
        result = {}
        for igdb_id in ids:
            value = self.get(igdb_id, endpoint)
            if value is not None:
                result[igdb_id] = value
        return result

    @handle_errors(log_error=True)
    def set(self, igdb_id: int, endpoint: str, value: dict) -> None:
        with closing(self._connect()) as conn:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO igdb_cache (igdb_id, endpoint, value) VALUES (?, ?, ?)",
                    (igdb_id, endpoint, json.dumps(value)),
                )
        logger.debug(f"set cache for ({endpoint}, {igdb_id})")

    def set_many(self, endpoint: str, values: List[Tuple[int, dict]]) -> None:
        for igdb_id, value in values:
            self.set(igdb_id, endpoint, value)
