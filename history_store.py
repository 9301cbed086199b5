# history_store.py
"""
Append-only log of every submitted query.

Entries are written once (successes, driver errors and policy denials alike),
read back newest first, and only ever removed all at once by `clear_all`.
All values are bound as named parameters; the table name is the only thing
formatted into SQL and it is checked to be a plain identifier.
"""

import re
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

import config
from db import Database
from errors import HistoryStoreError
from models import HistoryEntry

LOG = logging.getLogger(__name__)

# table, schema.table or catalog.schema.table
TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*){0,2}$")

COLUMNS = "id, query, execution_time, error, created_at"


def sanitize_table_name(name: str) -> str:
    if not name:
        raise ValueError("empty table name")
    if not TABLE_RE.match(name):
        raise ValueError(f"invalid table name: {name}")
    return name


class HistoryStore:
    def __init__(self, database: Database, table: str = config.HISTORY_TABLE):
        self.database = database
        self.table = sanitize_table_name(table)

    def create_table(self) -> None:
        """Create the history table if it does not exist yet."""
        with self._cursor(commit=True) as cur:
            cur.execute(self.database.history_ddl.format(table=self.table))
        LOG.info("history table %s ready on %s", self.table, self.database.name)

    def append(self, query: str, elapsed_ms: float, error: Optional[str] = None) -> int:
        params = {
            "query": query,
            "execution_time": float(elapsed_ms),
            "error": error,
            "created_at": datetime.now(timezone.utc).replace(tzinfo=None),
        }
        with self._cursor(commit=True) as cur:
            cur.execute(
                f"INSERT INTO {self.table} (query, execution_time, error, created_at) "
                "VALUES (:query, :execution_time, :error, :created_at)",
                params,
            )
            entry_id = getattr(cur, "lastrowid", None)
            if entry_id is None:
                # driver does not report generated keys
                cur.execute(f"SELECT MAX(id) FROM {self.table}")
                entry_id = cur.fetchone()[0]
        return int(entry_id)

    def recent(self, limit: int = config.HISTORY_DISPLAY_LIMIT) -> List[HistoryEntry]:
        limit = int(limit)
        if limit <= 0:
            return []
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {COLUMNS} FROM {self.table} ORDER BY id DESC LIMIT :limit",
                {"limit": limit},
            )
            rows = cur.fetchall()
        return [
            HistoryEntry(
                id=int(r[0]),
                query=r[1],
                execution_time=float(r[2] or 0),
                error=r[3],
                created_at=r[4],
            )
            for r in rows
        ]

    def clear_all(self) -> None:
        with self._cursor(commit=True) as cur:
            cur.execute(f"DELETE FROM {self.table}")
        LOG.info("history table %s cleared", self.table)

    @contextmanager
    def _cursor(self, commit: bool = False):
        driver = self.database.driver
        try:
            conn = self.database.connect()
        except driver.Error as e:
            LOG.exception("could not connect to %s for history", self.database.name)
            raise HistoryStoreError(str(e)) from e
        try:
            cur = conn.cursor()
            try:
                yield cur
                if commit:
                    conn.commit()
            finally:
                cur.close()
        except driver.Error as e:
            LOG.exception("history table %s failed", self.table)
            raise HistoryStoreError(str(e)) from e
        finally:
            conn.close()
