# db/sqlite_client.py
import sqlite3
from datetime import datetime
from typing import Optional

from config import SQLITE_PATH, QUERY_TIMEOUT
from db import Database

# created_at is written by the history store as a datetime
sqlite3.register_adapter(datetime, lambda d: d.isoformat(sep=" ", timespec="seconds"))

HISTORY_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    query TEXT NOT NULL,
    execution_time REAL DEFAULT 0,
    error TEXT DEFAULT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def sqlite_database(path: Optional[str] = None, timeout=QUERY_TIMEOUT):
    path = path or SQLITE_PATH

    def connect():
        return sqlite3.connect(path, timeout=timeout)

    return Database(name="sqlite", connect=connect, driver=sqlite3, history_ddl=HISTORY_DDL)
