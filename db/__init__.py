"""
Database handles for the SQL debugger.

A `Database` bundles what the executor and the history store need from a
backend: a factory returning a fresh DB-API connection, the driver module
(for its PEP 249 exception classes) and the history-table DDL in the
backend's dialect. Nothing here holds a connection open between calls.
"""

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Optional

import config


@dataclass
class Database:
    name: str
    connect: Callable[[], Any]
    driver: ModuleType
    history_ddl: str


def get_database(backend: Optional[str] = None) -> Database:
    """Build the `Database` for `backend` (defaults to config.DB_BACKEND)."""
    backend = (backend or config.DB_BACKEND).lower()
    if backend == "sqlite":
        from db.sqlite_client import sqlite_database
        return sqlite_database()
    if backend == "databricks":
        from db.databricks_client import databricks_database
        return databricks_database()
    raise ValueError(f"unknown database backend: {backend}")
