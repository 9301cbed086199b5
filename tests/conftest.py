"""Shared fixtures: a seeded SQLite application database and the app around it."""

import pytest

import config
from db import Database
from db.sqlite_client import sqlite_database
from debugger import SqlDebugger
from history_store import HistoryStore
from main import create_app
from query_executor import QueryExecutor

USER_COUNT = 250

SEED = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE
);
CREATE TABLE posts (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    created_at TEXT
);
INSERT INTO posts (id, title) VALUES (1, 'hello'), (2, 'world'), (3, 'again');
"""


@pytest.fixture
def database(tmp_path) -> Database:
    db = sqlite_database(str(tmp_path / "app.db"), timeout=30)
    conn = db.connect()
    conn.executescript(SEED)
    conn.executemany(
        "INSERT INTO users (id, name, email) VALUES (?, ?, ?)",
        [(i, f"user{i}", f"user{i}@example.com") for i in range(1, USER_COUNT + 1)],
    )
    conn.commit()
    conn.close()
    return db


@pytest.fixture
def statements(database):
    """Every statement the executor's connections run, in order."""
    seen = []
    connect = database.connect

    def traced_connect():
        conn = connect()
        conn.set_trace_callback(seen.append)
        return conn

    database.connect = traced_connect
    return seen


@pytest.fixture
def store(database) -> HistoryStore:
    s = HistoryStore(database, "sql_debugger_history")
    s.create_table()
    return s


@pytest.fixture
def executor(database) -> QueryExecutor:
    return QueryExecutor(database)


@pytest.fixture
def debugger(executor, store) -> SqlDebugger:
    return SqlDebugger(executor, store)


@pytest.fixture
def app(database, monkeypatch):
    monkeypatch.setattr(config, "ADMIN_TOKEN", "")
    app = create_app(database)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
