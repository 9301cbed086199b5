# query_executor.py
"""
Runs validated SQL against the target database.

SQL-level failures reported by the driver (syntax errors, constraint
violations, unknown tables) come back as `ExecutionOutcome.error`. Only
connection-level failures raise, as `DatabaseUnavailable`.
"""

import re
import time
import logging
from typing import List

import config
from db import Database
from errors import DatabaseUnavailable
from models import ExecutionOutcome, ValidationVerdict, Row, READ

LOG = logging.getLogger(__name__)

LIMIT_CLAUSE = re.compile(r"\blimit\s+\d+", re.IGNORECASE)


def apply_row_cap(sql: str, cap: int = config.MAX_ROWS_RETURN) -> str:
    """Append `LIMIT cap` unless the query already carries a LIMIT clause."""
    if LIMIT_CLAUSE.search(sql):
        return sql
    return f"{sql.rstrip()} LIMIT {cap}"


class QueryExecutor:
    def __init__(self, database: Database, row_cap: int = config.MAX_ROWS_RETURN):
        self.database = database
        self.row_cap = row_cap

    def execute(self, sql: str, verdict: ValidationVerdict) -> ExecutionOutcome:
        if not verdict.allowed:
            raise ValueError("refusing to execute a query the validator denied")

        driver = self.database.driver
        outcome = ExecutionOutcome()
        start = time.perf_counter()
        conn = self._connect()
        try:
            cur = conn.cursor()
            try:
                if verdict.mode == READ:
                    outcome.rows = self._run_read(cur, apply_row_cap(sql, self.row_cap))
                else:
                    outcome.rows_affected = self._run_write(conn, cur, sql)
            finally:
                cur.close()
        except driver.InterfaceError as e:
            LOG.exception("lost connection to %s", self.database.name)
            raise DatabaseUnavailable(str(e)) from e
        except driver.DatabaseError as e:
            LOG.warning("query failed on %s: %s", self.database.name, e)
            outcome.rows = None
            outcome.rows_affected = None
            outcome.error = str(e) or e.__class__.__name__
        finally:
            conn.close()
            outcome.elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        return outcome

    def _connect(self):
        driver = self.database.driver
        try:
            return self.database.connect()
        except driver.Error as e:
            LOG.exception("could not connect to %s", self.database.name)
            raise DatabaseUnavailable(str(e)) from e

    def _run_read(self, cur, sql: str) -> List[Row]:
        LOG.debug("running read: %s", sql)
        cur.execute(sql)
        if not cur.description:
            return []
        cols = [c[0] for c in cur.description]
        return [dict(zip(cols, r)) for r in cur.fetchall()]

    def _run_write(self, conn, cur, sql: str) -> int:
        LOG.debug("running write: %s", sql)
        cur.execute(sql)
        count = cur.rowcount
        if cur.description:
            first_col = cur.description[0][0]
            # drained before commit; sqlite refuses to commit with a pending RETURNING
            returned = cur.fetchall()
            if first_col == "num_affected_rows":
                # databricks reports DML counts as a one-row result
                count = returned[0][0] if returned else 0
            else:
                # RETURNING yields one row per affected row
                count = len(returned)
        conn.commit()
        return max(int(count or 0), 0)
