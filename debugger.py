# debugger.py
"""
One submission from the admin page: validate, execute, log, read back.

Every non-empty submission is written to the history log, including the
ones the validator rejects and the ones the driver fails.
"""

import logging
from typing import List, Optional

import config
import sql_validator
from history_store import HistoryStore
from models import QueryRequest, SubmissionResult, HistoryEntry
from query_executor import QueryExecutor

LOG = logging.getLogger(__name__)


class SqlDebugger:
    def __init__(self, executor: QueryExecutor, store: HistoryStore, validate=sql_validator.validate):
        self.executor = executor
        self.store = store
        self.validate = validate

    def submit(self, raw: Optional[str], clear_history: bool = False) -> SubmissionResult:
        request = QueryRequest(raw or "", clear_history=clear_history)
        if request.clear_history:
            self.store.clear_all()

        result = SubmissionResult(query=request.raw)
        if request.raw:
            result.verdict = self.validate(request.raw)
            elapsed_ms = 0.0
            if result.verdict.allowed:
                result.outcome = self.executor.execute(request.raw, result.verdict)
                elapsed_ms = result.outcome.elapsed_ms
            # logged even when validation failed, with the reason as the error
            self.store.append(request.raw, elapsed_ms, result.error)

        result.history = self.history()
        return result

    def history(self, limit: int = config.HISTORY_DISPLAY_LIMIT) -> List[HistoryEntry]:
        return self.store.recent(limit)

    def clear_history(self) -> None:
        self.store.clear_all()
