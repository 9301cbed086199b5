# models.py
# simple containers passed between validator, executor, history store and the app
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Any, Dict, Optional

READ = "read"
WRITE = "write"

Row = Dict[str, Any]


@dataclass
class QueryRequest:
    raw: str
    clear_history: bool = False

    def __post_init__(self):
        self.raw = (self.raw or "").strip()


@dataclass
class ValidationVerdict:
    allowed: bool
    mode: Optional[str] = None      # READ or WRITE when allowed
    reason: Optional[str] = None    # denial reason when not allowed

    @classmethod
    def allow(cls, mode: str) -> "ValidationVerdict":
        return cls(allowed=True, mode=mode)

    @classmethod
    def deny(cls, reason: str) -> "ValidationVerdict":
        return cls(allowed=False, reason=reason)


@dataclass
class ExecutionOutcome:
    elapsed_ms: float = 0.0
    rows: Optional[List[Row]] = None
    rows_affected: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class HistoryEntry:
    id: int
    query: str
    execution_time: float
    error: Optional[str]
    created_at: Any

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if isinstance(self.created_at, datetime):
            d["created_at"] = self.created_at.isoformat(sep=" ", timespec="seconds")
        return d


@dataclass
class SubmissionResult:
    query: str = ""
    verdict: Optional[ValidationVerdict] = None
    outcome: Optional[ExecutionOutcome] = None
    history: List[HistoryEntry] = field(default_factory=list)

    @property
    def error(self) -> Optional[str]:
        if self.verdict is not None and not self.verdict.allowed:
            return self.verdict.reason
        if self.outcome is not None:
            return self.outcome.error
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "allowed": self.verdict.allowed if self.verdict else None,
            "mode": self.verdict.mode if self.verdict else None,
            "error": self.error,
            "elapsed_ms": self.outcome.elapsed_ms if self.outcome else 0.0,
            "rows": _json_rows(self.outcome.rows) if self.outcome else None,
            "rows_affected": self.outcome.rows_affected if self.outcome else None,
            "history": [h.to_dict() for h in self.history],
        }


def _json_value(value: Any) -> Any:
    # BLOB columns come back as bytes; JSON carries them as hex
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


def _json_rows(rows: Optional[List[Row]]) -> Optional[List[Row]]:
    if rows is None:
        return None
    return [{k: _json_value(v) for k, v in row.items()} for row in rows]
