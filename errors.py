"""
Exception hierarchy for the SQL debugger.

Policy denials and driver errors are user-facing results, not exceptions.
Only failures that leave the app without a usable database are raised.
"""


class SqlDebuggerError(Exception):
    """Base exception for all SQL debugger errors."""


class DatabaseUnavailable(SqlDebuggerError):
    """Connection-level failure talking to the target database."""


class HistoryStoreError(DatabaseUnavailable):
    """The history log could not be read or written."""
