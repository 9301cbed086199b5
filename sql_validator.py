# sql_validator.py
# Textual allow-list gate for operator-submitted SQL. Not a parser: anything
# ambiguous is rejected, even when it would be legal SQL.
import re
import logging

from models import ValidationVerdict, READ, WRITE

LOG = logging.getLogger(__name__)

# Only single statements starting with these verbs
ALLOWED_VERB = re.compile(r"^(select|insert|update|delete)\b", re.IGNORECASE)

# Block dangerous keywords anywhere in the text
BAD_KEYWORDS = re.compile(
    r"\b(drop|alter|truncate|rename|create|grant|revoke)\b", re.IGNORECASE
)

# Block inline comments
COMMENT_MARKERS = re.compile(r"(--|#|/\*)")

DENY_VERB = "only SELECT/INSERT/UPDATE/DELETE allowed"
DENY_DANGEROUS = "dangerous statement"
DENY_MULTIPLE = "multiple statements not allowed"
DENY_COMMENTS = "inline comments not allowed"


def validate(sql: str) -> ValidationVerdict:
    q = (sql or "").lstrip()

    m = ALLOWED_VERB.match(q)
    if not m:
        return _deny(DENY_VERB)
    if BAD_KEYWORDS.search(q):
        return _deny(DENY_DANGEROUS)
    if ";" in q:
        return _deny(DENY_MULTIPLE)
    if COMMENT_MARKERS.search(q):
        return _deny(DENY_COMMENTS)

    mode = READ if m.group(1).lower() == "select" else WRITE
    return ValidationVerdict.allow(mode)


def _deny(reason: str) -> ValidationVerdict:
    LOG.info("query rejected: %s", reason)
    return ValidationVerdict.deny(reason)
