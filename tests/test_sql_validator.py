"""
Tests for the SQL allow-list gate.

The gate works on text alone. Over-rejection of legal SQL is expected and
asserted here; nothing dangerous may get through.
"""

import pytest

from models import READ, WRITE
from sql_validator import (
    DENY_COMMENTS,
    DENY_DANGEROUS,
    DENY_MULTIPLE,
    DENY_VERB,
    validate,
)

VERBS = ["SELECT", "INSERT", "UPDATE", "DELETE"]
DANGEROUS = ["DROP", "ALTER", "TRUNCATE", "RENAME", "CREATE", "GRANT", "REVOKE"]


class TestLeadingVerb:
    @pytest.mark.parametrize("sql", [
        "SELECT * FROM users",
        "select id from users",
        "   \n\tSeLeCt 1",
        "SELECT created_at FROM posts",
        "SELECT dropped FROM t",
    ])
    def test_select_is_read(self, sql):
        verdict = validate(sql)
        assert verdict.allowed
        assert verdict.mode == READ
        assert verdict.reason is None

    @pytest.mark.parametrize("sql", [
        "INSERT INTO posts (title) VALUES ('x')",
        "update posts SET title='x' WHERE id=1",
        "Delete FROM posts WHERE id = 3",
    ])
    def test_mutations_are_write(self, sql):
        verdict = validate(sql)
        assert verdict.allowed
        assert verdict.mode == WRITE

    @pytest.mark.parametrize("sql", [
        "",
        "   ",
        "SHOW TABLES",
        "EXPLAIN SELECT 1",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "REPLACE INTO posts VALUES (1, 'x', NULL)",
        "SELECTX * FROM users",
        "(SELECT 1)",
        "PRAGMA table_info(users)",
    ])
    def test_other_leading_words_denied(self, sql):
        verdict = validate(sql)
        assert not verdict.allowed
        assert verdict.reason == DENY_VERB
        assert verdict.mode is None

    def test_none_is_denied(self):
        assert validate(None).reason == DENY_VERB


class TestDangerousKeywords:
    @pytest.mark.parametrize("verb", VERBS)
    @pytest.mark.parametrize("keyword", DANGEROUS)
    def test_denied_regardless_of_verb(self, verb, keyword):
        verdict = validate(f"{verb} x FROM t WHERE a = {keyword.lower()}")
        assert not verdict.allowed
        assert verdict.reason == DENY_DANGEROUS

    def test_inside_string_literal_is_still_denied(self):
        # over-rejection is acceptable
        verdict = validate("SELECT * FROM users WHERE name = 'Drop'")
        assert verdict.reason == DENY_DANGEROUS

    @pytest.mark.parametrize("sql", [
        "SELECT created_at FROM posts",
        "SELECT dropdown, altered, granted FROM settings",
        "UPDATE t SET renamed_to = 'a' WHERE id = 1",
    ])
    def test_keyword_as_part_of_identifier_is_allowed(self, sql):
        assert validate(sql).allowed


class TestStatementShape:
    @pytest.mark.parametrize("sql", [
        "SELECT 1;",
        "SELECT ';' FROM users",
        "UPDATE posts SET title='x'; UPDATE posts SET title='y'",
    ])
    def test_semicolon_denied(self, sql):
        verdict = validate(sql)
        assert not verdict.allowed
        assert verdict.reason == DENY_MULTIPLE

    @pytest.mark.parametrize("sql", [
        "SELECT 1 -- trailing",
        "SELECT * FROM users # mysql style",
        "SELECT /* hint */ 1",
        "SELECT '#1' AS tag FROM posts",
        "DELETE FROM posts WHERE title = 'a--b'",
    ])
    def test_comment_markers_denied(self, sql):
        verdict = validate(sql)
        assert not verdict.allowed
        assert verdict.reason == DENY_COMMENTS

    def test_slash_alone_is_fine(self):
        assert validate("SELECT 10 / 2 AS half").allowed


class TestRuleOrder:
    def test_injection_scenario_denied(self):
        verdict = validate("DELETE FROM users; DROP TABLE users")
        assert not verdict.allowed
        assert verdict.reason in (DENY_DANGEROUS, DENY_MULTIPLE)

    def test_verb_checked_first(self):
        assert validate("DROP TABLE users; -- bye").reason == DENY_VERB

    def test_keyword_before_semicolon(self):
        assert validate("SELECT 1; DROP TABLE users").reason == DENY_DANGEROUS

    def test_semicolon_before_comment(self):
        assert validate("SELECT 1; -- x").reason == DENY_MULTIPLE
