"""Tests for SQL pretty printing."""

import pytest

from semql.db import DuckDBAdapter, MySQLAdapter, PostgreSQLAdapter
from semql.sql.formatter import SqlFormatter
from semql.validation import SqlSyntaxError


def test_one_select_item_per_line():
    formatted = SqlFormatter(DuckDBAdapter()).format("select a, b from t where a > 1")

    assert formatted.splitlines() == ["SELECT", "  a,", "  b", "FROM t", "WHERE", "  a > 1"]


def test_functions_are_upper_case():
    formatted = SqlFormatter(DuckDBAdapter()).format("select count(*) from t")

    assert "COUNT(*)" in formatted


def test_identifiers_are_not_force_quoted():
    formatted = SqlFormatter(PostgreSQLAdapter()).format("SELECT a FROM t")

    assert '"' not in formatted


def test_custom_indent():
    formatted = SqlFormatter(DuckDBAdapter(), indent=4).format("SELECT a, b FROM t")

    assert formatted.splitlines()[1] == "    a,"


def test_leading_comma():
    formatted = SqlFormatter(DuckDBAdapter(), leading_comma=True).format("SELECT a, b FROM t")

    lines = formatted.splitlines()
    assert lines[1].strip() == "a"
    assert lines[2].strip().startswith(",")


def test_invalid_sql_for_dialect():
    with pytest.raises(SqlSyntaxError, match="not valid mysql SQL"):
        SqlFormatter(MySQLAdapter()).format("SELECT * FROM t WHERE (a > 1")
