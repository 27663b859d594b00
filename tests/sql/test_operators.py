"""Tests for per-dialect operator overrides."""

from sqlglot import exp

from semql.db import MySQLAdapter, OracleAdapter, PostgreSQLAdapter
from semql.sql.operators import OPERATOR_OVERRIDES, overrides_for, register_operator_override
from semql.sql.render import parse_sql, render


def between(low: exp.Expression) -> exp.Between:
    return exp.Between(this=exp.column("x"), low=low, high=exp.column("d"))


def test_mysql_between_is_registered():
    assert exp.Between in overrides_for("mysql")
    assert overrides_for("postgresql") == {}


def test_mysql_between_plain_bounds():
    expression = parse_sql("SELECT * FROM t WHERE amount BETWEEN 1 AND 10")
    assert render(expression, MySQLAdapter()) == "SELECT * FROM `t` WHERE `amount` BETWEEN 1 AND 10"


def test_mysql_between_parenthesizes_and_lower_bound():
    low = exp.and_(exp.column("b"), exp.column("c"))

    assert render(between(low), MySQLAdapter(), identify=False) == "x BETWEEN (b AND c) AND d"


def test_mysql_between_keeps_existing_parens():
    low = exp.Paren(this=exp.and_(exp.column("b"), exp.column("c")))

    assert render(between(low), MySQLAdapter(), identify=False) == "x BETWEEN (b AND c) AND d"


def test_other_dialects_use_default_between():
    low = exp.and_(exp.column("b"), exp.column("c"))

    assert render(between(low), PostgreSQLAdapter(), identify=False) == "x BETWEEN b AND c AND d"


def test_register_operator_override():
    @register_operator_override("postgresql", exp.Between)
    def between_sql(generator, expression):
        return "BETWEEN_OVERRIDDEN"

    try:
        assert render(between(exp.column("b")), PostgreSQLAdapter(), identify=False) == "BETWEEN_OVERRIDDEN"
    finally:
        OPERATOR_OVERRIDES.pop(("postgresql", exp.Between))

    assert render(between(exp.column("b")), PostgreSQLAdapter(), identify=False) == "x BETWEEN b AND d"


def test_oracle_numeric_trunc_keeps_one_argument():
    expression = parse_sql("SELECT TRUNC(EXTRACT(SECOND FROM ts)) / 86400, TRUNC(2.5) FROM t", "oracle")

    assert render(expression, OracleAdapter(), identify=False) == (
        "SELECT TRUNC(EXTRACT(SECOND FROM ts)) / 86400, TRUNC(2.5) FROM t"
    )


def test_oracle_date_trunc_keeps_format():
    expression = parse_sql("SELECT TRUNC(ts), TRUNC(ts, 'MI') FROM t", "oracle")

    assert render(expression, OracleAdapter(), identify=False) == "SELECT TRUNC(ts, 'DD'), TRUNC(ts, 'MI') FROM t"
