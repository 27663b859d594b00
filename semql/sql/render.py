"""Destination-dialect rendering of SQLGlot expressions."""

from functools import lru_cache

import sqlglot
from sqlglot import exp
from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import ParseError, TokenError

from semql.db.base import BaseDialectAdapter
from semql.validation import SqlSyntaxError

# The grammar semantic SQL is authored in (SQLGlot's dialect-neutral grammar)
AUTHORING_DIALECT = ""


@lru_cache(maxsize=None)
def _generator_class(sqlglot_dialect: str, overrides: tuple):
    generator_class = Dialect.get_or_raise(sqlglot_dialect).generator_class
    if not overrides:
        return generator_class

    return type(
        f"{generator_class.__qualname__.replace('.', '')}WithOverrides",
        (generator_class,),
        {"TRANSFORMS": {**generator_class.TRANSFORMS, **dict(overrides)}},
    )


def parse_sql(sql: str, dialect: str = AUTHORING_DIALECT) -> exp.Expression:
    """Parse a single SQL statement.

    Args:
        sql: SQL text
        dialect: SQLGlot dialect of the text (defaults to the authoring grammar)

    Returns:
        Parsed expression

    Raises:
        SqlSyntaxError: If the text cannot be parsed or holds more than one statement
    """
    try:
        statements = [s for s in sqlglot.parse(sql, read=dialect or None) if s is not None]
    except (ParseError, TokenError) as e:
        raise SqlSyntaxError(f"Failed to parse SQL: {e}", sql) from e

    if not statements:
        raise SqlSyntaxError("Failed to parse SQL: empty statement", sql)
    if len(statements) > 1:
        raise SqlSyntaxError(f"Failed to parse SQL: expected one statement, found {len(statements)}", sql)
    return statements[0]


def render(expression: exp.Expression, adapter: BaseDialectAdapter, **options) -> str:
    """Render an expression in the adapter's dialect.

    Identifier quoting follows the adapter and its operator overrides replace
    the SQLGlot defaults. Extra options are passed to the SQLGlot generator
    (``pretty``, ``indent``, ``max_text_width``, ...).
    """
    options.setdefault("identify", adapter.identify)
    overrides = tuple(sorted(adapter.operator_overrides.items(), key=lambda item: item[0].__name__))
    dialect = Dialect.get_or_raise(adapter.sqlglot_dialect)
    generator = _generator_class(adapter.sqlglot_dialect, overrides)(dialect=dialect, **options)
    return generator.generate(expression, copy=True)
