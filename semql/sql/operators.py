"""Per-dialect operator renderers.

SQLGlot renders each expression through its dialect generator. Entries in
``OPERATOR_OVERRIDES`` replace that rendering for one expression class in one
backend, keyed by (backend name, expression class). New overrides are added
with :func:`register_operator_override`.
"""

from collections.abc import Callable

from sqlglot import exp
from sqlglot.generator import Generator

OperatorRenderer = Callable[[Generator, exp.Expression], str]

OPERATOR_OVERRIDES: dict[tuple[str, type[exp.Expression]], OperatorRenderer] = {}


def register_operator_override(dialect: str, expression_type: type[exp.Expression]):
    """Register a renderer for an expression class in one backend.

    Example:
        >>> @register_operator_override("mysql", exp.Between)
        ... def between_sql(generator, expression):
        ...     ...
    """

    def decorator(renderer: OperatorRenderer) -> OperatorRenderer:
        OPERATOR_OVERRIDES[(dialect, expression_type)] = renderer
        return renderer

    return decorator


def overrides_for(dialect: str) -> dict[type[exp.Expression], OperatorRenderer]:
    """Get the overrides registered for a backend, keyed by expression class."""
    return {
        expression_type: renderer
        for (name, expression_type), renderer in OPERATOR_OVERRIDES.items()
        if name == dialect
    }


@register_operator_override("mysql", exp.Between)
def mysql_between_sql(generator: Generator, expression: exp.Between) -> str:
    """Render BETWEEN without the SYMMETRIC/ASYMMETRIC flag MySQL rejects.

    A lower bound containing AND is parenthesized so the AND cannot bind to
    BETWEEN: ``a BETWEEN (b AND c) AND d``.
    """
    this = generator.sql(expression, "this")
    low = expression.args.get("low")
    high = generator.sql(expression, "high")

    low_sql = generator.sql(low)
    if low is not None and not isinstance(low, exp.Paren) and low.find(exp.And):
        low_sql = f"({low_sql})"

    return f"{this} BETWEEN {low_sql} AND {high}"


# Operands that are always numbers; TRUNC on them takes no date format
_NUMERIC_OPERANDS = (exp.Extract, exp.Div, exp.Mul, exp.Mod)


@register_operator_override("oracle", exp.DateTrunc)
def oracle_trunc_sql(generator: Generator, expression: exp.DateTrunc) -> str:
    """Render TRUNC, keeping the numeric one-argument form.

    The Oracle parser reads every TRUNC as a date truncation and fills in the
    default 'DD' format, which Oracle rejects for numbers:
    ``TRUNC(EXTRACT(SECOND FROM ts))`` must not become
    ``TRUNC(EXTRACT(SECOND FROM ts), 'DD')``.
    """
    this = expression.this
    unit = expression.args.get("unit")
    numeric = isinstance(this, _NUMERIC_OPERANDS) or this.is_number
    if numeric and isinstance(unit, exp.Literal) and unit.name.upper() == "DD":
        return generator.func("TRUNC", this)
    return generator.func("TRUNC", this, unit)
