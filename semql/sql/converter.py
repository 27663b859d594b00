"""Semantic SQL to dialect SQL conversion.

Semantic SQL is ordinary SQL whose table names refer to semantic models. The
converter finds the referenced models, prepends one CTE per model holding its
backing SELECT, and renders the result in the destination dialect:

    SELECT * FROM orders
    ->  WITH orders AS (SELECT ... FROM raw_orders) SELECT * FROM orders
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import TYPE_CHECKING

from sqlglot import exp

from semql.core.model import SemanticModel
from semql.core.registry import SemanticModelRegistry
from semql.db import get_adapter
from semql.db.base import BaseDialectAdapter
from semql.sql.extractor import SET_OPERATIONS, TableReferenceExtractor
from semql.sql.formatter import SqlFormatter
from semql.sql.model_sql import model_sql as default_model_sql
from semql.sql.render import parse_sql, render
from semql.validation import (
    ModelRenderError,
    NoMatchingModelError,
    SqlSyntaxError,
    UnsupportedQueryShapeError,
)

if TYPE_CHECKING:
    from semql.config import SemqlConfig

logger = logging.getLogger(__name__)

ModelSqlFunction = Callable[[SemanticModel, BaseDialectAdapter], str]


class QueryShape(str, Enum):
    """Top-level shape of a semantic query."""

    SELECT = "select"
    ORDERED_SELECT = "order_by"
    WITH = "with"


def query_shape(parsed: exp.Expression) -> QueryShape:
    """Classify a parsed statement.

    Raises:
        UnsupportedQueryShapeError: If the statement is not a SELECT, an
            ordered SELECT, or a query with a WITH clause
    """
    if isinstance(parsed, (exp.Select, *SET_OPERATIONS)) and parsed.ctes:
        return QueryShape.WITH
    if isinstance(parsed, exp.Select):
        return QueryShape.ORDERED_SELECT if parsed.args.get("order") else QueryShape.SELECT
    raise UnsupportedQueryShapeError(parsed.key.upper())


def strip_terminator(sql: str) -> str:
    """Trim a statement and drop one trailing ';'."""
    sql = sql.strip()
    if sql.endswith(";"):
        sql = sql[:-1]
    return sql


class SemanticSqlConverter:
    """Converts semantic SQL into SQL of one destination dialect."""

    def __init__(
        self,
        registry: SemanticModelRegistry | Iterable[SemanticModel],
        dialect: str | BaseDialectAdapter = "duckdb",
        model_sql: ModelSqlFunction = default_model_sql,
        formatter: SqlFormatter | None = None,
    ):
        """Initialize converter.

        Args:
            registry: Semantic model registry (or models to build one from)
            dialect: Destination backend name or adapter
            model_sql: Function producing the backing SELECT of a model
            formatter: Pretty printer used by :meth:`convert_format`
        """
        if not isinstance(registry, SemanticModelRegistry):
            registry = SemanticModelRegistry.build(registry)
        self.registry = registry
        self.adapter = get_adapter(dialect)
        self.extractor = TableReferenceExtractor()
        self.formatter = formatter or SqlFormatter(self.adapter)
        self._model_sql = model_sql

    @classmethod
    def from_config(cls, config: "SemqlConfig") -> "SemanticSqlConverter":
        """Build a converter from a configuration.

        Loads every schema file under ``config.schemas_dir`` and applies the
        dialect and pretty printer settings.
        """
        from semql.loaders import load_from_directory

        registry = load_from_directory(config.schemas_dir, models_dir=config.models_dir)
        adapter = get_adapter(config.dialect)
        formatter = SqlFormatter(
            adapter,
            indent=config.format.indent,
            max_text_width=config.format.max_text_width,
            leading_comma=config.format.leading_comma,
        )
        return cls(registry, dialect=adapter, formatter=formatter)

    def convert(self, semantic_sql: str) -> str:
        """Convert semantic SQL to destination-dialect SQL.

        Args:
            semantic_sql: A SELECT, ordered SELECT or WITH query over semantic models

        Returns:
            SQL in the destination dialect

        Raises:
            SqlSyntaxError: If the query cannot be parsed
            UnsupportedQueryShapeError: If the statement is not a supported query
            NoMatchingModelError: If no referenced table is a semantic model
            ModelRenderError: If a referenced model's SQL cannot be parsed
        """
        parsed = parse_sql(strip_terminator(semantic_sql))
        shape = query_shape(parsed)

        candidates = self.extractor.collect(parsed)
        models = self.registry.resolve_ordered(candidates)
        logger.debug(
            "Semantic %s query references %s, matched models: %s",
            shape.value,
            sorted(candidates),
            [m.name for m in models],
        )
        if not models:
            raise NoMatchingModelError(candidates)

        query = parsed.copy()
        self._warn_on_shadowed_ctes(query, models)
        self._prepend_ctes(query, [self._model_cte(model) for model in models])
        return render(query, self.adapter)

    def convert_format(self, semantic_sql: str) -> str:
        """Convert semantic SQL and pretty print the result.

        Raises:
            SqlSyntaxError: If the converted SQL does not re-parse in the
                destination dialect
        """
        return self.formatter.format(self.convert(semantic_sql))

    def model_sql(self, model: SemanticModel | str) -> str:
        """Get the backing SELECT of a registered model in the destination dialect."""
        if isinstance(model, str):
            name = model
            model = self.registry.get(name)
            if model is None:
                raise NoMatchingModelError({name})
        return self._model_sql(model, self.adapter)

    def _model_cte(self, model: SemanticModel) -> exp.CTE:
        view_sql = self._model_sql(model, self.adapter)
        try:
            view = parse_sql(view_sql, self.adapter.sqlglot_dialect)
        except SqlSyntaxError as e:
            raise ModelRenderError(model.name, str(e)) from e

        return exp.CTE(this=view, alias=exp.TableAlias(this=exp.to_identifier(model.name)))

    @staticmethod
    def _prepend_ctes(query: exp.Expression, ctes: list[exp.CTE]) -> None:
        existing = list(query.ctes)
        if existing:
            # Reuse the query's WITH node so RECURSIVE and similar flags survive
            existing[0].parent.set("expressions", ctes + existing)
        else:
            query.set("with", exp.With(expressions=ctes))

    @staticmethod
    def _warn_on_shadowed_ctes(query: exp.Expression, models: list[SemanticModel]) -> None:
        model_names = {model.name for model in models}
        for cte in query.ctes:
            if cte.alias in model_names:
                logger.warning(
                    "WITH item '%s' has the same name as a semantic model; both CTEs are emitted "
                    "and the model CTE comes first",
                    cte.alias,
                )


def compile_sql(
    semantic_sql: str,
    models: SemanticModelRegistry | Iterable[SemanticModel],
    dialect: str | BaseDialectAdapter = "duckdb",
    pretty: bool = False,
) -> str:
    """Compile semantic SQL against models for a destination dialect.

    Example:
        >>> compile_sql("SELECT * FROM orders", [orders], dialect="postgres")
        'WITH "orders" AS (...) SELECT * FROM "orders"'
    """
    converter = SemanticSqlConverter(models, dialect=dialect)
    if pretty:
        return converter.convert_format(semantic_sql)
    return converter.convert(semantic_sql)
