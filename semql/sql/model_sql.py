"""Backing SQL for semantic models."""

from semql.core.dimension import DimensionType
from semql.core.model import SemanticModel
from semql.db.base import BaseDialectAdapter
from semql.sql.render import parse_sql, render
from semql.validation import ModelRenderError, SqlSyntaxError

# Alias of the model SELECT inside the generated view
MODEL_ALIAS = "__semql_model"


def render_model_select(model: SemanticModel, adapter: BaseDialectAdapter) -> str:
    """Parse a model's SELECT in the destination dialect and render it back.

    Raises:
        ModelRenderError: If the SELECT cannot be parsed
    """
    try:
        parsed = parse_sql(model.model.strip(), adapter.sqlglot_dialect)
    except SqlSyntaxError as e:
        raise ModelRenderError(model.name, str(e)) from e
    return render(parsed, adapter)


def model_sql(model: SemanticModel, adapter: BaseDialectAdapter) -> str:
    """Generate the SELECT that backs a semantic model.

    Entities, dimensions and measures become aliased columns over the model
    SELECT; time dimensions are truncated to their granularity. A model with
    no declared elements is exposed as its SELECT unchanged.

    Args:
        model: Semantic model
        adapter: Destination dialect adapter

    Returns:
        SQL SELECT statement in the adapter's dialect

    Raises:
        ModelRenderError: If the model SELECT cannot be parsed
    """
    model_select = render_model_select(model, adapter)
    if not model.has_elements:
        return model_select

    fields = []
    for entity in model.entities:
        fields.append(f"{entity.sql_expr} AS {adapter.quote_identifier(entity.name)}")

    for dimension in model.dimensions:
        expr = dimension.sql_expr
        if dimension.type == DimensionType.TIME and dimension.granularity is not None:
            expr = adapter.apply_time_granularity(expr, dimension.granularity)
        fields.append(f"{expr} AS {adapter.quote_identifier(dimension.name)}")

    for measure in model.measures:
        fields.append(f"{measure.sql_expr} AS {adapter.quote_identifier(measure.name)}")

    return f"SELECT {', '.join(fields)} FROM ({model_select}) AS {adapter.quote_identifier(MODEL_ALIAS)}"
