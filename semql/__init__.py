"""semql: compile semantic SQL into dialect SQL with SQLGlot."""

__version__ = "0.1.0"

from semql.core.dimension import Dimension, DimensionType, EnumValue, TimeGranularity, TypeParams
from semql.core.entity import Entity, EntityType
from semql.core.measure import AggregationType, Measure, NonAdditiveDimension
from semql.core.model import Defaults, SemanticModel
from semql.core.registry import SemanticModelRegistry
from semql.db import get_adapter
from semql.sql.converter import SemanticSqlConverter, compile_sql
from semql.validation import (
    DuplicateModelNameError,
    InvalidModelDefinitionError,
    ModelRenderError,
    NoMatchingModelError,
    SemqlError,
    SqlSyntaxError,
    UnsupportedQueryShapeError,
)

__all__ = [
    "AggregationType",
    "Defaults",
    "Dimension",
    "DimensionType",
    "DuplicateModelNameError",
    "Entity",
    "EntityType",
    "EnumValue",
    "InvalidModelDefinitionError",
    "Measure",
    "ModelRenderError",
    "NoMatchingModelError",
    "NonAdditiveDimension",
    "SemanticModel",
    "SemanticModelRegistry",
    "SemanticSqlConverter",
    "SemqlError",
    "SqlSyntaxError",
    "TimeGranularity",
    "TypeParams",
    "UnsupportedQueryShapeError",
    "compile_sql",
    "get_adapter",
]
