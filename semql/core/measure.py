"""Measure definitions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from semql.core.base import ElementModel


class AggregationType(str, Enum):
    """Aggregation applied to a measure."""

    NONE = "none"
    SUM = "sum"
    MAX = "max"
    MIN = "min"
    AVG = "avg"
    COUNT = "count"
    MEDIAN = "median"
    COUNT_DISTINCT = "count_distinct"
    SUM_BOOLEAN = "sum_boolean"


class WindowChoice(str, Enum):
    MIN = "min"
    MAX = "max"


class NonAdditiveDimension(BaseModel):
    """Dimension across which a measure cannot be summed (e.g. balances over time)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Dimension name")
    window_choice: WindowChoice | None = Field(None, description="Which end of the window to keep")
    window_groupings: list[str] = Field(default_factory=list, description="Dimensions to group the window by")

    @field_validator("window_choice", mode="before")
    @classmethod
    def lower_choice(cls, value):
        return value.lower() if isinstance(value, str) else value


class Measure(ElementModel):
    """Measure (aggregatable column) definition."""

    name: str = Field(..., description="Unique measure name within the semantic model")
    description: str = Field(default="", description="Human-readable description")
    alias: str | None = Field(None, description="Alternative business name")
    agg: AggregationType = Field(default=AggregationType.NONE, description="Aggregation function")
    expr: str | None = Field(None, description="SQL expression (defaults to name)")
    data_type: str | None = Field(None, description="Native column type")
    non_additive_dimension: NonAdditiveDimension | None = Field(None, description="Non-additive dimension")
    agg_time_dimension: str | None = Field(None, description="Time dimension used to aggregate this measure")

    @field_validator("agg", mode="before")
    @classmethod
    def lower_agg(cls, value):
        return value.lower() if isinstance(value, str) else value

    def __hash__(self) -> int:
        return hash((self.name, self.agg, self.expr))

    @property
    def sql_expr(self) -> str:
        """Get SQL expression, defaulting to name if not specified."""
        return self.expr or self.name
