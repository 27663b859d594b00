"""Dimension definitions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from semql.core.base import ElementModel


class DimensionType(str, Enum):
    """Dimension type."""

    CATEGORICAL = "categorical"
    TIME = "time"


class TimeGranularity(str, Enum):
    """Time granularity for time dimensions."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class EnumValue(BaseModel):
    """Allowed value of a categorical dimension."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Stored value")
    label: str | None = Field(None, description="Display label")


class TypeParams(BaseModel):
    """Type-specific dimension parameters."""

    model_config = ConfigDict(frozen=True)

    time_granularity: TimeGranularity | None = Field(None, description="Base granularity for time dimensions")

    @field_validator("time_granularity", mode="before")
    @classmethod
    def lower_granularity(cls, value):
        return value.lower() if isinstance(value, str) else value


class Dimension(ElementModel):
    """Dimension (attribute) definition.

    Dimensions are used for grouping and filtering in queries.
    """

    name: str = Field(..., description="Unique dimension name within the semantic model")
    description: str = Field(default="", description="Human-readable description")
    alias: str | None = Field(None, description="Alternative business name")
    type: DimensionType = Field(default=DimensionType.CATEGORICAL, description="Dimension type")
    expr: str | None = Field(None, description="SQL expression (defaults to name)")
    data_type: str | None = Field(None, description="Native column type")
    enum_values: list[EnumValue] = Field(default_factory=list, description="Allowed values (categorical only)")
    type_params: TypeParams | None = Field(None, description="Type-specific parameters")

    @field_validator("type", mode="before")
    @classmethod
    def lower_type(cls, value):
        return value.lower() if isinstance(value, str) else value

    @field_validator("enum_values", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def check_enum_values(self) -> "Dimension":
        if self.enum_values and self.type != DimensionType.CATEGORICAL:
            raise ValueError(f"The time type dimension '{self.name}' cannot set enum values")
        return self

    def __hash__(self) -> int:
        return hash((self.name, self.type, self.expr))

    @property
    def sql_expr(self) -> str:
        """Get SQL expression, defaulting to name if not specified."""
        return self.expr or self.name

    @property
    def granularity(self) -> TimeGranularity | None:
        """Base granularity of a time dimension, if declared."""
        if self.type_params is None:
            return None
        return self.type_params.time_granularity
