"""Entity definitions."""

from enum import Enum

from pydantic import Field, field_validator

from semql.core.base import ElementModel


class EntityType(str, Enum):
    """Entity (join key) type."""

    PRIMARY = "primary"
    UNIQUE = "unique"
    FOREIGN = "foreign"


class Entity(ElementModel):
    """Entity (join key) definition."""

    name: str = Field(..., description="Unique entity name within the semantic model")
    description: str = Field(default="", description="Human-readable description")
    alias: str | None = Field(None, description="Alternative business name")
    type: EntityType = Field(..., description="Entity type (primary, unique, or foreign)")
    expr: str | None = Field(None, description="SQL expression (defaults to name)")
    data_type: str | None = Field(None, description="Native column type")

    @field_validator("type", mode="before")
    @classmethod
    def lower_type(cls, value):
        return value.lower() if isinstance(value, str) else value

    def __hash__(self) -> int:
        return hash((self.name, self.type, self.expr))

    @property
    def sql_expr(self) -> str:
        """Get SQL expression, defaulting to name if not specified."""
        return self.expr or self.name
