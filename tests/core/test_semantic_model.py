"""Tests for semantic model definitions and their invariants."""

import pytest
from pydantic import ValidationError

from semql import Dimension, Entity, Measure, SemanticModel
from semql.core.dimension import DimensionType, EnumValue, TimeGranularity
from semql.core.entity import EntityType
from semql.core.measure import AggregationType, WindowChoice


def test_defaults_for_optional_fields():
    model = SemanticModel(name="orders", model="SELECT * FROM raw_orders")

    assert model.description == ""
    assert model.alias is None
    assert model.tags == []
    assert model.defaults.agg_time_dimension is None
    assert model.entities == [] and model.dimensions == [] and model.measures == []
    assert not model.has_elements


def test_enum_values_are_case_insensitive():
    dimension = Dimension(name="created", type="TIME", type_params={"time_granularity": "Month"})
    measure = Measure(name="balance", agg="SUM", non_additive_dimension={"name": "created", "window_choice": "MAX"})
    entity = Entity(name="id", type="Primary")

    assert dimension.type == DimensionType.TIME
    assert dimension.granularity == TimeGranularity.MONTH
    assert measure.agg == AggregationType.SUM
    assert measure.non_additive_dimension.window_choice == WindowChoice.MAX
    assert entity.type == EntityType.PRIMARY


def test_element_expression_defaults_to_name():
    assert Dimension(name="status").sql_expr == "status"
    assert Measure(name="amount", expr="price * qty").sql_expr == "price * qty"
    assert Entity(name="id", type="primary").sql_expr == "id"


def test_dimension_type_defaults_to_categorical():
    assert Dimension(name="status").type == DimensionType.CATEGORICAL


def test_measure_agg_defaults_to_none():
    assert Measure(name="amount").agg == AggregationType.NONE


@pytest.mark.parametrize(
    "sql",
    [
        "UPDATE orders SET x=1",
        "DELETE FROM orders",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "raw_orders",
    ],
)
def test_model_must_be_select(sql):
    with pytest.raises(ValidationError, match="must be a SELECT statement"):
        SemanticModel(name="orders", model=sql)


@pytest.mark.parametrize("sql", ["SELECT * FROM raw_orders;", "SELECT * FROM raw_orders ; \n"])
def test_model_cannot_end_with_terminator(sql):
    with pytest.raises(ValidationError, match="cannot contain ';'"):
        SemanticModel(name="orders", model=sql)


def test_model_select_is_case_insensitive_and_trimmed():
    model = SemanticModel(name="orders", model="  select * from raw_orders\n")
    assert model.model.strip() == "select * from raw_orders"


def test_at_most_one_primary_entity():
    with pytest.raises(ValidationError, match="at most one primary entity"):
        SemanticModel(
            name="orders",
            model="SELECT * FROM raw_orders",
            entities=[Entity(name="a", type="primary"), Entity(name="b", type="primary")],
        )


def test_names_unique_across_elements():
    with pytest.raises(ValidationError, match="duplicate name .* dimension 'id'"):
        SemanticModel(
            name="orders",
            model="SELECT * FROM raw_orders",
            entities=[Entity(name="id", type="primary")],
            dimensions=[Dimension(name="id")],
        )

    with pytest.raises(ValidationError, match="duplicate name .* measure 'amount'"):
        SemanticModel(
            name="orders",
            model="SELECT * FROM raw_orders",
            measures=[Measure(name="amount"), Measure(name="amount", agg="sum")],
        )


def test_agg_time_dimension_must_exist():
    with pytest.raises(ValidationError, match="agg_time_dimension"):
        SemanticModel(
            name="orders",
            model="SELECT * FROM raw_orders",
            defaults={"agg_time_dimension": "ordered_at"},
            dimensions=[Dimension(name="status")],
        )


def test_agg_time_dimension_must_be_time():
    with pytest.raises(ValidationError, match="type is not time"):
        SemanticModel(
            name="orders",
            model="SELECT * FROM raw_orders",
            defaults={"agg_time_dimension": "status"},
            dimensions=[Dimension(name="status")],
        )


def test_blank_agg_time_dimension_is_ignored():
    model = SemanticModel(name="orders", model="SELECT * FROM raw_orders", defaults={"agg_time_dimension": "  "})
    assert model.defaults.agg_time_dimension == "  "


def test_time_dimension_rejects_enum_values():
    with pytest.raises(ValidationError, match="cannot set enum values"):
        Dimension(name="created", type="time", enum_values=[EnumValue(value="2024")])


def test_enum_values_on_time_dimension_rejected_and_state_retained(order_facts):
    previous = list(order_facts.dimensions)
    replacement = {
        "name": "order_date",
        "type": "time",
        "expr": "created_at",
        "enum_values": [{"value": "2024-01-01"}],
    }

    with pytest.raises(ValidationError, match="cannot set enum values"):
        order_facts.dimensions = [replacement]

    assert order_facts.dimensions == previous
    assert order_facts.get_dimension("order_date").enum_values == []


def test_elements_are_frozen(order_facts):
    dimension = order_facts.get_dimension("order_date")

    with pytest.raises(ValidationError):
        dimension.enum_values = [EnumValue(value="2024-01-01")]
    assert dimension.enum_values == []

    with pytest.raises(ValidationError):
        order_facts.entities[1].type = "primary"
    assert order_facts.entities[1].type == EntityType.FOREIGN

    with pytest.raises(ValidationError):
        dimension.type_params.time_granularity = "month"
    assert dimension.granularity == TimeGranularity.DAY


def test_defaults_are_frozen(order_facts):
    with pytest.raises(ValidationError):
        order_facts.defaults.agg_time_dimension = "missing"

    assert order_facts.defaults.agg_time_dimension == "order_date"


def test_replacing_defaults_is_validated(order_facts):
    with pytest.raises(ValidationError, match="agg_time_dimension"):
        order_facts.defaults = {"agg_time_dimension": "missing"}

    assert order_facts.defaults.agg_time_dimension == "order_date"


def test_replacing_dimensions_with_invalid_list_keeps_previous(order_facts):
    previous = list(order_facts.dimensions)
    bad = Dimension(name="order_date", type="categorical")

    # agg_time_dimension would point at a categorical dimension
    with pytest.raises(ValidationError, match="type is not time"):
        order_facts.dimensions = [bad]

    assert order_facts.dimensions == previous


def test_invalid_entities_assignment_keeps_previous(order_facts):
    previous = list(order_facts.entities)

    with pytest.raises(ValidationError, match="at most one primary entity"):
        order_facts.entities = [Entity(name="a", type="primary"), Entity(name="b", type="primary")]

    assert order_facts.entities == previous


def test_invalid_model_sql_assignment_keeps_previous(orders):
    with pytest.raises(ValidationError):
        orders.model = "UPDATE orders SET x=1"

    assert orders.model == "SELECT id, amount, order_date FROM raw_orders"


def test_valid_assignment_is_applied(orders):
    orders.description = "All orders"
    orders.measures = [Measure(name="amount", agg="sum")]

    assert orders.description == "All orders"
    assert orders.get_measure("amount").agg == AggregationType.SUM


def test_lookups(order_facts):
    assert order_facts.primary_entity.name == "order_id"
    assert order_facts.get_entity("customer").expr == "customer_id"
    assert order_facts.get_dimension("order_date").granularity == TimeGranularity.DAY
    assert order_facts.get_measure("revenue").agg == AggregationType.SUM
    assert order_facts.get_dimension("missing") is None
