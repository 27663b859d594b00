"""Pytest configuration and fixtures."""

import pytest

from semql import Dimension, Entity, Measure, SemanticModel, SemanticModelRegistry


@pytest.fixture
def orders():
    """Bare semantic model exposing its SELECT unchanged."""
    return SemanticModel(name="orders", model="SELECT id, amount, order_date FROM raw_orders")


@pytest.fixture
def customers():
    return SemanticModel(
        name="customers",
        description="Customers",
        model="SELECT id, name, region FROM raw_customers",
        entities=[Entity(name="customer_id", type="primary", expr="id")],
        dimensions=[
            Dimension(name="name", type="categorical"),
            Dimension(
                name="region",
                type="categorical",
                enum_values=[{"value": "EU", "label": "Europe"}, {"value": "US"}],
            ),
        ],
    )


@pytest.fixture
def order_facts():
    """Semantic model with entities, a time dimension and measures."""
    return SemanticModel(
        name="order_facts",
        description="Order facts",
        model="SELECT id, customer_id, amount, created_at FROM raw_orders",
        defaults={"agg_time_dimension": "order_date"},
        entities=[
            Entity(name="order_id", type="primary", expr="id"),
            Entity(name="customer", type="foreign", expr="customer_id"),
        ],
        dimensions=[
            Dimension(name="order_date", type="time", expr="created_at", type_params={"time_granularity": "day"}),
        ],
        measures=[
            Measure(name="revenue", agg="sum", expr="amount"),
            Measure(name="order_count", agg="count", expr="1"),
        ],
    )


@pytest.fixture
def registry(orders, customers):
    return SemanticModelRegistry.build([orders, customers])
