"""Tests for table-reference extraction."""

import sqlglot

from semql.sql.extractor import TableReferenceExtractor, extract_table_references


def extract(sql: str) -> set[str]:
    return extract_table_references(sqlglot.parse_one(sql))


def test_simple_select():
    assert extract("SELECT * FROM orders") == {"orders"}


def test_nested_subquery_and_join():
    sql = "SELECT * FROM (SELECT * FROM orders) AS o JOIN customers AS c ON o.customer_id = c.id"
    assert extract(sql) == {"orders", "customers"}


def test_multiple_joins():
    sql = """
        SELECT *
        FROM orders o
        LEFT JOIN customers c ON o.customer_id = c.id
        JOIN regions r ON c.region_id = r.id
    """
    assert extract(sql) == {"orders", "customers", "regions"}


def test_union_in_subquery():
    sql = "SELECT * FROM (SELECT id FROM orders UNION ALL SELECT id FROM returns) AS u"
    assert extract(sql) == {"orders", "returns"}


def test_intersect_and_except():
    assert extract("SELECT id FROM a INTERSECT SELECT id FROM b") == {"a", "b"}
    assert extract("SELECT id FROM a EXCEPT SELECT id FROM b") == {"a", "b"}


def test_exists_subquery():
    sql = "SELECT * FROM customers WHERE EXISTS (SELECT 1 FROM orders WHERE orders.customer_id = customers.id)"
    assert extract(sql) == {"customers", "orders"}


def test_in_subquery():
    sql = "SELECT * FROM customers WHERE id IN (SELECT customer_id FROM orders)"
    assert extract(sql) == {"customers", "orders"}


def test_scalar_subquery_in_projection():
    sql = "SELECT name, (SELECT COUNT(*) FROM orders) AS order_count FROM customers"
    assert extract(sql) == {"customers", "orders"}


def test_having_subquery():
    sql = """
        SELECT region, COUNT(*) FROM customers
        GROUP BY region
        HAVING COUNT(*) > (SELECT COUNT(*) FROM orders)
    """
    assert extract(sql) == {"customers", "orders"}


def test_cte_bodies_and_names():
    sql = "WITH recent AS (SELECT * FROM orders WHERE amount > 10) SELECT * FROM recent"
    assert extract(sql) == {"orders", "recent"}


def test_qualified_tables_are_not_candidates():
    assert extract("SELECT * FROM analytics.orders") == set()
    assert extract("SELECT * FROM warehouse.analytics.orders JOIN customers ON true") == {"customers"}


def test_no_tables():
    assert extract("SELECT 1") == set()


def test_collect_all():
    extractor = TableReferenceExtractor()
    nodes = [sqlglot.parse_one("SELECT * FROM orders"), sqlglot.parse_one("SELECT * FROM customers")]
    assert extractor.collect_all(nodes) == {"orders", "customers"}


def test_collect_none():
    assert TableReferenceExtractor().collect(None) == set()


def test_scalar_subquery_count():
    assert extract("SELECT (SELECT COUNT(*) FROM orders) AS c FROM customers") == {"orders", "customers"}
