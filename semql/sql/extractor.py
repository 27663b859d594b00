"""Table-reference extraction from parsed queries.

The extractor over-approximates: it returns every unqualified table name that
could denote a semantic model, and leaves filtering to the registry.
"""

from sqlglot import exp

SET_OPERATIONS = (exp.Union, exp.Intersect, exp.Except)


class TableReferenceExtractor:
    """Collects candidate table names from a SQLGlot expression tree."""

    def collect(self, node: exp.Expression | None) -> set[str]:
        """Collect candidate table names below a node.

        Args:
            node: Parsed query or any sub-expression

        Returns:
            Set of unqualified table names
        """
        tables: set[str] = set()
        self._visit(node, tables)
        return tables

    def collect_all(self, nodes) -> set[str]:
        """Union of :meth:`collect` over several nodes."""
        tables: set[str] = set()
        for node in nodes:
            self._visit(node, tables)
        return tables

    def _visit(self, node: exp.Expression | None, tables: set[str]) -> None:
        if node is None:
            return

        if isinstance(node, exp.Select):
            self._visit_select(node, tables)
        elif isinstance(node, SET_OPERATIONS):
            self._visit_ctes(node, tables)
            self._visit(node.this, tables)
            self._visit(node.expression, tables)
        elif isinstance(node, exp.Table):
            self._visit_table(node, tables)
        elif isinstance(node, exp.Join):
            self._visit(node.this, tables)
            self._visit(node.args.get("on"), tables)
        elif isinstance(node, (exp.Subquery, exp.From, exp.Where, exp.Having)):
            self._visit(node.this, tables)
        else:
            # Unrecognized node: its operands may still hold subqueries
            for child in node.iter_expressions():
                self._visit(child, tables)

    def _visit_select(self, select: exp.Select, tables: set[str]) -> None:
        self._visit_ctes(select, tables)
        self._visit(select.args.get("from"), tables)
        for join in select.args.get("joins") or []:
            self._visit(join, tables)
        for lateral in select.args.get("laterals") or []:
            self._visit(lateral, tables)
        self._visit(select.args.get("where"), tables)
        self._visit(select.args.get("having"), tables)
        for projection in select.expressions:
            self._visit(projection, tables)
        for key in ("group", "qualify", "order"):
            self._visit(select.args.get(key), tables)

    def _visit_ctes(self, query: exp.Expression, tables: set[str]) -> None:
        for cte in query.ctes:
            self._visit(cte.this, tables)

    def _visit_table(self, table: exp.Table, tables: set[str]) -> None:
        if isinstance(table.this, exp.Identifier):
            if not table.args.get("db") and not table.args.get("catalog"):
                tables.add(table.name)
        else:
            # Table-valued function or other non-identifier source
            self._visit(table.this, tables)


def extract_table_references(node: exp.Expression) -> set[str]:
    """Collect candidate table names from a parsed query."""
    return TableReferenceExtractor().collect(node)
