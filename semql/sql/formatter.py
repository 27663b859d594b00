"""Pretty printing of compiled SQL."""

from semql.db.base import BaseDialectAdapter
from semql.sql.render import parse_sql, render
from semql.validation import SqlSyntaxError


class SqlFormatter:
    """Reformats SQL of one dialect for readability.

    Output has one SELECT item per line, each clause on its own line,
    upper-case keywords and functions, and no forced identifier quoting.
    """

    def __init__(
        self,
        adapter: BaseDialectAdapter,
        indent: int = 2,
        max_text_width: int = 100,
        leading_comma: bool = False,
    ):
        self.adapter = adapter
        self.indent = indent
        self.max_text_width = max_text_width
        self.leading_comma = leading_comma

    def format(self, sql: str) -> str:
        """Re-parse SQL in the adapter's dialect and pretty print it.

        Raises:
            SqlSyntaxError: If the SQL is not valid in the adapter's dialect
        """
        try:
            parsed = parse_sql(sql, self.adapter.sqlglot_dialect)
        except SqlSyntaxError as e:
            raise SqlSyntaxError(f"SQL is not valid {self.adapter.name} SQL: {e}", sql) from e

        return render(
            parsed,
            self.adapter,
            pretty=True,
            identify=False,
            pad=self.indent,
            indent=self.indent,
            max_text_width=self.max_text_width,
            leading_comma=self.leading_comma,
            normalize_functions="upper",
        )
