from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from mindep.source.base import AbstractDataSource
from mindep.util.errors import DataAccessException, TableNotFoundException
from mindep.util.logger import get_logger

logger = get_logger(name="mindep.source.sql")


class SQLDataSource(AbstractDataSource):
    """
    Data source backed by a SQLAlchemy engine.

    Identifiers are quoted with the dialect's identifier preparer before they
    are placed in query text, so column names containing spaces, quotes or
    reserved words are safe. Distinct counting goes through ``SELECT
    DISTINCT`` sub-queries rather than ``COUNT(DISTINCT ...)``, which keeps
    NULL as a single ordinary value on every backend.
    """

    def __init__(self, engine: Engine, schema: Optional[str] = None) -> None:
        self.engine = engine
        self.schema = schema

    @classmethod
    def from_url(cls, url: str, schema: Optional[str] = None) -> SQLDataSource:
        try:
            engine = create_engine(url)
        except SQLAlchemyError as e:
            raise DataAccessException(f"Invalid database URL: {e}") from e
        return cls(engine, schema=schema)

    def quote(self, name: str) -> str:
        return self.engine.dialect.identifier_preparer.quote(name)

    def _table_ref(self, table: str) -> str:
        if self.schema:
            return f"{self.quote(self.schema)}.{self.quote(table)}"
        return self.quote(table)

    def _execute(self, sql: str) -> List[Any]:
        """
        Executes a read-only statement and returns all rows.

        Identifiers must already be quoted by the caller.
        """
        try:
            with self.engine.connect() as conn:
                return list(conn.execute(text(sql)).fetchall())
        except SQLAlchemyError as e:
            raise DataAccessException(f"Query failed: {e}") from e

    def list_tables(self) -> List[str]:
        try:
            return inspect(self.engine).get_table_names(schema=self.schema)
        except SQLAlchemyError as e:
            raise DataAccessException(f"Cannot list tables: {e}") from e

    def list_columns(self, table: str) -> List[str]:
        try:
            columns = inspect(self.engine).get_columns(table, schema=self.schema)
        except NoSuchTableError as e:
            raise TableNotFoundException(f'Table "{table}" not found') from e
        except SQLAlchemyError as e:
            raise DataAccessException(f"Cannot read columns of {table}: {e}") from e
        if not columns:
            raise TableNotFoundException(f'Table "{table}" not found or has no columns')
        return [column["name"] for column in columns]

    def _distinct_select(self, table: str, attributes: Sequence[str]) -> str:
        cols = ", ".join(self.quote(a) for a in attributes)
        return f"SELECT DISTINCT {cols} FROM {self._table_ref(table)}"

    def count_distinct_groups(
        self, table: str, lhs: Sequence[str], rhs: str
    ) -> Tuple[int, int]:
        lhs_sql = self._distinct_select(table, lhs)
        lhs_rhs_sql = self._distinct_select(table, list(lhs) + [rhs])
        sql = (
            f"SELECT (SELECT COUNT(*) FROM ({lhs_sql}) AS total_lhs), "
            f"(SELECT COUNT(*) FROM ({lhs_rhs_sql}) AS total_lhs_rhs)"
        )
        rows = self._execute(sql)
        total_lhs, total_lhs_rhs = rows[0]
        return int(total_lhs), int(total_lhs_rhs)

    def has_violating_group(self, table: str, lhs: Sequence[str], rhs: str) -> bool:
        group_cols = ", ".join(self.quote(a) for a in lhs)
        pairs_sql = self._distinct_select(table, list(lhs) + [rhs])
        sql = (
            f"SELECT {group_cols} FROM ({pairs_sql}) AS pairs "
            f"GROUP BY {group_cols} HAVING COUNT(*) > 1"
        )
        # LIMIT is not portable across dialects, the first row is enough
        try:
            with self.engine.connect() as conn:
                row = conn.execute(text(sql)).first()
        except SQLAlchemyError as e:
            raise DataAccessException(f"Query failed: {e}") from e
        return row is not None
