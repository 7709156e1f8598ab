from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from mindep.source.base import AbstractDataSource
from mindep.util.errors import DataAccessException, TableNotFoundException


class DataFrameSource(AbstractDataSource):
    """
    Data source over in-memory pandas DataFrames, one per table name.

    Missing values (``None``/``NaN``) are grouped like any other value:
    ``drop_duplicates`` treats them as equal and grouping uses ``dropna=False``.
    """

    def __init__(self, tables: Optional[Dict[str, pd.DataFrame]] = None) -> None:
        self.tables: Dict[str, pd.DataFrame] = dict(tables or {})

    def add_table(self, name: str, df: pd.DataFrame) -> None:
        self.tables[name] = df

    def _get(self, table: str) -> pd.DataFrame:
        df = self.tables.get(table)
        if df is None:
            raise TableNotFoundException(f'Table "{table}" not found')
        return df

    def _project(self, table: str, attributes: Sequence[str]) -> pd.DataFrame:
        df = self._get(table)
        missing = [a for a in attributes if a not in df.columns]
        if missing:
            raise DataAccessException(f"Unknown columns {missing} in table {table}")
        # None and NaN both stand for NULL, keep a single marker for grouping
        projected = df[list(attributes)].astype(object)
        return projected.where(projected.notna(), None)

    def list_tables(self) -> List[str]:
        return list(self.tables)

    def list_columns(self, table: str) -> List[str]:
        columns = [str(c) for c in self._get(table).columns]
        if not columns:
            raise TableNotFoundException(f'Table "{table}" not found or has no columns')
        return columns

    def count_distinct_groups(
        self, table: str, lhs: Sequence[str], rhs: str
    ) -> Tuple[int, int]:
        projected = self._project(table, list(lhs) + [rhs])
        try:
            total_lhs = len(projected[list(lhs)].drop_duplicates())
            total_lhs_rhs = len(projected.drop_duplicates())
        except (TypeError, ValueError) as e:
            raise DataAccessException(f"Cannot group {table}: {e}") from e
        return total_lhs, total_lhs_rhs

    def has_violating_group(self, table: str, lhs: Sequence[str], rhs: str) -> bool:
        projected = self._project(table, list(lhs) + [rhs])
        if projected.empty:
            return False
        try:
            distinct_rhs = projected.groupby(list(lhs), dropna=False)[rhs].nunique(
                dropna=False
            )
        except (TypeError, ValueError) as e:
            raise DataAccessException(f"Cannot group {table}: {e}") from e
        return bool((distinct_rhs > 1).any())
