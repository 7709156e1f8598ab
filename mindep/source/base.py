from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple


class AbstractDataSource(ABC):
    """
    Abstract base class for the read-only data access used by discovery.

    Implementations run the grouping queries against the live table. They are
    responsible for quoting or validating attribute and table names; callers
    pass names exactly as returned by ``list_columns``.

    NULL handling: NULL (or a missing value) is one ordinary value in both the
    left-hand side grouping and the right-hand side distinctness, so two rows
    whose determinants are both NULL fall into the same group.

    Methods:
        list_tables: Returns the table names available in the source.
        list_columns: Returns the ordered column names of a table.
        count_distinct_groups: Counts distinct lhs tuples and distinct (lhs, rhs) tuples.
        has_violating_group: Checks for an lhs group with more than one rhs value.
    """

    @abstractmethod
    def list_tables(self) -> List[str]:
        ...

    @abstractmethod
    def list_columns(self, table: str) -> List[str]:
        """
        Returns the column names of ``table`` in table order.

        Raises:
            TableNotFoundException: If the table does not exist or has no columns.
        """
        ...

    @abstractmethod
    def count_distinct_groups(
        self, table: str, lhs: Sequence[str], rhs: str
    ) -> Tuple[int, int]:
        """
        Counts the distinct ``lhs`` value tuples and the distinct
        ``(lhs, rhs)`` value tuples of ``table``.

        Raises:
            DataAccessException: If the query fails.
        """
        ...

    @abstractmethod
    def has_violating_group(self, table: str, lhs: Sequence[str], rhs: str) -> bool:
        """
        Checks whether some group of rows sharing the same ``lhs`` values holds
        more than one distinct ``rhs`` value.

        Raises:
            DataAccessException: If the query fails.
        """
        ...
