from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from enum import Enum
from typing import Callable, List, Optional, Sequence, TypeVar

from mindep.source.base import AbstractDataSource
from mindep.util.base_model import BaseModel
from mindep.util.color import get_failure_text
from mindep.util.errors import (
    ConfigurationException,
    DataAccessException,
    TableNotFoundException,
    VerificationTimeoutException,
)
from mindep.util.logger import get_logger

logger = get_logger(name="mindep.verifier")

T = TypeVar("T")


class VerificationStatus(str, Enum):
    HOLDS = "holds"
    VIOLATED = "violated"
    FAILED = "failed"


class VerificationResult(BaseModel):
    """
    The verdict of one ``lhs -> rhs`` check.

    Attributes:
        status (VerificationStatus): Whether the dependency holds, is violated, or could not be checked.
        error (Optional[str]): The error message when the check failed.
    """

    status: VerificationStatus
    error: Optional[str] = None

    @property
    def holds(self) -> bool:
        return self.status == VerificationStatus.HOLDS


class AbstractVerifier(ABC):
    """
    Abstract base class for deciding whether a dependency holds in a table.

    A dependency ``lhs -> rhs`` holds when every distinct combination of
    ``lhs`` values appears with exactly one ``rhs`` value. On an empty table
    every dependency holds vacuously. NULL is compared as a regular value, as
    documented in :class:`~mindep.source.base.AbstractDataSource`.

    Failures of the data source never propagate: they are logged and returned
    as ``FAILED``, which the discovery engine treats as "not confirmed".

    Methods:
        verify: Checks one candidate dependency.
        _check: Abstract method running the formulation-specific query.
    """

    def __init__(
        self, source: AbstractDataSource, timeout: Optional[float] = None
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ConfigurationException(f"timeout must be positive, got {timeout}")
        self.source = source
        self.timeout = timeout

    @abstractmethod
    def _check(self, table: str, lhs: List[str], rhs: str) -> bool:
        """
        Runs the formulation-specific query.

        Returns:
            bool: True if the dependency holds.

        Raises:
            DataAccessException: If the data source fails.
        """
        ...

    def _call_with_timeout(self, func: Callable[[], T]) -> T:
        if self.timeout is None:
            return func()
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(func)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            raise VerificationTimeoutException(
                f"Verification exceeded {self.timeout} seconds"
            ) from e
        finally:
            # a timed-out query keeps running in the background thread
            executor.shutdown(wait=False)

    def verify(self, table: str, lhs: Sequence[str], rhs: str) -> VerificationResult:
        """
        Checks whether ``lhs`` functionally determines ``rhs`` in ``table``.

        Args:
            table (str): The table name.
            lhs (Sequence[str]): The determinant attributes.
            rhs (str): The dependent attribute.

        Returns:
            VerificationResult: HOLDS, VIOLATED, or FAILED with the error message.
        """
        lhs_list = list(lhs)
        try:
            holds = self._call_with_timeout(lambda: self._check(table, lhs_list, rhs))
        except (DataAccessException, TableNotFoundException, OSError) as e:
            logger.warning(
                get_failure_text(
                    f"Verification failed on table {table} for "
                    f"{','.join(lhs_list)} -> {rhs}: {e}"
                )
            )
            return VerificationResult(status=VerificationStatus.FAILED, error=str(e))
        status = VerificationStatus.HOLDS if holds else VerificationStatus.VIOLATED
        return VerificationResult(status=status)


class CardinalityVerifier(AbstractVerifier):
    """
    Compares the number of distinct ``lhs`` tuples with the number of distinct
    ``(lhs, rhs)`` tuples; the dependency holds iff they are equal.
    """

    def _check(self, table: str, lhs: List[str], rhs: str) -> bool:
        total_lhs, total_lhs_rhs = self.source.count_distinct_groups(table, lhs, rhs)
        logger.debug(f"{','.join(lhs)} -> {rhs}: {total_lhs} / {total_lhs_rhs}")
        return total_lhs == total_lhs_rhs


class GroupingVerifier(AbstractVerifier):
    """
    Groups rows by ``lhs`` and looks for a group with more than one distinct
    ``rhs`` value; the dependency holds iff there is none.
    """

    def _check(self, table: str, lhs: List[str], rhs: str) -> bool:
        return not self.source.has_violating_group(table, lhs, rhs)


_VERIFIERS = {
    "cardinality": CardinalityVerifier,
    "grouping": GroupingVerifier,
}


def create_verifier(
    name: str, source: AbstractDataSource, timeout: Optional[float] = None
) -> AbstractVerifier:
    """
    Creates the verifier registered under ``name``.

    Raises:
        ConfigurationException: If ``name`` is not a known formulation.
    """
    verifier_cls = _VERIFIERS.get(name.lower())
    if verifier_cls is None:
        raise ConfigurationException(
            f"Unknown verifier {name}. Use one of {sorted(_VERIFIERS)}."
        )
    return verifier_cls(source, timeout=timeout)
