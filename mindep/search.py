from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Tuple

from mindep.combination import AttributeSet, iter_strata, validate_max_size
from mindep.fd.dependency import Dependency
from mindep.fd.result import DiscoveryResult, VerificationFailure
from mindep.index import DependencyIndex, has_determining_subset
from mindep.source.base import AbstractDataSource
from mindep.util.base_model import BaseModel
from mindep.util.color import get_dependency_text
from mindep.util.errors import ConfigurationException
from mindep.util.flags import (
    MAX_LHS_SIZE_FLAG,
    NUM_WORKERS_FLAG,
    VERIFIER_FLAG,
    VERIFY_TIMEOUT_FLAG,
)
from mindep.util.logger import get_logger
from mindep.verifier import AbstractVerifier, VerificationResult, create_verifier

logger = get_logger(name="mindep.search")

Candidate = Tuple[AttributeSet, str]


class Search(BaseModel):
    """
    Search class for discovering the minimal functional dependencies of a table.

    The search enumerates candidate determinant sets from the smallest to the
    largest. For every attribute outside a candidate, it skips the pair when a
    smaller determinant set is already known to determine that attribute, and
    otherwise verifies it against the data. Confirmed dependencies are
    recorded in a per-run :class:`DependencyIndex` and reported in discovery
    order.

    Candidates of one size form a stratum. All dependencies of a stratum are
    committed to the index before the next stratum starts, so the minimality
    filter always sees every smaller determinant set. With more than one worker
    the verifications of a stratum run concurrently; since same-sized sets are
    never subsets of each other, the result is the same as the sequential one.

    Attributes:
        source (AbstractDataSource): The data access used to read the table.
        table (str): The table to analyse.
        verifier (AbstractVerifier): The dependency verifier.
        max_lhs_size (int): The largest determinant set to enumerate.
        num_workers (int): Number of concurrent verifications within a stratum.

    Methods:
        create: A class method to create an instance of the Search class.
        run: Performs the discovery and returns the confirmed dependencies.
        _pending_candidates: Filters the candidates of a stratum.
        _verify_stratum: Verifies the candidates of a stratum.
        _record: Commits one verdict to the index and the result.
    """

    source: AbstractDataSource
    table: str
    verifier: AbstractVerifier
    max_lhs_size: int = 3
    num_workers: int = 1

    @classmethod
    def create(
        cls,
        source: AbstractDataSource,
        table: str,
        max_lhs_size: int = MAX_LHS_SIZE_FLAG,
        verifier: str | AbstractVerifier = VERIFIER_FLAG,
        num_workers: int = NUM_WORKERS_FLAG,
        timeout: Optional[float] = VERIFY_TIMEOUT_FLAG,
    ) -> Search:
        """
        Class method to create an instance of the Search class.

        Args:
            source (AbstractDataSource): The data access for the table.
            table (str): The table to analyse.
            max_lhs_size (int): The largest determinant set to enumerate.
            verifier (str | AbstractVerifier): A verifier, or the name of a formulation ("cardinality" or "grouping").
            num_workers (int): Number of concurrent verifications within a stratum.
            timeout (Optional[float]): Per-verification time limit in seconds, used when a verifier name is given.

        Returns:
            Search: An instance of the Search class.

        Raises:
            ConfigurationException: If any setting is invalid.
        """
        validate_max_size(max_lhs_size)
        if num_workers < 1:
            raise ConfigurationException(f"num_workers must be >= 1, got {num_workers}")
        if isinstance(verifier, str):
            verifier = create_verifier(verifier, source, timeout=timeout)
        return cls(
            source=source,
            table=table,
            verifier=verifier,
            max_lhs_size=max_lhs_size,
            num_workers=num_workers,
        )

    def _pending_candidates(
        self,
        stratum: List[AttributeSet],
        columns: List[str],
        index: DependencyIndex,
        result: DiscoveryResult,
    ) -> List[Candidate]:
        pending: List[Candidate] = []
        for lhs in stratum:
            for rhs in columns:
                if rhs in lhs:
                    continue
                if has_determining_subset(lhs, rhs, index):
                    result.pruned += 1
                    continue
                pending.append((lhs, rhs))
        return pending

    def _verify_stratum(self, pending: List[Candidate]) -> List[VerificationResult]:
        def _run(candidate: Candidate) -> VerificationResult:
            lhs, rhs = candidate
            return self.verifier.verify(self.table, lhs, rhs)

        # map keeps the input order, commits stay deterministic
        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            return list(executor.map(_run, pending))

    def _record(
        self,
        candidate: Candidate,
        verdict: VerificationResult,
        index: DependencyIndex,
        result: DiscoveryResult,
    ) -> None:
        lhs, rhs = candidate
        result.verified += 1
        if verdict.holds:
            if index.add(lhs, rhs):
                dependency = Dependency.create(dependent=rhs, determinants=lhs)
                result.add_dependency(dependency)
                logger.info(get_dependency_text(str(dependency)))
        elif verdict.error is not None:
            result.add_failure(
                VerificationFailure(
                    table=self.table,
                    determinants=list(lhs),
                    dependent=rhs,
                    error=verdict.error,
                )
            )

    def run(self) -> DiscoveryResult:
        """
        Discovers the minimal functional dependencies of the table.

        Returns:
            DiscoveryResult: The confirmed dependencies in discovery order, plus failed checks and counters.

        Raises:
            TableNotFoundException: If the table does not exist or has no columns.
        """
        columns = self.source.list_columns(self.table)
        logger.info(f"Columns found: {', '.join(columns)}")
        logger.info(
            f"Checking functional dependencies (LHS size 1..{self.max_lhs_size}) ..."
        )

        index = DependencyIndex()
        result = DiscoveryResult(
            table=self.table, columns=columns, max_lhs_size=self.max_lhs_size
        )
        for size, stratum in iter_strata(columns, self.max_lhs_size):
            pending = self._pending_candidates(stratum, columns, index, result)
            logger.debug(f"Stratum {size}: {len(pending)} candidates to verify")
            if self.num_workers == 1:
                for lhs, rhs in pending:
                    verdict = self.verifier.verify(self.table, lhs, rhs)
                    self._record((lhs, rhs), verdict, index, result)
            else:
                for candidate, verdict in zip(pending, self._verify_stratum(pending)):
                    self._record(candidate, verdict, index, result)

        logger.info(result.summary)
        if result.failures:
            logger.warning(
                f"{len(result.failures)} verifications failed and were not confirmed."
            )
        return result


def discover_dependencies(
    source: AbstractDataSource,
    table: str,
    max_lhs_size: int = MAX_LHS_SIZE_FLAG,
    **kwargs: Any,
) -> DiscoveryResult:
    """
    Discovers the minimal functional dependencies of ``table``.

    Args:
        source (AbstractDataSource): The data access for the table.
        table (str): The table to analyse.
        max_lhs_size (int): The largest determinant set to enumerate.
        **kwargs: Forwarded to :meth:`Search.create` (``verifier``, ``num_workers``, ``timeout``).

    Returns:
        DiscoveryResult: The ordered dependencies; ``result.count`` is their number.
    """
    return Search.create(
        source=source, table=table, max_lhs_size=max_lhs_size, **kwargs
    ).run()
