from typing import List

from mindep.fd.dependency import Dependency
from mindep.util.base_model import BaseModel


class VerificationFailure(BaseModel):
    """
    A candidate dependency whose verification query could not be completed.

    Attributes:
        table (str): The table the check ran against.
        determinants (List[str]): The left-hand side of the candidate.
        dependent (str): The right-hand side of the candidate.
        error (str): The message of the underlying error.
    """

    table: str
    determinants: List[str]
    dependent: str
    error: str

    def __str__(self) -> str:
        return f"{','.join(self.determinants)} -> {self.dependent}: {self.error}"


class DiscoveryResult(BaseModel):
    """
    The outcome of one discovery run over a table.

    This class collects the confirmed minimal dependencies in the order they
    were found, together with the checks that failed and a few counters.

    Attributes:
        table (str): The analysed table.
        columns (List[str]): The table columns, in table order.
        max_lhs_size (int): The largest determinant set that was enumerated.
        dependencies (List[Dependency]): Confirmed minimal dependencies in discovery order.
        failures (List[VerificationFailure]): Checks whose verification failed.
        verified (int): Number of verification queries issued.
        pruned (int): Number of candidates skipped as non-minimal.

    Methods:
        add_dependency: Appends a confirmed dependency.
        add_failure: Appends a failed check.
        count: The number of confirmed dependencies.
        statistics: A short multi-line summary.
        __str__: The dependencies, one per line.
    """

    table: str
    columns: List[str] = []
    max_lhs_size: int = 3
    dependencies: List[Dependency] = []
    failures: List[VerificationFailure] = []
    verified: int = 0
    pruned: int = 0

    def add_dependency(self, dependency: Dependency) -> None:
        self.dependencies.append(dependency)

    def add_failure(self, failure: VerificationFailure) -> None:
        self.failures.append(failure)

    @property
    def count(self) -> int:
        return len(self.dependencies)

    @property
    def summary(self) -> str:
        """
        The final summary line of a run.

        Returns:
            str: The number of dependencies found, or an explicit message when none was found.
        """
        if not self.dependencies:
            return (
                "No valid functional dependencies found "
                f"(with LHS size <= {self.max_lhs_size})."
            )
        return f"Found {self.count} valid (minimal) dependencies."

    @property
    def statistics(self) -> str:
        return (
            f"# Dependencies: {self.count}\n"
            f"# Verified: {self.verified}\n"
            f"# Pruned: {self.pruned}\n"
            f"# Failed: {len(self.failures)}"
        )

    def __str__(self) -> str:
        if not self.dependencies:
            return "No dependencies"
        return "\n" + "\n".join(f"  {dependency}" for dependency in self.dependencies)
