from typing import Dict, Iterator, Sequence, Set, Tuple

from mindep.combination import proper_subsets
from mindep.fd.dependency import canonical_key


class DependencyIndex:
    """
    The dependencies confirmed so far during one discovery run, keyed by the
    determined attribute.

    Maps each right-hand side attribute to the canonical keys of the
    left-hand sides known to determine it. The index lives only as long as the
    run that owns it. Invariant: for a given right-hand side, no recorded
    left-hand side is a proper superset of another recorded one.
    """

    def __init__(self) -> None:
        self._found: Dict[str, Set[Tuple[str, ...]]] = {}

    def contains(self, lhs: Sequence[str], rhs: str) -> bool:
        return canonical_key(lhs) in self._found.get(rhs, set())

    def has_determining_subset(self, lhs: Sequence[str], rhs: str) -> bool:
        """
        Checks whether a non-empty proper subset of ``lhs`` is already known to
        determine ``rhs``.

        Every proper subset is checked, not only single attributes, since a
        smaller determining set of any size makes ``lhs -> rhs`` non-minimal.

        Args:
            lhs (Sequence[str]): The candidate left-hand side.
            rhs (str): The candidate right-hand side.

        Returns:
            bool: True if the candidate is not minimal and should be skipped.
        """
        keys = self._found.get(rhs)
        if not keys:
            return False
        return any(canonical_key(subset) in keys for subset in proper_subsets(lhs))

    def add(self, lhs: Sequence[str], rhs: str) -> bool:
        """
        Records that ``lhs`` determines ``rhs``.

        Returns:
            bool: False if the exact dependency was already recorded.

        Raises:
            ValueError: If the dependency is trivial or a proper subset of
                ``lhs`` is already recorded for ``rhs``.
        """
        if rhs in lhs:
            raise ValueError(f"Trivial dependency {','.join(lhs)} -> {rhs}")
        if self.has_determining_subset(lhs, rhs):
            raise ValueError(
                f"{','.join(lhs)} -> {rhs} is not minimal for the recorded dependencies"
            )
        keys = self._found.setdefault(rhs, set())
        key = canonical_key(lhs)
        if key in keys:
            return False
        keys.add(key)
        return True

    def items(self) -> Iterator[Tuple[Tuple[str, ...], str]]:
        """Yields ``(lhs_key, rhs)`` pairs sorted by right-hand side and key."""
        for rhs in sorted(self._found):
            for key in sorted(self._found[rhs]):
                yield key, rhs

    def __len__(self) -> int:
        return sum(len(keys) for keys in self._found.values())


def has_determining_subset(lhs: Sequence[str], rhs: str, index: DependencyIndex) -> bool:
    """Functional form of :meth:`DependencyIndex.has_determining_subset`."""
    return index.has_determining_subset(lhs, rhs)
