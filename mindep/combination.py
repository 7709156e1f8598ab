"""
Candidate left-hand side enumeration.

The discovery engine evaluates determinant sets from the smallest to the
largest so that a superset is never verified before all of its subsets. For
``n`` attributes and a maximum size ``K`` the generator yields
``C(n, 1) + ... + C(n, K)`` sets, i.e. ``O(n^K)``; the blow-up is inherent to
exhaustive minimal-FD discovery and is not bounded here.
"""

from itertools import combinations
from typing import Iterator, List, Sequence, Tuple

from mindep.util.errors import ConfigurationException

AttributeSet = Tuple[str, ...]


def validate_max_size(max_size: int) -> None:
    """
    Rejects a maximum LHS size that is not a positive integer.

    Raises:
        ConfigurationException: If ``max_size`` is not an int or is smaller than 1.
    """
    if isinstance(max_size, bool) or not isinstance(max_size, int):
        raise ConfigurationException(
            f"max_lhs_size must be an integer, got {max_size!r}"
        )
    if max_size < 1:
        raise ConfigurationException(f"max_lhs_size must be >= 1, got {max_size}")


def _check_attributes(attributes: Sequence[str]) -> None:
    if len(set(attributes)) != len(attributes):
        raise ConfigurationException(f"Duplicate attribute names in {list(attributes)}")


def iter_strata(
    attributes: Sequence[str], max_size: int
) -> Iterator[Tuple[int, List[AttributeSet]]]:
    """
    Yields the candidate strata, one per subset size, from size 1 to ``max_size``.

    Args:
        attributes (Sequence[str]): The ordered table attributes.
        max_size (int): The largest subset size to produce.

    Returns:
        Iterator[Tuple[int, List[AttributeSet]]]: ``(size, subsets)`` pairs where
        the subsets keep the original attribute order and are listed in
        lexicographic order of attribute positions.
    """
    validate_max_size(max_size)
    _check_attributes(attributes)
    for size in range(1, min(max_size, len(attributes)) + 1):
        yield size, list(combinations(attributes, size))


def generate_combinations(
    attributes: Sequence[str], max_size: int = 3
) -> List[AttributeSet]:
    """
    Returns every non-empty subset of ``attributes`` with at most ``max_size``
    members, ordered by non-decreasing size. The sequence is deterministic:
    repeated calls with the same inputs give the same result.
    """
    return [
        subset for _, stratum in iter_strata(attributes, max_size) for subset in stratum
    ]


def proper_subsets(attributes: Sequence[str]) -> Iterator[AttributeSet]:
    """
    Yields the ``2^|S| - 2`` non-empty proper subsets of ``attributes`` by
    walking the bitmasks strictly between the empty and the full mask.
    """
    n = len(attributes)
    full_mask = (1 << n) - 1
    for mask in range(1, full_mask):
        yield tuple(attributes[b] for b in range(n) if mask & (1 << b))
