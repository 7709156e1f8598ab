from __future__ import annotations

from typing import Iterable, List, Tuple

from pydantic import model_validator

from mindep.util.base_model import BaseModel


def canonical_key(attributes: Iterable[str]) -> Tuple[str, ...]:
    """
    Returns the order-insensitive key of an attribute set: the sorted tuple of
    attribute names. Names may contain commas, so they are never joined.
    """
    return tuple(sorted(attributes))


class Dependency(BaseModel):
    """
    A functional dependency ``determinants -> dependent`` observed in a table.

    Attributes:
        determinants (List[str]): The left-hand side, in table column order.
        dependent (str): The single right-hand side attribute.
    """

    determinants: List[str]
    dependent: str

    @model_validator(mode="after")
    def _check_non_trivial(self) -> Dependency:
        if not self.determinants:
            raise ValueError("A dependency needs at least one determinant")
        if self.dependent in self.determinants:
            raise ValueError(
                f"Trivial dependency: {self.dependent} is one of its determinants"
            )
        return self

    @classmethod
    def create(cls, dependent: str, determinants: Iterable[str]) -> Dependency:
        """
        Creates an instance of Dependency.

        Args:
            dependent (str): The determined attribute.
            determinants (Iterable[str]): The determining attributes.

        Returns:
            Dependency: The dependency.
        """
        return cls(dependent=dependent, determinants=list(determinants))

    @property
    def key(self) -> Tuple[str, ...]:
        """The canonical key of the left-hand side."""
        return canonical_key(self.determinants)

    @property
    def size(self) -> int:
        """The number of determinant attributes."""
        return len(self.determinants)

    def __str__(self) -> str:
        return f"{','.join(self.determinants)} -> {self.dependent}"
