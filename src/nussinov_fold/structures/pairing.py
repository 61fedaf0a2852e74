from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Immutable (i, j) base pair of a Nussinov structure.

    Parameters
    ----------
    base_i : int
        5' index (0-based).
    base_j : int
        3' index (0-based), `base_j > base_i` for pairs produced by traceback.

    Notes
    -----
    `span` is `j - i`; a pair is only admissible when `span >= 5`.
    """
    base_i: int
    base_j: int

    @property
    def span(self) -> int:
        """Index distance `j - i` between the two paired bases."""
        return self.base_j - self.base_i

    def as_tuple(self) -> tuple[int, int]:
        """
        Pair indices as a plain `(i, j)` tuple.

        Returns
        -------
        tuple[int, int]
            The pair ``(i, j)``.
        """
        return self.base_i, self.base_j

    def shares_base(self, other: Pair) -> bool:
        """True if the two pairs use a common sequence position."""
        return bool({self.base_i, self.base_j} & {other.base_i, other.base_j})

    def crosses(self, other: Pair) -> bool:
        """
        Check whether two pairs interleave (form a pseudoknot).

        Pairs (a, b) and (c, d) with a < c cross when c < b < d. Nested or
        disjoint pairs never cross.

        Parameters
        ----------
        other : Pair
            The pair to compare against.

        Returns
        -------
        bool
            True if exactly one endpoint of `other` lies strictly inside `self`.
        """
        first, second = sorted((self, other), key=lambda pr: pr.base_i)
        return second.base_i < first.base_j < second.base_j
