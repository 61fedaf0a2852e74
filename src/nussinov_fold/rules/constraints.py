from __future__ import annotations
from typing import Final

# Minimum number of unpaired nucleotides enclosed by a base pair.
# A pair (i, j) is only allowed when j - i - 1 >= 4, i.e. j - i >= 5.
MIN_HAIRPIN_UNPAIRED: Final[int] = 4

# ---- Pairing rules (RNA) -----------------------------------------------------

# Canonical Watson-Crick pairs, both orientations.
_WATSON_CRICK_PAIRS: Final[frozenset[str]] = frozenset({"AU", "UA", "CG", "GC"})

# G-U wobble pairs. Only admitted when a caller opts in.
_WOBBLE_PAIRS: Final[frozenset[str]] = frozenset({"GU", "UG"})


def can_pair(base_i: str, base_j: str, allow_wobble: bool = False) -> bool:
    """
    Return True if nucleotides `base_i` and `base_j` can form a base pair.

    Only the four Watson-Crick pairs (AU, UA, CG, GC) are accepted unless
    `allow_wobble` is set, in which case GU and UG are accepted as well.
    Matching is exact: lowercase letters, `T`, ambiguity codes and any other
    symbol never pair with anything.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, expected in {A, U, G, C}.
    allow_wobble : bool, optional
        Also accept G-U wobble pairs. Defaults to False.

    Returns
    -------
    bool
        True if the two symbols are compatible; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    pair_key = base_i + base_j
    if pair_key in _WATSON_CRICK_PAIRS:
        return True

    return allow_wobble and pair_key in _WOBBLE_PAIRS


def hairpin_size(i: int, j: int) -> int:
    """
    Number of nucleotides strictly between `i` and `j` (`j - i - 1`).
    """
    return j - i - 1


def is_min_hairpin_size(i: int, j: int, min_unpaired: int = MIN_HAIRPIN_UNPAIRED) -> bool:
    """
    Check whether a candidate pair (i, j) encloses enough unpaired bases.

    Parameters
    ----------
    i, j : int
        Zero-based indices with i < j.
    min_unpaired : int, optional
        Minimum enclosed loop length. Defaults to `MIN_HAIRPIN_UNPAIRED` (4).

    Returns
    -------
    bool
        True if `j - i - 1 >= min_unpaired`.
    """
    return hairpin_size(i, j) >= min_unpaired


def min_pair_span(min_unpaired: int = MIN_HAIRPIN_UNPAIRED) -> int:
    """Smallest `j - i` at which a pair (i, j) becomes possible."""
    return min_unpaired + 1
