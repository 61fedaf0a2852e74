from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from nussinov_fold.structures import Pair


@dataclass(frozen=True, slots=True)
class TraceResult:
    """
    Result of a traceback: the recovered pairing and its dot-bracket rendering.

    Attributes
    ----------
    pairs : List[Pair]
        Base pairs `(i, j)` with `i < j`, sorted by 5' index.
    dot_bracket : str
        Dot-bracket string of the full sequence length, e.g. ``'((....))..'``.
    """
    pairs: List[Pair]
    dot_bracket: str


def pairs_to_dotbracket(seq_len: int, pairs: Iterable[Pair]) -> str:
    """
    Renders a nested pairing as a dot-bracket string.

    Every position starts as `.`; for each pair the lower index becomes `(`
    and the higher index `)`. Nesting is not re-validated here: a
    non-crossing pairing always yields balanced, well-nested brackets.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Iterable[Pair]
        The base pairs to draw.

    Returns
    -------
    str
        The dot-bracket string, of length `seq_len`.
    """
    chars = ['.'] * seq_len
    for pr in pairs:
        lo, hi = min(pr.base_i, pr.base_j), max(pr.base_i, pr.base_j)
        chars[lo] = '('
        chars[hi] = ')'
    return ''.join(chars)


def dotbracket_to_pairs(db: str) -> Set[Tuple[int, int]]:
    """
    Parses a single-layer dot-bracket string back into `(i, j)` tuples.

    Unmatched brackets are ignored.

    Parameters
    ----------
    db : str
        A string over `(`, `)` and `.`.

    Returns
    -------
    Set[Tuple[int, int]]
        The base pairs encoded in `db`.
    """
    stack: List[int] = []
    out: Set[Tuple[int, int]] = set()
    for idx, ch in enumerate(db):
        if ch == '(':
            stack.append(idx)
        elif ch == ')':
            if stack:
                i = stack.pop()
                out.add((i, idx))
    return out


def is_nested(pairs: Iterable[Pair]) -> bool:
    """
    Checks that a pairing is a valid non-crossing secondary structure.

    A pairing is nested when every position is used by at most one pair
    and no two pairs interleave.

    Parameters
    ----------
    pairs : Iterable[Pair]
        The base pairs to check.

    Returns
    -------
    bool
        True if the pairing is nested; False on a shared base or a crossing.
    """
    ordered = sorted(pairs, key=lambda pr: (pr.base_i, pr.base_j))

    # Pairs still open at the current 5' index, innermost on top. While the
    # pairing seen so far is nested, a conflict can only be with the top.
    open_pairs: List[Pair] = []
    for pr in ordered:
        if pr.span <= 0:
            return False
        while open_pairs and open_pairs[-1].base_j < pr.base_i:
            open_pairs.pop()
        if open_pairs and (pr.shares_base(open_pairs[-1]) or pr.crosses(open_pairs[-1])):
            return False
        open_pairs.append(pr)

    return True
