from __future__ import annotations
from typing import Tuple

import numpy as np


class ScoreTable:
    """
    Square N x N table of best pair counts for every window `[i, j]`.

    The canonical values live in the upper triangle (`i <= j`) and are stored
    in a dense NumPy integer array. The table starts zero-filled, which already
    encodes the base case for windows too short to hold a pair; the recurrence
    only ever writes windows that are long enough.
    """
    __slots__ = ("_seq_len", "_cells")

    def __init__(self, seq_len: int, fill: int = 0):
        if seq_len < 0:
            raise ValueError(f"ScoreTable length must be non-negative, got {seq_len}")
        self._seq_len = seq_len
        self._cells = np.full((seq_len, seq_len), fill, dtype=np.int64)

    @property
    def size(self) -> int:
        """Returns the sequence length N that defines the table dimensions."""
        return self._seq_len

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the table shape as a tuple `(N, N)`."""
        return self._seq_len, self._seq_len

    def _check(self, base_i: int, base_j: int) -> None:
        if base_i < 0 or base_j < 0 or base_i >= self._seq_len or base_j >= self._seq_len or base_j < base_i:
            raise IndexError(f"ScoreTable invalid index: (i={base_i}, j={base_j}) for N={self._seq_len}")

    def get(self, base_i: int, base_j: int) -> int:
        """
        Retrieves the score stored for window `[i, j]`.

        Parameters
        ----------
        base_i : int
            5' end of the window (0-based).
        base_j : int
            3' end of the window (0-based), `base_j >= base_i`.

        Returns
        -------
        int
            The best pair count recorded for the window.

        Raises
        ------
        IndexError
            If the indices fall outside the table or into the lower triangle.
        """
        self._check(base_i, base_j)
        return int(self._cells[base_i, base_j])

    def get_or_zero(self, base_i: int, base_j: int) -> int:
        """
        Like `get`, but an empty window (`base_i > base_j`) scores 0.

        This covers the left and right remainders of a split that consume
        no nucleotides, e.g. `[i, t-1]` when `t == i`.
        """
        if base_i > base_j:
            return 0
        return self.get(base_i, base_j)

    def set(self, base_i: int, base_j: int, value: int) -> None:
        """
        Stores `value` as the score of window `[i, j]`.

        Parameters
        ----------
        base_i : int
            5' end of the window (0-based).
        base_j : int
            3' end of the window (0-based).
        value : int
            Non-negative pair count.
        """
        self._check(base_i, base_j)
        if value < 0:
            raise ValueError(f"Scores are pair counts and cannot be negative, got {value}")
        self._cells[base_i, base_j] = value

    def as_array(self) -> np.ndarray:
        """Read-only view of the raw N x N array (lower triangle left at zero)."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def symmetrized(self) -> np.ndarray:
        """
        Returns a copy of the table with the lower triangle mirrored from the upper.

        Cell `(j, i)` of the result equals `(i, j)`. The folding algorithm never
        reads the mirrored half; it is a convenience for inspection and dumps.
        """
        upper = np.triu(self._cells)
        return upper + np.triu(self._cells, k=1).T
