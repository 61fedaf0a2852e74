from __future__ import annotations
from dataclasses import dataclass

from nussinov_fold.structures import ScoreTable


@dataclass(frozen=True, slots=True)
class NussinovFoldState:
    """
    Holds the DP table for one Nussinov fold.

    Each folded sequence gets its own state; the table is owned by it and is
    discarded with it.

    Attributes
    ----------
    score_matrix : ScoreTable
        `score_matrix[i, j]` is the maximum number of non-crossing base pairs
        that the window `[i, j]` can form.
    """
    score_matrix: ScoreTable

    @property
    def seq_len(self) -> int:
        return self.score_matrix.size

    def final_score(self) -> int:
        """Best pair count for the whole sequence, 0 for an empty one."""
        if self.seq_len == 0:
            return 0
        return self.score_matrix.get(0, self.seq_len - 1)


def make_fold_state(seq_len: int) -> NussinovFoldState:
    """
    Allocates a zero-filled score table for a sequence of length N.

    Parameters
    ----------
    seq_len : int
        Sequence length N.

    Returns
    -------
    NussinovFoldState
        A fresh state whose table holds 0 in every cell.

    Notes
    -----
    No separate pass is needed for windows shorter than the minimum pair
    span: they keep their zero fill, and the recurrence engine never writes
    them.
    """
    return NussinovFoldState(score_matrix=ScoreTable(seq_len, fill=0))
