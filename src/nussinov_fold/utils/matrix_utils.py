from __future__ import annotations

from nussinov_fold.structures import ScoreTable


def format_score_table(table: ScoreTable, symmetric: bool = True) -> str:
    """
    Renders a score table as whitespace-separated rows of integers.

    This is a diagnostic dump only; nothing in the folding pipeline parses it.

    Parameters
    ----------
    table : ScoreTable
        The (usually filled) table to render.
    symmetric : bool, optional
        Mirror the upper triangle into the lower one before printing,
        by default True.

    Returns
    -------
    str
        One line per row, values separated by single spaces. Empty for N = 0.
    """
    cells = table.symmetrized() if symmetric else table.as_array()
    width = max((len(str(int(v))) for v in cells.flat), default=1)
    return "\n".join(" ".join(f"{int(v):>{width}d}" for v in row) for row in cells)
