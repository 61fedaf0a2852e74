from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from nussinov_fold.folding.common_traceback import TraceResult, pairs_to_dotbracket
from nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState
from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig
from nussinov_fold.rules import can_pair, min_pair_span
from nussinov_fold.structures import Pair, ScoreTable

logger = logging.getLogger(__name__)

Window = Tuple[int, int]


class TracebackError(AssertionError):
    """Raised when a filled score table admits no valid traceback step."""


def traceback_nested(
    seq: str,
    state: NussinovFoldState,
    config: Optional[NussinovFoldingConfig] = None,
) -> TraceResult:
    """
    Reconstructs one optimal pairing for the whole sequence.

    Starts from window `[0, N-1]` of a score table filled by
    `NussinovFoldingEngine`. The result contains exactly `S[0, N-1]` pairs.

    Parameters
    ----------
    seq : str
        The RNA sequence that was folded.
    state : NussinovFoldState
        The filled fold state.
    config : Optional[NussinovFoldingConfig]
        Must match the config used for the fill. Defaults to the standard
        config (strict Watson-Crick, minimum loop of 4).

    Returns
    -------
    TraceResult
        Sorted base pairs and the full-length dot-bracket string.
    """
    return _traceback_core_with_seed(seq, state, [(0, len(seq) - 1)], config)


def traceback_nested_interval(
    seq: str,
    state: NussinovFoldState,
    i: int,
    j: int,
    config: Optional[NussinovFoldingConfig] = None,
) -> TraceResult:
    """
    Reconstructs one optimal pairing restricted to window `[i, j]`.

    The dot-bracket string still spans the full sequence; positions outside
    the window are left unpaired.
    """
    return _traceback_core_with_seed(seq, state, [(i, j)], config)


def _find_pair_partner(
    seq: str,
    score_matrix: ScoreTable,
    i: int,
    j: int,
    min_span: int,
    allow_wobble: bool,
) -> Optional[int]:
    """
    Leftmost `t` in `[i, j - min_span]` whose pairing with `j` explains `S[i, j]`.

    Returns None when no split point satisfies
    `S[i, j] == S[i, t-1] + S[t+1, j-1] + 1`.
    """
    target = score_matrix.get(i, j)
    for t in range(i, j - min_span + 1):
        if not can_pair(seq[t], seq[j], allow_wobble=allow_wobble):
            continue
        if target == score_matrix.get_or_zero(i, t - 1) + score_matrix.get_or_zero(t + 1, j - 1) + 1:
            return t
    return None


def _traceback_core_with_seed(
    seq: str,
    state: NussinovFoldState,
    seed_windows: Iterable[Window],
    config: Optional[NussinovFoldingConfig],
) -> TraceResult:
    """
    Stack-based traceback over the score table.

    Each popped window `[i, j]` is resolved by one of three transitions:

    - empty (`j <= i`): nothing to do;
    - skip (`S[i, j] == S[i, j-1]`): `j` is unpaired, continue with `[i, j-1]`;
    - pair: the leftmost compatible `t` satisfying the optimality equation
      is paired with `j`, and `[i, t-1]`, `[t+1, j-1]` are pushed.

    An explicit stack replaces recursion, so long sequences do not hit the
    interpreter's recursion limit.

    Raises
    ------
    TracebackError
        If a window matches neither the skip nor the pair transition, which
        means the table was not produced by the recurrence.
    """
    if config is None:
        config = NussinovFoldingConfig()

    seq_len = len(seq)
    if seq_len == 0:
        return TraceResult(pairs=[], dot_bracket="")

    if state.seq_len != seq_len:
        raise ValueError(f"Fold state sized for N={state.seq_len}, sequence has N={seq_len}")

    score_matrix = state.score_matrix
    min_span = min_pair_span(config.min_hairpin_unpaired)

    pairs: List[Pair] = []
    stack: List[Window] = list(seed_windows)

    while stack:
        i, j = stack.pop()

        if j <= i:
            continue

        # j unpaired in the chosen optimum.
        if score_matrix.get(i, j) == score_matrix.get(i, j - 1):
            stack.append((i, j - 1))
            continue

        t = _find_pair_partner(seq, score_matrix, i, j, min_span, config.allow_wobble)
        if t is None:
            raise TracebackError(
                f"Inconsistent score table: no transition explains S[{i},{j}]={score_matrix.get(i, j)}"
            )

        pairs.append(Pair(t, j))
        stack.append((t + 1, j - 1))
        stack.append((i, t - 1))

    ordered_pairs = sorted(pairs, key=lambda pr: (pr.base_i, pr.base_j))
    logger.debug(f"Traceback recovered {len(ordered_pairs)} pairs")

    return TraceResult(pairs=ordered_pairs, dot_bracket=pairs_to_dotbracket(seq_len, ordered_pairs))
