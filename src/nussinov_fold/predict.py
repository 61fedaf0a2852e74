from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
from typing import List, Optional

from nussinov_fold.folding.common_traceback import dotbracket_to_pairs
from nussinov_fold.folding.nussinov import (
    NussinovFoldState,
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    make_fold_state,
    traceback_nested,
)
from nussinov_fold.structures import Pair

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FoldResult:
    """
    Everything produced by folding one sequence.

    Attributes
    ----------
    sequence : str
        The folded sequence, exactly as passed in.
    score : int
        Maximum number of base pairs, `S[0, N-1]`.
    pairs : List[Pair]
        One optimal pairing, sorted by 5' index. `len(pairs) == score`.
    dot_bracket : str
        Dot-bracket rendering of `pairs`.
    state : NussinovFoldState
        The filled score table, kept for diagnostics.
    """
    sequence: str
    score: int
    pairs: List[Pair]
    dot_bracket: str
    state: NussinovFoldState = field(repr=False)


def fold_sequence(seq: str, config: Optional[NussinovFoldingConfig] = None) -> FoldResult:
    """
    Runs fill, traceback and rendering for a single sequence.

    Parameters
    ----------
    seq : str
        The RNA sequence. Any symbol is accepted; only A/U and C/G (plus G/U
        when wobble pairing is enabled) ever pair.
    config : Optional[NussinovFoldingConfig]
        Folding settings. Defaults to strict Watson-Crick pairing with a
        minimum loop of 4.

    Returns
    -------
    FoldResult
        Score, pairs and dot-bracket string of one optimal structure.
    """
    if config is None:
        config = NussinovFoldingConfig()

    start_time = time.perf_counter()

    state = make_fold_state(len(seq))
    NussinovFoldingEngine(config=config).fill_all_matrices(seq, state)
    trace_result = traceback_nested(seq, state, config=config)

    score = state.final_score()
    if len(trace_result.pairs) != score:
        raise AssertionError(f"Traceback produced {len(trace_result.pairs)} pairs for score {score}")
    if dotbracket_to_pairs(trace_result.dot_bracket) != {pr.as_tuple() for pr in trace_result.pairs}:
        raise AssertionError(f"Dot-bracket {trace_result.dot_bracket!r} does not encode the traced pairs")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Folded N={len(seq)} in {elapsed:.2f}s: {score} base pairs")

    return FoldResult(
        sequence=seq,
        score=score,
        pairs=trace_result.pairs,
        dot_bracket=trace_result.dot_bracket,
        state=state,
    )
