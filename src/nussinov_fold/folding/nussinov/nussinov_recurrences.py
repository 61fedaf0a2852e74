from __future__ import annotations
from dataclasses import dataclass, field
import time
import logging

from tqdm import tqdm

from nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState
from nussinov_fold.rules import can_pair, is_min_hairpin_size, min_pair_span, MIN_HAIRPIN_UNPAIRED
from nussinov_fold.utils.matrix_utils import format_score_table

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NussinovFoldingConfig:
    """
    Configuration settings for the Nussinov folding algorithm.

    Attributes
    ----------
    min_hairpin_unpaired : int
        Minimum number of unpaired nucleotides enclosed by any pair. The
        default of 4 means a pair (i, j) requires `j - i >= 5`.
    allow_wobble : bool
        If True, G-U wobble pairs count as compatible. Off by default, which
        keeps the strict Watson-Crick rule.
    verbose : bool
        If True, shows a progress bar over window lengths.
    """
    min_hairpin_unpaired: int = MIN_HAIRPIN_UNPAIRED
    allow_wobble: bool = False
    verbose: bool = False


@dataclass(slots=True)
class NussinovFoldingEngine:
    """
    Fills the Nussinov score table bottom-up.

    Windows are visited in strictly increasing length, so every cell read by
    the recurrence has already reached its final value. No score is ever
    recomputed by recursion.

    Attributes
    ----------
    config : NussinovFoldingConfig
        Pairing rule and loop-length settings shared with the traceback.
    """
    config: NussinovFoldingConfig = field(default_factory=NussinovFoldingConfig)

    def fill_all_matrices(self, seq: str, state: NussinovFoldState) -> None:
        """
        Executes the Nussinov dynamic program over the whole sequence.

        Parameters
        ----------
        seq : str
            The RNA sequence to fold. Symbols outside {A, C, G, U} are
            accepted and simply never pair.
        state : NussinovFoldState
            A freshly allocated state of matching length.

        Raises
        ------
        ValueError
            If the table size does not match the sequence length.
        """
        n = len(seq)
        if state.seq_len != n:
            raise ValueError(f"Fold state sized for N={state.seq_len}, sequence has N={n}")

        if n == 0:
            logger.info("Nussinov DP: empty sequence; nothing to fill.")
            return

        start_time = time.perf_counter()
        min_span = min_pair_span(self.config.min_hairpin_unpaired)

        logger.info("=" * 60)
        logger.info(f"Nussinov DP for sequence length N={n}")
        logger.info(f"Expected complexity: O(N³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        span_iter = tqdm(range(min_span, n), desc="Nussinov DP", leave=True, disable=not show_progress)

        score_matrix = state.score_matrix
        # Window length d = j - i. Shorter windows keep their zero fill.
        for d in span_iter:
            for i in range(0, n - d):
                j = i + d
                score_matrix.set(i, j, self.evaluate_cell(seq, i, j, state))

        elapsed = time.perf_counter() - start_time
        logger.info(f"Nussinov DP completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final S[0,{n - 1}] = {state.final_score()} base pairs")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Score table:\n{format_score_table(score_matrix)}")

    def evaluate_cell(self, seq: str, i: int, j: int, state: NussinovFoldState) -> int:
        """
        Computes the best pair count for window `[i, j]` from shorter windows.

        Parameters
        ----------
        seq : str
            The RNA sequence.
        i : int
            5' end of the window.
        j : int
            3' end of the window.
        state : NussinovFoldState
            State whose table already holds every window shorter than `j - i`.

        Returns
        -------
        int
            The value of `S[i, j]`.

        Notes
        -----
        `S[i, j]` is the maximum of:
        1.  `S[i, j-1]`: base `j` is left unpaired.
        2.  `1 + S[i, t-1] + S[t+1, j-1]` for every `t` in `[i, j - min_span]`
            where `seq[t]` pairs with `seq[j]`. `S[i, t-1]` is 0 when `t == i`.

        Windows too short for `(i, j)` to enclose the minimum loop score 0.
        """
        if not is_min_hairpin_size(i, j, self.config.min_hairpin_unpaired):
            return 0
        min_span = min_pair_span(self.config.min_hairpin_unpaired)

        score_matrix = state.score_matrix
        allow_wobble = self.config.allow_wobble
        base_j = seq[j]

        # Case 1: leave j unpaired.
        best_score = score_matrix.get(i, j - 1)

        # Case 2: pair j with some t, splitting into [i, t-1] and [t+1, j-1].
        for t in range(i, j - min_span + 1):
            if not can_pair(seq[t], base_j, allow_wobble=allow_wobble):
                continue

            cand_score = 1 + score_matrix.get_or_zero(i, t - 1) + score_matrix.get_or_zero(t + 1, j - 1)
            if cand_score > best_score:
                best_score = cand_score

        return best_score
