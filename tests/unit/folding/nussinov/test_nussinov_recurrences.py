"""
Unit tests for the Nussinov recurrence engine.

These tests check the filled score table against hand-derived values, the
minimum-loop base case, the handling of unpairable symbols, the optional
wobble and loop-length settings, and that `evaluate_cell` derives each cell
from values already stored in the table rather than recomputing them.
"""
import random
from itertools import combinations_with_replacement

import pytest

from nussinov_fold.folding.nussinov.nussinov_fold_state import make_fold_state
from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine


# ---------------------- Fixtures ----------------------

@pytest.fixture
def engine():
    """Engine with the default strict Watson-Crick rule and loop length 4."""
    return NussinovFoldingEngine(config=NussinovFoldingConfig())


@pytest.fixture
def fill(engine):
    """Returns a helper that folds a sequence and hands back its fold state."""
    def _fill(seq, eng=None):
        state = make_fold_state(len(seq))
        (eng or engine).fill_all_matrices(seq, state)
        return state
    return _fill


# ----------------------------- Tests ---------------------------------

def test_default_config_values():
    config = NussinovFoldingConfig()
    assert config.min_hairpin_unpaired == 4
    assert config.allow_wobble is False
    assert config.verbose is False


def test_fill_empty_sequence_is_noop(fill):
    state = fill("")
    assert state.final_score() == 0


def test_fill_rejects_mismatched_state(engine):
    state = make_fold_state(5)
    with pytest.raises(ValueError):
        engine.fill_all_matrices("AUAUAU", state)


def test_fill_single_pair_at_minimum_distance(fill):
    """
    "AUAUAU": only (0, 5) is far enough apart, so S[0,5] = 1 and every other
    cell stays 0.
    """
    state = fill("AUAUAU")
    table = state.score_matrix

    for i, j in combinations_with_replacement(range(table.size), 2):
        expected = 1 if (i, j) == (0, 5) else 0
        assert table.get(i, j) == expected, (i, j)


@pytest.mark.parametrize("seq", ["AAAAA", "ACGU", "GGGGG", "A", ""])
def test_short_or_unpairable_sequences_score_zero(fill, seq):
    state = fill(seq)
    assert state.final_score() == 0


def test_short_windows_stay_zero(fill):
    """
    Windows with j - i <= 4 are never written, even when their ends pair.
    """
    seq = "GCGCGCGCGCGC"
    table = fill(seq).score_matrix

    for i, j in combinations_with_replacement(range(table.size), 2):
        if j - i <= 4:
            assert table.get(i, j) == 0


def test_hairpin_stem_scores(fill):
    """
    "GGGAAAUCCC" folds into three stacked G-C pairs around an AAAU loop.
    """
    table = fill("GGGAAAUCCC").score_matrix

    assert table.get(0, 9) == 3
    assert table.get(1, 8) == 2
    assert table.get(0, 8) == 2
    assert table.get(2, 7) == 1
    assert table.get(3, 9) == 0


def test_non_alphabet_symbols_never_pair(fill):
    """
    Lowercase letters, `T`, `N` and punctuation are accepted but unpairable.
    """
    assert fill("aaaaaauuuuuu").final_score() == 0
    assert fill("AAAAAATTTTTT").final_score() == 0
    assert fill("NNNNNNNNNN").final_score() == 0
    # Only the A at 0 and the U at 6 can pair.
    assert fill("ANNNNNU-").final_score() == 1


def test_wobble_pairs_only_when_enabled(fill):
    seq = "GAAAAU"
    assert fill(seq).final_score() == 0

    wobble_engine = NussinovFoldingEngine(config=NussinovFoldingConfig(allow_wobble=True))
    assert fill(seq, wobble_engine).final_score() == 1


def test_min_hairpin_unpaired_is_configurable(fill):
    """
    With a minimum loop of 3, (0, 4) becomes admissible in "GAAAC".
    """
    seq = "GAAAC"
    assert fill(seq).final_score() == 0

    short_loop_engine = NussinovFoldingEngine(config=NussinovFoldingConfig(min_hairpin_unpaired=3))
    assert fill(seq, short_loop_engine).final_score() == 1


def test_evaluate_cell_reads_stored_subwindow_scores(engine):
    """
    `evaluate_cell` must take sub-window scores from the table. Planting an
    artificial value for S[1,5] shows up directly in S[0,6] through the split
    that pairs 0 with 6.
    """
    seq = "AAAAAAU"
    state = make_fold_state(len(seq))
    state.score_matrix.set(1, 5, 7)

    assert engine.evaluate_cell(seq, 0, 6, state) == 8


def test_evaluate_cell_short_window_is_zero(engine):
    seq = "AUAUAU"
    state = make_fold_state(len(seq))
    assert engine.evaluate_cell(seq, 0, 4, state) == 0
    assert engine.evaluate_cell(seq, 2, 2, state) == 0


def test_evaluate_cell_prefers_unpaired_when_no_partner(engine):
    """
    When seq[j] has no compatible partner, S[i,j] = S[i,j-1].
    """
    seq = "GGGAAAUCCCA"
    state = make_fold_state(len(seq))
    NussinovFoldingEngine().fill_all_matrices(seq, state)

    assert state.score_matrix.get(0, 10) == state.score_matrix.get(0, 9) == 3


def test_scores_are_monotone_in_window(fill):
    """
    Growing a window can never lose pairs: S[i,j] >= S[i,j-1] and S[i,j] >= S[i+1,j].
    """
    rng = random.Random(7)
    seq = "".join(rng.choices("ACGU", k=30))
    table = fill(seq).score_matrix

    for i, j in combinations_with_replacement(range(table.size), 2):
        if j > i:
            assert table.get(i, j) >= table.get(i, j - 1)
            assert table.get(i, j) >= table.get(i + 1, j)


def test_score_bounded_by_half_length(fill):
    rng = random.Random(11)
    for _ in range(5):
        seq = "".join(rng.choices("ACGU", k=25))
        assert 0 <= fill(seq).final_score() <= len(seq) // 2
