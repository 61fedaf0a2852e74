"""
Unit tests for the Nussinov traceback.

Each case fills a real score table with `NussinovFoldingEngine` and then
checks that `traceback_nested` recovers the expected pairing: the reference
scenarios, the leftmost tie-break, interval tracing, consistency with the
wobble setting, and the guard against inconsistent tables.
"""
import pytest

from nussinov_fold.folding.common_traceback import is_nested
from nussinov_fold.folding.nussinov.nussinov_fold_state import make_fold_state
from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingEngine, NussinovFoldingConfig
from nussinov_fold.folding.nussinov.nussinov_traceback import (
    TracebackError,
    traceback_nested,
    traceback_nested_interval,
)
from nussinov_fold.structures import Pair


# ---------------------- Fixtures ----------------------

@pytest.fixture
def folded():
    """Returns a helper that fills the table for `seq` and returns the state."""
    def _folded(seq, config=None):
        state = make_fold_state(len(seq))
        NussinovFoldingEngine(config=config or NussinovFoldingConfig()).fill_all_matrices(seq, state)
        return state
    return _folded


# ----------------------------- Tests ---------------------------------

def test_traceback_empty_sequence(folded):
    result = traceback_nested("", folded(""))
    assert result.pairs == []
    assert result.dot_bracket == ""


@pytest.mark.parametrize(
    "seq,expected_pairs,expected_db",
    [
        ("AAAAA", [], "....."),
        ("AUAUAU", [Pair(0, 5)], "(....)"),
        ("ACGU", [], "...."),
        ("GGGAAAUCCC", [Pair(0, 9), Pair(1, 8), Pair(2, 7)], "(((....)))"),
        ("AUAAAAAU", [Pair(0, 7), Pair(1, 6)], "((....))"),
    ],
)
def test_traceback_reference_structures(folded, seq, expected_pairs, expected_db):
    result = traceback_nested(seq, folded(seq))

    assert result.pairs == expected_pairs
    assert result.dot_bracket == expected_db


def test_traceback_leftmost_tie_break(folded):
    """
    In "AAAAAAU" the U can pair with the A at 0 or at 1 for the same score;
    the scan picks the smallest partner.
    """
    seq = "AAAAAAU"
    result = traceback_nested(seq, folded(seq))

    assert result.pairs == [Pair(0, 6)]
    assert result.dot_bracket == "(.....)"


def test_traceback_pair_count_matches_score(folded):
    seq = "GGGAAAUCCCAGCUAGCUAGGAUCCAUGCAAUGC"
    state = folded(seq)
    result = traceback_nested(seq, state)

    assert len(result.pairs) == state.final_score()
    assert is_nested(result.pairs)
    for pr in result.pairs:
        assert pr.base_j - pr.base_i >= 5


def test_traceback_is_deterministic(folded):
    seq = "GCAUGCAUGCAUGCAUGCAUGCAU"
    first = traceback_nested(seq, folded(seq))
    second = traceback_nested(seq, folded(seq))

    assert first == second


def test_traceback_pairs_are_sorted(folded):
    seq = "GGGAAAUCCCGGGAAAUCCC"
    state = folded(seq)
    result = traceback_nested(seq, state)

    assert result.pairs == sorted(result.pairs, key=lambda pr: (pr.base_i, pr.base_j))
    assert len(result.pairs) == state.final_score() >= 6


def test_traceback_with_wobble_config(folded):
    """
    The traceback must use the same pairing rule as the fill.
    """
    seq = "GAAAAU"
    config = NussinovFoldingConfig(allow_wobble=True)
    result = traceback_nested(seq, folded(seq, config), config=config)

    assert result.pairs == [Pair(0, 5)]
    assert result.dot_bracket == "(....)"


def test_traceback_nested_interval(folded):
    """
    Tracing a sub-window keeps the full-length dot-bracket but only draws
    pairs inside the window.
    """
    seq = "GGGAAAUCCC"
    result = traceback_nested_interval(seq, folded(seq), 1, 8)

    assert result.pairs == [Pair(1, 8), Pair(2, 7)]
    assert result.dot_bracket == ".((....))."


def test_traceback_inconsistent_table_raises():
    """
    A score that no transition can explain signals a corrupted table.
    """
    seq = "AAAAAA"
    state = make_fold_state(len(seq))
    state.score_matrix.set(0, 5, 1)

    with pytest.raises(TracebackError):
        traceback_nested(seq, state)


def test_traceback_error_is_assertion_error():
    assert issubclass(TracebackError, AssertionError)


def test_traceback_rejects_mismatched_state():
    with pytest.raises(ValueError):
        traceback_nested("AUAUAU", make_fold_state(4))


def test_traceback_long_unpaired_chain_does_not_recurse():
    """
    An all-zero table for a long unpairable sequence yields a skip chain of
    N steps; the explicit work stack handles it without recursion limits.
    """
    seq = "A" * 5000
    state = make_fold_state(len(seq))

    result = traceback_nested(seq, state)

    assert result.pairs == []
    assert result.dot_bracket == "." * 5000
