from nussinov_fold.structures.pairing import Pair
from nussinov_fold.structures.score_table import ScoreTable

__all__ = [
    "Pair",
    "ScoreTable",
]
