from nussinov_fold.folding.nussinov import NussinovFoldingConfig, NussinovFoldingEngine, make_fold_state
from nussinov_fold.predict import FoldResult, fold_sequence
from nussinov_fold.structures import Pair

__all__ = [
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "make_fold_state",
    "FoldResult",
    "fold_sequence",
    "Pair",
]
