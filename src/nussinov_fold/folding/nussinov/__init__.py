from nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState, make_fold_state
from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from nussinov_fold.folding.nussinov.nussinov_traceback import (
    TracebackError,
    traceback_nested,
    traceback_nested_interval,
)

__all__ = [
    "NussinovFoldState",
    "make_fold_state",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "TracebackError",
    "traceback_nested",
    "traceback_nested_interval",
]
