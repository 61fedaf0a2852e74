from nussinov_fold.folding.common_traceback import (
    TraceResult,
    dotbracket_to_pairs,
    is_nested,
    pairs_to_dotbracket,
)

__all__ = [
    "TraceResult",
    "dotbracket_to_pairs",
    "is_nested",
    "pairs_to_dotbracket",
]
