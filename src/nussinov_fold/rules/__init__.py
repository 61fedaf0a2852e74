from nussinov_fold.rules.constraints import (
    MIN_HAIRPIN_UNPAIRED,
    can_pair,
    hairpin_size,
    is_min_hairpin_size,
    min_pair_span,
)

__all__ = [
    "MIN_HAIRPIN_UNPAIRED",
    "can_pair",
    "hairpin_size",
    "is_min_hairpin_size",
    "min_pair_span",
]
