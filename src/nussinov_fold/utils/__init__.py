from nussinov_fold.utils.logging_utils import setup_logger, cleanup_old_logs, DEFAULT_LOG_DIR
from nussinov_fold.utils.nucleotide_utils import normalize_base, normalize_sequence, non_alphabet_positions

__all__ = [
    "setup_logger",
    "cleanup_old_logs",
    "DEFAULT_LOG_DIR",
    "normalize_base",
    "normalize_sequence",
    "non_alphabet_positions",
]
