#!/usr/bin/env python3
"""
Predict a maximal base-pairing RNA secondary structure from the command line.

The sequence is given as an argument or, when omitted, read as the first
whitespace-separated token on standard input. The output lists the number of
base pairs, the pairs as `(i, j)` coordinates and the dot-bracket structure.

Examples:
  - nussinov-fold GGGAAAUCCC
  - echo "GGGAAAUCCC" | python -m nussinov_fold
  - nussinov-fold --json --wobble -v GGGAAAUCCU
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
from typing import List, Optional, TextIO

# --- Third-Party Imports ---
from tqdm.contrib.logging import logging_redirect_tqdm

# --- Local Application Imports ---
from nussinov_fold.predict import FoldResult, fold_sequence
from nussinov_fold.structures import Pair
from nussinov_fold.utils.config_utils import load_folding_config
from nussinov_fold.utils.logging_utils import setup_logger, cleanup_old_logs, DEFAULT_LOG_DIR
from nussinov_fold.utils.matrix_utils import format_score_table
from nussinov_fold.utils.nucleotide_utils import normalize_sequence, non_alphabet_positions

# Set up module logger
logger = logging.getLogger(__name__)

# Loggers that emit while the DP fill progress bar is running.
FOLD_LOGGER_NAMES = (
    "nussinov_fold.predict",
    "nussinov_fold.folding.nussinov.nussinov_recurrences",
    "nussinov_fold.folding.nussinov.nussinov_traceback",
)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None) -> None:
    """
    Configures the package loggers from the CLI verbosity flags.

    Parameters
    ----------
    verbose_level : int
        -1 (``--quiet``) for ERROR, 0 for WARNING, 1 for INFO, 2 or more
        for DEBUG.
    log_file : Optional[str]
        Explicit log file. Without it, a timestamped file under `var/log/`
        is created only when `verbose_level > 0`, and log files there older
        than a week are removed first.

    Notes
    -----
    Console logging goes to stderr so stdout carries only the result.
    """
    level_map = {
        -1: logging.ERROR,
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(min(verbose_level, 2), logging.INFO)

    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    removed_logs = 0
    if should_log_to_file and log_file is None:
        removed_logs = cleanup_old_logs(DEFAULT_LOG_DIR)

    loggers_to_configure = [__name__, "nussinov_fold.utils.config_utils", *FOLD_LOGGER_NAMES]

    for logger_name in loggers_to_configure:
        setup_logger(
            logger_name,
            level=log_level,
            log_file=log_file,
            enable_file_logging=should_log_to_file,
            stream=sys.stderr,
        )

    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")
        if removed_logs:
            logger.info(f"Removed {removed_logs} old log file(s)")


# --------------------------
# Helpers
# --------------------------
def read_sequence(cli_sequence: Optional[str], stream: Optional[TextIO] = None) -> str:
    """
    Returns the raw sequence from the CLI argument or the first token of `stream`.

    Raises
    ------
    ValueError
        If no sequence is available.
    """
    if cli_sequence is not None:
        raw_sequence = cli_sequence
    else:
        if stream is None:
            stream = sys.stdin
        tokens = stream.read().split()
        if not tokens:
            raise ValueError("No sequence given on the command line or standard input.")
        raw_sequence = tokens[0]

    normalized_sequence = normalize_sequence(raw_sequence)
    if not normalized_sequence:
        raise ValueError("Sequence is empty.")

    odd_positions = non_alphabet_positions(normalized_sequence)
    if odd_positions:
        pos = odd_positions[0]
        logger.warning(
            f"{len(odd_positions)} symbol(s) outside A,C,G,U (first at position {pos}, "
            f"'{normalized_sequence[pos]}'); they will be left unpaired."
        )

    logger.info(f"Sequence read: length={len(normalized_sequence)}")
    return normalized_sequence


def format_pairs(pairs: List[Pair]) -> str:
    """Formats pairs as space-separated `(i, j)` coordinates."""
    return " ".join(f"({pr.base_i}, {pr.base_j})" for pr in pairs)


def render_text(result: FoldResult) -> str:
    return "\n".join([str(result.score), format_pairs(result.pairs), result.dot_bracket])


def render_json(result: FoldResult, include_table: bool = False) -> str:
    """
    Serializes a fold result. With `include_table`, the mirrored score table
    is added under `"score_table"` as a list of rows.
    """
    payload = {
        "sequence": result.sequence,
        "length": len(result.sequence),
        "score": result.score,
        "pairs": [list(pr.as_tuple()) for pr in result.pairs],
        "dot_bracket": result.dot_bracket,
    }
    if include_table:
        payload["score_table"] = result.state.score_matrix.symmetrized().tolist()
    return json.dumps(payload, indent=2)


# --------------------------
# Command-Line Interface
# --------------------------
def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the Nussinov prediction.
    """
    # --- Argument Parsing ---
    parser = argparse.ArgumentParser(description="Predict a maximal base-pairing RNA structure (Nussinov).")
    parser.add_argument("sequence", nargs="?", default=None,
                        help="RNA sequence (A,C,G,U; T is read as U). Read from stdin if omitted.")
    parser.add_argument("--config", default=None,
                        help="Path to a folding config YAML (defaults to package data).")
    parser.add_argument("--wobble", action="store_true", default=None,
                        help="Also allow G-U wobble pairs.")
    parser.add_argument("--min-loop", type=int, default=None,
                        help="Minimum unpaired bases enclosed by a pair (default: 4).")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of plain text.")
    parser.add_argument("--show-table", action="store_true",
                        help="Also print the filled score table (diagnostic; added as \"score_table\" with --json).")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<module>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Only log errors; stdout carries just the result")

    cli_args = parser.parse_args(argv)

    # --- Setup ---
    verbose_level = -1 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file)

    try:
        sequence = read_sequence(cli_args.sequence)
    except (ValueError, OSError) as e:
        logger.error(f"Could not read sequence: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        config = load_folding_config(
            cli_args.config,
            allow_wobble=cli_args.wobble,
            min_hairpin_unpaired=cli_args.min_loop,
        )
    except (ValueError, OSError) as e:
        logger.error(f"Failed to load folding config: {e}")
        print(f"Failed to load folding config: {e}", file=sys.stderr)
        return 2

    # --- Folding ---
    try:
        fold_loggers = [logging.getLogger(name) for name in FOLD_LOGGER_NAMES]
        with logging_redirect_tqdm(loggers=fold_loggers):
            result = fold_sequence(sequence, config=config)
    except Exception as e:
        logger.error(f"Prediction failed: {e}", exc_info=True)
        print(f"Prediction failed: {e}", file=sys.stderr)
        return 1

    # --- Output ---
    if cli_args.show_table and not cli_args.json:
        print(format_score_table(result.state.score_matrix))

    if cli_args.json:
        print(render_json(result, include_table=cli_args.show_table))
    else:
        print(render_text(result))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
