import logging
import sys
import time
from pathlib import Path
from typing import Optional, TextIO
from datetime import datetime

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger(__name__)


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Builds the log file path for a logger, creating the directory if needed.

    Parameters
    ----------
    module_name : str
        Logger name, e.g. "nussinov_fold.folding.nussinov.nussinov_recurrences".
        Dots become underscores in the filename.
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        Append `_YYYYmmdd_HHMMSS` to the filename, by default True.

    Returns
    -------
    Path
        The full path of the log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures a named logger with a console handler and an optional file handler.

    Existing handlers on the logger are removed first, so calling this twice
    for the same name does not duplicate output.

    Parameters
    ----------
    name : str
        The name of the logger, typically `__name__` of the module to configure.
    level : int, optional
        Base level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path. Overrides the generated path.
    log_dir : Optional[Path], optional
        Directory for the generated log file when `log_file` is not given.
    enable_file_logging : bool, optional
        Create a timestamped log file in `log_dir` when `log_file` is not
        given, by default True.
    console_level : Optional[int], optional
        Level override for the console handler.
    file_level : Optional[int], optional
        Level override for the file handler.
    stream : Optional[TextIO], optional
        Console stream, by default `sys.stdout`.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    configured = logging.getLogger(name)
    configured.setLevel(level)
    if configured.hasHandlers():
        configured.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    configured.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        configured.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        configured.addHandler(file_handler)

    return configured


def cleanup_old_logs(log_dir: Optional[Path] = None, days_to_keep: int = 7) -> int:
    """
    Deletes `*.log` files older than `days_to_keep` days.

    Parameters
    ----------
    log_dir : Optional[Path], optional
        Directory to clean. Defaults to `DEFAULT_LOG_DIR`.
    days_to_keep : int, optional
        Maximum age in days, by default 7.

    Returns
    -------
    int
        Number of files removed.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    if not log_dir.exists():
        return 0

    cutoff_time = time.time() - (days_to_keep * 86400)

    removed = 0
    for log_file in log_dir.glob("*.log"):
        if log_file.stat().st_mtime < cutoff_time:
            log_file.unlink()
            removed += 1
            logger.info(f"Removed old log: {log_file}")

    return removed
