import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO
from datetime import datetime

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Verbosity count (-v, -vv) to logging level; -1 is --quiet.
VERBOSITY_LEVELS = {
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def get_log_file_path(
        logger_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Builds the path of the log file for a logger, creating the directory if needed.

    Parameters
    ----------
    logger_name : str
        The dotted logger name (e.g. "sparse_matrix.scripts.demo_matrix").
    log_dir : Optional[Path], optional
        The directory for the file. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        If True, a `_YYYYmmdd_HHMMSS` suffix keeps successive runs apart.

    Returns
    -------
    Path
        The path of the log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = logger_name.replace(".", "_")
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
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures a logger with a console handler and an optional file handler.

    Existing handlers on the logger are removed first, so calling this twice
    does not duplicate output.

    Parameters
    ----------
    name : str
        The logger name, typically a module's `__name__`.
    level : int, optional
        The level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        An explicit log file path. Takes precedence over `enable_file_logging`.
    log_dir : Optional[Path], optional
        The directory for the generated log file when `log_file` is not given.
    enable_file_logging : bool, optional
        If True and `log_file` is None, log to a timestamped file in `log_dir`.
    stream : Optional[TextIO], optional
        The console stream. Defaults to `sys.stdout` at call time.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def configure_loggers(
    logger_names: Iterable[str],
    verbose_level: int,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Applies a verbosity count to a group of loggers.

    A file handler is attached when `verbose_level > 0` or when `log_file` is
    given; runs at `verbose_level <= 0` print only warnings (or errors at -1).

    Parameters
    ----------
    logger_names : Iterable[str]
        The loggers to configure.
    verbose_level : int
        -1 for ERROR, 0 for WARNING, 1 for INFO, 2 or more for DEBUG.
    log_file : Optional[str], optional
        An explicit log file shared by all configured loggers.
    log_dir : Optional[Path], optional
        The directory for generated log files.
    stream : Optional[TextIO], optional
        The console stream, e.g. `sys.stderr` when stdout carries data.

    Returns
    -------
    int
        The logging level that was applied.
    """
    level = VERBOSITY_LEVELS.get(max(min(verbose_level, 2), -1), logging.INFO)
    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    for logger_name in logger_names:
        setup_logger(
            logger_name,
            level=level,
            log_file=log_file,
            log_dir=log_dir,
            enable_file_logging=should_log_to_file,
            stream=stream,
        )
    return level


def set_log_level(logger: logging.Logger, level: int) -> None:
    """Update logger and all its handlers to the new level."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
