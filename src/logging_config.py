"""
Logging setup for the itinerary map generator.

Modules log through logging.getLogger(__name__); entry points (the CLI
script and the web app) call one of the functions here once.

Log levels:
    DEBUG: Prompts, raw responses, placement adjustments
    INFO: Run progress (status transitions, counts, output files)
    WARNING: Non-fatal issues (skipped entries, dropped characters, repaired collisions)
    ERROR: Run failures and the underlying upstream causes
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that log every HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "urllib3")


def _build_handlers(level: int, log_file: Optional[Path], console_output: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure and return a logger.

    Calling this again for the same name replaces its handlers.

    Args:
        name: Logger name ("" for the root logger)
        level: Logging level (default: INFO)
        log_file: Optional file to append to
        console_output: Whether to log to stdout (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(level, log_file, console_output):
        logger.addHandler(handler)

    return logger


def quiet_noisy_loggers(level: int = logging.WARNING) -> None:
    """Raise the level of chatty HTTP client loggers."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_run_logger(run_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger for a CLI run directory.

    Args:
        run_dir: Run directory path; the log goes to run_dir/run.log
        level: Logging level (default: INFO)

    Returns:
        Root logger with console and file output
    """
    logger = setup_logging("", level=level, log_file=run_dir / "run.log", console_output=True)
    if level > logging.DEBUG:
        quiet_noisy_loggers()
    return logger
