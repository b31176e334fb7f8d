"""
Logging setup shared by the API server and the statement CLI.

The API logs to stdout; the CLI keeps stdout for its JSON output and logs
to a file under ``Config.LOG_DIR`` instead.
"""

import logging
import sys
from typing import Mapping, Optional
from config import config

# Libraries that log request and parser chatter at INFO
QUIET_LOGGERS = ('multipart', 'httpx', 'fitz')


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Replace the root logger's handlers with a console and/or file handler.

    Args:
        log_level: Level name; defaults to ``LOG_LEVEL`` from the environment
        log_file: File name inside ``LOG_DIR``, e.g. "statement_analyzer.log"
        console_output: Log to stdout

    Returns:
        The root logger
    """
    level = getattr(logging, (log_level or config.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        # Repeated CLI runs in one process would otherwise leak log files
        if isinstance(handler, logging.FileHandler):
            handler.close()

    formatter = logging.Formatter(fmt=config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        handlers.append(logging.FileHandler(config.get_log_path(log_file), mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_stats(logger: logging.Logger, title: str, stats: Mapping[str, int]) -> None:
    """Log an extraction stats dict as an aligned block, one counter per line."""
    logger.info(title)
    width = max((len(key) for key in stats), default=0) + 2
    for key, value in stats.items():
        label = key.replace('_', ' ').capitalize() + ':'
        logger.info(f"{label:<{width}} {value}")
