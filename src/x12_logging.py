"""
Logger setup for the x12json service.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "x12json"


def setup_logger(level: Union[str, int] = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the service logger with a console handler and, optionally, a file handler.

    Args:
        level: Log level name or number for the service logger
        log_dir: Directory for a timestamped log file; no file is written when None

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    # Clear existing handlers so repeated setup does not duplicate output
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"x12json_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
        logger.info(f"Log file created: {log_file}")

    return logger


def get_logger() -> logging.Logger:
    """Get the existing logger instance."""
    return logging.getLogger(LOGGER_NAME)
