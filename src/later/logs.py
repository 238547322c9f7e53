import logging
import os
import sys
from pathlib import Path
from typing import Optional

def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False):
    """Set up logging configuration for the later package with environment-based levels."""
    # Determine log level from environment
    env_level = os.getenv('LATER_LOG_LEVEL', '').upper()
    is_debug = verbose or os.getenv('LATER_DEBUG', '').lower() in ('1', 'true', 'yes')

    # Set log level based on environment - default to WARNING for regular users
    if is_debug:
        level = logging.DEBUG
    elif env_level:
        level = getattr(logging, env_level, logging.WARNING)
    else:
        level = logging.WARNING

    log_format = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    console_formatter = logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if is_debug
        else '%(levelname)s: %(message)s'
    )

    # Console handler goes to stderr so rendered lists on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger('later')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(console_handler)

    # File handler (always detailed)
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "later.log", encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'later.{name}')
    return logging.getLogger('later')
