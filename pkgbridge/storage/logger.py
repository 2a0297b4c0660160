"""
Logging configuration using loguru.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(log_dir: Path, verbose: bool = False, quiet: bool = False) -> logger:
    """
    Setup application logging.

    Args:
        log_dir: Directory for log files
        verbose: Show DEBUG messages (every command run) on the console
        quiet: Only show warnings and errors on the console

    Returns:
        Configured logger instance
    """
    logger.remove()

    if verbose:
        console_level = "DEBUG"
    elif quiet:
        console_level = "WARNING"
    else:
        console_level = "INFO"
    logger.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT)

    # Everything, including each package-manager command and its exit code
    log_file = log_dir / "pkgbridge.log"
    logger.add(log_file, rotation="10 MB", retention="30 days", level="DEBUG", format=FILE_FORMAT)

    error_log = log_dir / "pkgbridge_errors.log"
    logger.add(error_log, rotation="10 MB", retention="90 days", level="ERROR", format=FILE_FORMAT)

    logger.debug(f"Log files: {log_file}, {error_log}")

    return logger
