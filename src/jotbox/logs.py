"""Logging setup. curses owns the terminal, so logs go to a file."""

import os
import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(log_file: str, level: str = "INFO", to_stderr: bool = False) -> None:
    logger.remove()
    if to_stderr:
        logger.add(sys.stderr, format=LOG_FORMAT, level="WARNING")
    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
    logger.add(log_file, format=LOG_FORMAT, level=level, rotation="1 MB", retention=3)
