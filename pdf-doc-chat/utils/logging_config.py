#!/usr/bin/env python3
"""
Logging configuration utilities.
"""
import logging
import os
import sys

from config.settings import LOG_DIR


class FlushFileHandler(logging.FileHandler):
    """File handler that flushes after each log record."""
    def emit(self, record):
        super().emit(record)
        self.flush()


class SuppressPdf2ImageNoise(logging.Filter):
    """Filter to drop poppler 'Syntax Warning' lines surfaced by pdf2image."""
    def filter(self, record):
        return "Syntax Warning" not in record.getMessage()


def setup_logging(log_file: str, level: int = logging.INFO) -> logging.Logger:
    """
    Set up logging configuration with both file and console handlers.

    Args:
        log_file: Log file name; relative names are placed under LOG_DIR
        level: Logging level

    Returns:
        Configured logger
    """
    if not os.path.isabs(log_file):
        os.makedirs(LOG_DIR, exist_ok=True)
        log_file = os.path.join(LOG_DIR, log_file)

    # Create handlers
    stream_handler = logging.StreamHandler(sys.stdout)
    file_handler = FlushFileHandler(log_file)

    # Set consistent formatter
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    stream_handler.setFormatter(formatter)
    file_handler.setFormatter(formatter)

    # Apply to root logger (no-op if already configured)
    logging.basicConfig(level=level, handlers=[stream_handler, file_handler])
    logging.getLogger("pdf2image").addFilter(SuppressPdf2ImageNoise())

    # Third-party HTTP clients are chatty at INFO
    for noisy in ("httpx", "openai", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger(os.path.splitext(os.path.basename(log_file))[0])
