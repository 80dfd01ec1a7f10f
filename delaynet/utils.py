"""
Utility functions for the arrival-delay embedding network.
"""

import os
import random
import time
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import tensorflow as tf

from config.data_config import LOG_FORMAT


def set_random_seeds(seed: int = 42):
    """
    Set random seeds for reproducibility across all libraries.

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    np.random.seed(seed)
    tf.random.set_seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)

    logging.getLogger(__name__).info(f"Random seeds set to {seed}")


def setup_logging(
    log_file: Optional[Path] = None, log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure the package logger with a console handler and an optional file handler.

    Args:
        log_file: File to append log records to (None = console only)
        log_level: Logging level

    Returns:
        Configured 'delaynet' logger
    """
    logger = logging.getLogger("delaynet")
    logger.setLevel(getattr(logging, log_level.upper()))

    # Clear existing handlers, including ones attached to module loggers
    # created before this call, so each record is emitted once
    logger.handlers.clear()
    for name, child in logging.root.manager.loggerDict.items():
        if name.startswith("delaynet.") and isinstance(child, logging.Logger):
            child.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def format_time(seconds: float) -> str:
    """
    Format seconds into human-readable time string.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    seconds = int(seconds % 60)

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    else:
        return f"{minutes:02d}:{seconds:02d}"


class Timer:
    """Simple timer context manager."""

    def __init__(self, name: str = "Operation", logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.elapsed = 0.0

    def __enter__(self):
        self.start_time = time.time()
        self.logger.info(f"Starting {self.name}...")
        return self

    def __exit__(self, *args):
        self.elapsed = time.time() - self.start_time
        self.logger.info(f"{self.name} completed in {format_time(self.elapsed)}")
