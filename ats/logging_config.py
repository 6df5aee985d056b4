"""Logging setup shared by the API and the services."""

import logging
from pathlib import Path

from ats.config import Settings


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the "ats" logger hierarchy.

    Console output at the configured level, plus a file handler that keeps
    errors and skipped-record warnings under the log directory.

    Args:
        settings: Application settings.

    Returns:
        The configured "ats" logger.
    """
    logger = logging.getLogger("ats")
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Avoid duplicate handlers on reload
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(exist_ok=True)
    file_handler = logging.FileHandler(logs_dir / "ats_errors.log")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
