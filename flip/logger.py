"""
Logging setup for flip.
"""
import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the "flip" logger.

    The terminal view redraws the whole screen, so with a log file the
    records go only to that file; otherwise they go to stderr.

    Args:
        level: Logging level name or number
        log_file: Optional path of a log file

    Returns:
        The configured "flip" logger
    """
    logger = logging.getLogger("flip")
    logger.setLevel(level)

    # Remove handlers from a previous call to prevent duplicate logging
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
