"""
Logging Configuration
Configures the 'gaussian_sums' logger from GAUSSIAN_SUMS_LOG_LEVEL and
GAUSSIAN_SUMS_LOG_FILE (see config.py).
"""
import logging
import sys
from typing import Optional, Union

from . import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Union[int, str] = config.LOG_LEVEL,
    log_file: Optional[str] = config.LOG_FILE,
) -> logging.Logger:
    """
    Route package logs to stdout and, when `log_file` is set, to that file.
    Calling it again replaces the handlers of the previous call.
    """
    logger = logging.getLogger("gaussian_sums")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file or "stdout")
    return logger
