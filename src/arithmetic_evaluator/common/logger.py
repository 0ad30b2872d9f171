"""Project-wide logger writing to standard error."""
import logging
import sys

LOGGER_NAME = "arithmetic_evaluator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(processName)s - %(message)s"


def get_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Return the named logger, attaching a stderr handler the first time.

    Standard output is reserved for results, so log records always go to stderr.

    :param str name: Logger name
    :param int level: Level applied when the logger is first configured

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(level)
    return log


logger = get_logger()
