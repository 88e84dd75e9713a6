"""
Logging setup for command-line use.

The library only creates named loggers; handlers are attached here by the
CLI so embedding applications keep control of their own logging.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(verbose: bool = False) -> logging.Handler:
    """
    Send package logs to stderr, keeping stdout clean for reports.

    Args:
        verbose: Show INFO messages instead of only warnings and errors

    Returns:
        The installed handler
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    package_logger = logging.getLogger('log_forensics')
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)
    package_logger.propagate = False
    return handler
