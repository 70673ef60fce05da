"""Logging setup for the notice-archive command line."""

import sys

from loguru import logger

_FORMAT = "{level.icon} {message}"
_VERBOSE_FORMAT = "{level.icon} {name}:{line} {message}"


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send loguru output to stderr.

    Library modules only emit records; sinks are set up here, by the CLI.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="WARNING" if quiet else "INFO", format=_FORMAT)
