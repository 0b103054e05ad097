"""
Logging setup for the blockscope CLI.

Library code logs through the loguru logger; the package disables its
own records until setup_logger() is called, so importing blockscope
never writes to stderr.
"""

import contextlib
import os
import sys
from time import perf_counter

from loguru import logger


LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> | {message}"


def setup_logger(debug: bool = False) -> None:
    """
    Route blockscope logs to stderr.

    Args:
        debug: Log at DEBUG instead of WARNING. BLOCKSCOPE_LOG_LEVEL
            overrides the non-debug level.
    """
    # Clear existing sinks to avoid duplicates
    logger.remove()

    level = "DEBUG" if debug else os.getenv("BLOCKSCOPE_LOG_LEVEL", "WARNING").upper()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=None, catch=True)
    logger.enable("blockscope")

    logger.debug("Logger initialized at {}", level)


@contextlib.contextmanager
def time_block(block_name: str, *args):
    """
    A context manager to time the execution of a code block and log the result.

    block_name may hold "{}" placeholders filled from args when the
    message is actually logged.
    """

    logger.debug("Starting " + block_name, *args)
    start_time = perf_counter()

    try:
        yield
    finally:
        duration_ms = int((perf_counter() - start_time) * 1000)
        logger.debug("Finished " + block_name + ". Timing(ms)={}", *args, duration_ms)
