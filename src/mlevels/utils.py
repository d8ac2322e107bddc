"""Common functions and utilities for mlevels.

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Optional

logger = logging.getLogger(__name__)


def log_step_start(
    step_name: str,
    input_files: Optional[str] = None,
    output: Optional[str] = None,
    **kwargs,
) -> None:
    """Add information about the start of a mlevels step to the logs.

    :param step_name: name of the step that is starting
    :param input_files: optional path to the input
    :param output: optional path to output
    :param **kwargs: any additional parameters that you wish to log
    :rtype: None
    """
    from mlevels import __version__

    logger.info("Start mlevels %s %s", step_name, __version__)

    if input_files is not None:
        logger.info("Input file %s", input_files)

    if output is not None:
        logger.info("Output %s", output)

    if kwargs:
        params = [f"{key.replace('_', '-')}={value}" for key, value in kwargs.items()]
        logger.info("Parameters:%s", ",".join(params))


def timer(func):
    """Time the different steps of a function."""

    @wraps(func)
    def wrapper(*args, **kwds):
        start_time = time.perf_counter()
        res = func(*args, **kwds)
        run_time = time.perf_counter() - start_time
        logger.info("Finished mlevels %s in %.2fs", func.__name__, run_time)
        return res

    return wrapper
