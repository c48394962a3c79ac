#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/utils/timing.py
"""Timing helpers for DEBUG logging."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the enclosed block took, at DEBUG level.

    Nothing is measured when ``logger`` is not enabled for DEBUG.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the message
    operation : str
        Description of the timed block, e.g. ``"Parsing"``

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Parsing"):
        ...     tree = parse(text)
        ... # Logs: "Parsing completed in 0.01s"

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
