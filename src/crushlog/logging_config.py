"""Logging configuration for crushlog.

The package logs through loguru but stays silent until the host application
calls :func:`configure_logging`.
"""

import sys
from typing import Any

from loguru import logger

LOG_FORMAT = "{level.icon} {time:HH:mm:ss} {name}:{function} {message}"


def configure_logging(*, verbose: bool = False, sink: Any = sys.stderr) -> int:
    """Enable crushlog's messages and route them to sink.

    Only records emitted from within the ``crushlog`` package are passed to
    the new sink; handlers the application added itself are left alone.

    Args:
        verbose: Include debug messages such as individual file writes.
        sink: Any loguru sink; defaults to stderr.

    Returns:
        The loguru handler id, for ``logger.remove`` when the caller is done.
    """
    logger.enable("crushlog")
    level = "DEBUG" if verbose else "INFO"
    return logger.add(sink, level=level, format=LOG_FORMAT, filter="crushlog")
