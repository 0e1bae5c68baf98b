"""
Logging setup for applications using roswire.

The library itself only creates module loggers under the ``roswire``
namespace; nothing is printed until the application configures logging,
either through its own setup or by calling :func:`configure_logging` once
at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

from . import config

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[int, str]] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the ``roswire`` logger.

    - *level* defaults to :data:`roswire.config.log_level`.
    - *stream* defaults to stderr.
    - Calling this again replaces the previous handler instead of adding
      a duplicate.

    Returns the configured ``roswire`` logger.
    """

    if level is None:
        level = config.log_level

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError("unknown log level: %s" % (level,))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger("roswire")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    return root
