"""Console logging configuration for tasklist."""

import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Configure the root logger with a single stderr handler.

    Existing root handlers are removed first, so calling this again only
    changes the level and target stream.

    Args:
        level: Level number or name (e.g. "DEBUG")
        stream: Stream to log to. If None, uses sys.stderr.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
