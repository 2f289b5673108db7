from __future__ import annotations

import logging
import sys

_HANDLER_MARK = "_todocli_handler"


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Send todocli logs to stderr so stdout stays clean for command output.

    Only handlers installed by a previous call are replaced; anything else
    attached to the logger (e.g. test capture) is left alone.
    """
    logger = logging.getLogger("todocli")
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    setattr(ch, _HANDLER_MARK, True)
    logger.addHandler(ch)
