"""Console logging for the check-in desk."""

from __future__ import annotations

import logging

DESK_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Route rollcall's loggers to the console, timestamped to the second.

    Leaves an already configured root logger alone, so a host application or
    the test runner keeps its own handlers.
    """

    logging.basicConfig(level=level, format=DESK_LOG_FORMAT, datefmt="%H:%M:%S")
