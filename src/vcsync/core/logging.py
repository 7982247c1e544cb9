from __future__ import annotations

import logging
import sys
from typing import IO

from pythonjsonlogger import jsonlogger

from vcsync.core.config import settings


def configure_logging(level: str | None = None, stream: IO[str] | None = None) -> None:
    """Route every logger through one JSON handler.

    The library modules only create ``vcsync.*`` loggers; the embedding
    reconciler decides when to call this.
    """
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )
    root.handlers = [handler]
