"""Logging integration for chained errors.

``ChainedErrorFormatter`` renders the verbose ``%+v`` report of an exception
attached to a log record (``logger.exception(...)`` or ``exc_info=...``)
ahead of the usual traceback. Values passed as ordinary log arguments keep
their compact ``str()`` form.

Keep it lightweight: stdlib logging only. The package installs no handlers
unless ``configure_logging`` is called.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
import sys
from types import TracebackType
from typing import TextIO

from errchain.constants import LOG_LEVEL_ENV
from errchain.formatting.printer import sprintf
from errchain.formatting.state import Formatter

__all__ = [
    "ChainedErrorFormatter",
    "configure_logging",
]

_ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class ChainedErrorFormatter(logging.Formatter):
    """logging.Formatter that expands Formatter exceptions into a full report.

    Args:
        fmt: Record format (see logging.Formatter)
        datefmt: Date format (see logging.Formatter)
        include_traceback: Append the standard traceback after the report
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        include_traceback: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.include_traceback = include_traceback

    def formatException(self, ei: _ExcInfo | tuple[None, None, None]) -> str:  # noqa: N802
        exc = ei[1]
        if not isinstance(exc, Formatter):
            return super().formatException(ei)

        report = sprintf("%+v", exc).rstrip("\n")
        if not self.include_traceback:
            return report
        return report + "\n" + super().formatException(ei)


def configure_logging(
    *,
    level: str | int | None = None,
    stream: TextIO | None = None,
    include_traceback: bool = True,
) -> logging.Handler:
    """Attach a stream handler with ChainedErrorFormatter to the errchain logger.

    - level: "INFO"/"DEBUG" or a logging level int. Defaults to the
      ERRCHAIN_LOG_LEVEL environment variable, then WARNING.
    - stream: Defaults to sys.stderr.

    Returns:
        The installed handler, so callers can remove it again.

    Raises:
        ValueError: If the level name is not a registered logging level
    """
    lvl: str | int = level if level is not None else os.getenv(LOG_LEVEL_ENV, "WARNING")
    if isinstance(lvl, str):
        levels = logging.getLevelNamesMapping()
        name = lvl.strip().upper()
        if name not in levels:
            msg = f"Unknown log level {lvl!r}; expected one of {', '.join(levels)}"
            raise ValueError(msg)
        lvl = levels[name]

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        ChainedErrorFormatter(DEFAULT_LOG_FORMAT, include_traceback=include_traceback)
    )

    package_logger = logging.getLogger("errchain")
    package_logger.setLevel(lvl)
    package_logger.addHandler(handler)
    return handler
