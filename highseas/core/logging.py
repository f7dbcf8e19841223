"""
High Seas - logging setup.

``configure_logging()`` installs one stdout handler on the root logger; call
it once from the process entry point (``highseas.app`` does this).  Library
modules only ever do ``logger = logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Optional

_CONFIGURED = False

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def configure_logging(
    level: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    force: bool = False,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Log level name.  Falls back to ``LOG_LEVEL``, then ``INFO``.
        Unknown names resolve to ``INFO``.
    force:
        Re-run the setup even if it already happened.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    root.setLevel(resolved)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
        root.addHandler(handler)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _CONFIGURED = True


def elapsed_ms(start: float) -> float:
    """Milliseconds since ``start`` (a ``time.perf_counter()`` reading)."""
    return (time.perf_counter() - start) * 1000.0
