"""
Logging configuration for the Contact Book API.

``setup_logging`` installs a console handler (and optionally a file
handler) on the root logger the first time it is called.  Later calls
are no‑ops, so building several apps in one process (as the tests do)
does not duplicate output.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _with_formatter(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Optional file receiving the same records as the console.
        Relative paths are resolved against the working directory.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(_with_formatter(logging.StreamHandler()))
    if logfile:
        path = Path(logfile).resolve()
        root.addHandler(_with_formatter(logging.FileHandler(path, encoding="utf-8")))
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
