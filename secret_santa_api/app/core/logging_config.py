"""
Logging setup for the Secret Santa API.

Everything goes through the standard library root logger.  The API
process writes to stderr and, when ``LOG_FILE`` is configured, to a
file as well.  Uvicorn's per-request access log is lowered to warnings
because the service logs each mutation itself.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet_loggers: Iterable[str] = ("uvicorn.access",),
) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Optional path of a file that receives the same records as the
        console.
    quiet_loggers : Iterable[str]
        Logger names capped at ``WARNING``.
    """
    root = logging.getLogger()
    if root.handlers:
        # pytest and repeated create_app() calls install handlers first
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
