"""
Logging setup shared by the API server and the dashboard client.

Both halves log through the root logger with one line format.  The
server configures it in ``create_app``; the client in
``catalog_dashboard.client.create_controller``.  Single loggers can be
given their own level, which is how the DEBUG ``[Cache]`` trace of the
client cache is switched on (``CACHE_LOG_LEVEL=DEBUG``) without making
the rest of the process verbose.
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CACHE_LOGGER = "catalog_dashboard.client.cache"


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give ``default``."""
    if not name:
        return default
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else default


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    logger_levels: Optional[Mapping[str, str]] = None,
) -> None:
    """Configure logging for the process.

    Parameters
    ----------
    level : str
        Root level name, case insensitive.  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Extra file to log to.
    logger_levels : Optional[Mapping[str, str]]
        Per‑logger level names, e.g. ``{CACHE_LOGGER: "DEBUG"}``.  These
        are applied on every call, also when the root logger was set up
        before.
    """
    for name, logger_level in (logger_levels or {}).items():
        if logger_level:
            logging.getLogger(name).setLevel(level_from_name(logger_level))

    root = logging.getLogger()
    if root.handlers:
        # Set up already (server and client in one process, or pytest).
        return

    root.setLevel(level_from_name(level))
    for handler in _build_handlers(logfile):
        root.addHandler(handler)
