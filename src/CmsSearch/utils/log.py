"""Package logger and its one-shot setup for CLI commands.

Records render as ``mm-dd HH:MM:SS [LVL] message`` with a four-letter level
(DEBG/INFO/WARN/ERRO). The console handler writes to stderr so that search
results on stdout can be piped.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

log = logging.getLogger("CmsSearch")

_FORMAT = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"


class _LevelAbbrevFilter(logging.Filter):
    """Attach ``levelabbr`` to each record passing through a handler."""

    _ABBREV = {
        logging.DEBUG: "DEBG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERRO",
        logging.CRITICAL: "ERRO",
    }

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.levelabbr = self._ABBREV.get(record.levelno, record.levelname[:4])
        return True


def _prepare(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.addFilter(_LevelAbbrevFilter())
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _log_file_path(log_dir: str, action: str) -> Path:
    # log/<action>/<action>_<mmddHHMMSS>.log
    directory = Path(log_dir or "log") / action
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{action}_{datetime.now():%m%d%H%M%S}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Replace the handlers on the ``CmsSearch`` logger.

    Args:
        level: Console level name; unknown names fall back to INFO.
        action: Command name. Required for file logging.
        log_to_file: Also write every record, DEBUG included, to a file.
        log_dir: Base directory for log files.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO

    log.handlers.clear()
    log.addHandler(_prepare(logging.StreamHandler(), console_level))
    if log_to_file and action:
        file_handler = logging.FileHandler(_log_file_path(log_dir, action), encoding="utf-8")
        log.addHandler(_prepare(file_handler, logging.DEBUG))
    log.setLevel(min(logging.DEBUG, console_level))
    log.propagate = False
