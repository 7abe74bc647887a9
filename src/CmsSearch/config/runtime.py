"""Logging configuration (``log`` section)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CmsSearch.config.common import required, section

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Validated logging settings.

    Attributes:
        level: Console log level name, upper-case.
        to_file: Whether each command also writes a log file.
        dir: Base directory for log files.
    """

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    log_section = section(raw, "log")
    return RuntimeConfig(
        level=required(log_section, "log.level", str).strip().upper(),
        to_file=required(log_section, "log.to_file", bool),
        dir=required(log_section, "log.dir", str),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in LOG_LEVELS:
        raise ValueError(f"log.level must be one of {', '.join(LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is true")
